"""
hanab.live JSON 对局导入

JSON 对局格式:
    {
        "players": ["Alice", "Bob"],
        "deck": [{"suitIndex": 0, "rank": 1}, ...],
        "actions": [{"type": 0, "target": 3, "value": 0}, ...],
        "options": {"variant": "No Variant"}
    }

动作类型: 0 出牌 (可能失误), 1 弃牌, 2 颜色提示, 3 数字提示, 4 游戏结束
"""
from dataclasses import replace
from enum import IntEnum
from pathlib import Path
from typing import List, Tuple, Union
import json
import logging

from core.actions import (
    Clue,
    ClueAction,
    DiscardAction,
    DrawAction,
    GameAction,
    GameOverAction,
    PlayAction,
)
from core.characters import get_character_by_name
from core.state import EndCondition, GameMetadata, GameOptions, GameState
from reducers import game_reducer, initial_game_state
from rules import clues as clue_rules
from rules import play_stacks as play_stacks_rules


logger = logging.getLogger(__name__)


class JSONActionType(IntEnum):
    """JSON 对局中的动作类型"""
    PLAY = 0
    DISCARD = 1
    COLOR_CLUE = 2
    RANK_CLUE = 3
    GAME_OVER = 4


def _require(d: dict, key: str, context: str):
    if key not in d:
        raise ValueError(f"Malformed JSON game: {context} is missing {key!r}")
    return d[key]


def metadata_from_json_game(game: dict) -> GameMetadata:
    """
    从 JSON 对局中读取元数据

    Raises:
        ValueError: 缺少字段, 或变体/角色未知
    """
    players = _require(game, "players", "game")
    options = game.get("options", {})

    character_assignments = ()
    characters = game.get("characters")
    if options.get("detrimentalCharacters") and characters:
        character_assignments = tuple(
            get_character_by_name(character["name"]).id for character in characters
        )

    if options.get("startingPlayer", 0) != 0:
        logger.warning(f"Ignoring startingPlayer {options['startingPlayer']}; player 0 starts.")

    game_options = GameOptions(
        num_players=len(players),
        variant_name=options.get("variant", "No Variant"),
        cards_per_hand=options.get("cardsPerHand"),
        detrimental_characters=bool(options.get("detrimentalCharacters", False)),
    )
    return GameMetadata(options=game_options, character_assignments=character_assignments)


class _JSONGameConverter:
    """边折叠边转换, 用当前状态判断出牌是否成功和提示碰到的牌"""

    def __init__(self, game: dict, metadata: GameMetadata):
        self.metadata = metadata
        self.deck = [
            (_require(card, "suitIndex", "deck entry"), _require(card, "rank", "deck entry"))
            for card in _require(game, "deck", "game")
        ]
        self.state: GameState = initial_game_state(metadata)
        self.actions: List[GameAction] = []
        self.next_order = 0

    def emit(self, action: GameAction):
        self.state = game_reducer(self.state, action, self.metadata)
        self.actions.append(action)

    def draw(self, player_index: int):
        if self.next_order >= len(self.deck):
            return
        suit_index, rank = self.deck[self.next_order]
        self.emit(DrawAction(
            player_index=player_index,
            order=self.next_order,
            suit_index=suit_index,
            rank=rank,
        ))
        self.next_order += 1

    def deal(self):
        for player_index in range(self.metadata.num_players):
            for _ in range(self.metadata.cards_per_hand):
                self.draw(player_index)

    def play_or_discard(self, json_type: JSONActionType, order: int):
        player_index = self.state.turn.current_player_index
        if player_index is None:
            raise ValueError(f"Malformed JSON game: card {order} acted on after the game ended")
        if order >= len(self.deck):
            raise ValueError(f"Malformed JSON game: card order {order} is out of range")
        suit_index, rank = self.deck[order]

        if json_type == JSONActionType.DISCARD:
            self.emit(DiscardAction(player_index, order, suit_index, rank))
        elif play_stacks_rules.is_playable(
            suit_index,
            rank,
            self.state.play_stacks,
            self.state.play_stack_directions,
            self.state.play_stack_starts,
            self.state.deck,
            self.metadata.variant,
        ):
            self.emit(PlayAction(player_index, order, suit_index, rank))
        else:
            logger.debug(f"Card {order} is not playable; recording a misplay")
            self.emit(DiscardAction(player_index, order, suit_index, rank, failed=True))

        self.draw(player_index)

    def clue(self, json_type: JSONActionType, target: int, value: int):
        giver = self.state.turn.current_player_index
        if giver is None:
            raise ValueError("Malformed JSON game: clue given after the game ended")
        clue = Clue.color(value) if json_type == JSONActionType.COLOR_CLUE else Clue.rank(value)
        if not clue_rules.is_valid_clue(clue, self.metadata.variant):
            raise ValueError(f"Malformed JSON game: invalid clue {clue} in variant {self.metadata.variant.name}")
        touched = clue_rules.get_touched_orders(
            self.state.hands[target], self.state.deck, clue, self.metadata.variant,
        )
        if not touched:
            logger.warning(f"Clue {clue} from player {giver} to player {target} touches no cards")
        self.emit(ClueAction(giver=giver, target=target, clue=clue, touched=touched))

    def convert(self, json_actions: List[dict]) -> List[GameAction]:
        self.deal()
        for i, json_action in enumerate(json_actions):
            context = f"action {i}"
            try:
                json_type = JSONActionType(_require(json_action, "type", context))
            except ValueError as e:
                raise ValueError(f"Malformed JSON game: {context} has an unknown type") from e
            target = _require(json_action, "target", context)

            if json_type in (JSONActionType.PLAY, JSONActionType.DISCARD):
                self.play_or_discard(json_type, target)
            elif json_type in (JSONActionType.COLOR_CLUE, JSONActionType.RANK_CLUE):
                self.clue(json_type, target, _require(json_action, "value", context))
            else:
                end_condition = EndCondition(json_action.get("value", EndCondition.NORMAL))
                self.emit(GameOverAction(end_condition=end_condition, player_index=target))
        return self.actions


def actions_from_json_game(game: dict) -> Tuple[GameMetadata, List[GameAction]]:
    """
    把 hanab.live JSON 对局转换为动作日志

    Args:
        game: 解析后的 JSON 对局

    Returns:
        (元数据, 动作日志), 日志包含起手发牌和每次出牌/弃牌后的抽牌

    Raises:
        ValueError: JSON 对局格式错误
    """
    metadata = metadata_from_json_game(game)
    converter = _JSONGameConverter(game, metadata)
    actions = converter.convert(_require(game, "actions", "game"))
    logger.debug(f"Converted {len(actions)} actions from a {metadata.num_players}-player game")
    return metadata, actions


def load_json_game(path: Union[str, Path]) -> Tuple[GameMetadata, List[GameAction]]:
    """从文件读取 JSON 对局"""
    with open(path, encoding="utf-8") as f:
        game = json.load(f)
    return actions_from_json_game(game)


def with_viewer(metadata: GameMetadata, playing: bool, shadowing: bool) -> GameMetadata:
    """以指定观察者视角复制元数据"""
    return replace(metadata, playing=playing, shadowing=shadowing)
