"""
动作类型定义

动作日志是推导整局状态的唯一输入, 来源 (实时对局/录像/观战) 不做区分。
序列化格式与 hanab.live 客户端的 gameAction 消息一致 (camelCase 键)。
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from .state import EndCondition


class ActionType(IntEnum):
    """动作类型"""
    DRAW = 0           # 抽牌
    PLAY = 1           # 成功出牌
    DISCARD = 2        # 弃牌 (failed=True 表示失误出牌)
    CLUE = 3           # 提示
    CARD_IDENTITY = 4  # 公开身份 (例如结束时揭示)
    GAME_OVER = 5      # 游戏结束
    NOTE = 6           # 玩家笔记 (不影响真实对局)


class ClueType(IntEnum):
    """提示类型"""
    COLOR = 0
    RANK = 1


@dataclass(frozen=True, slots=True)
class Clue:
    """
    一次提示的内容

    Attributes:
        type: 颜色或数字
        value: 颜色索引 (variant.clue_colors) 或牌面值
    """
    type: ClueType
    value: int

    @classmethod
    def color(cls, color_index: int) -> 'Clue':
        return cls(type=ClueType.COLOR, value=color_index)

    @classmethod
    def rank(cls, rank: int) -> 'Clue':
        return cls(type=ClueType.RANK, value=rank)


def _suit_from_wire(value: Optional[int]) -> Optional[int]:
    # 服务器用 -1 表示未知
    if value is None or value < 0:
        return None
    return value


def _suit_to_wire(value: Optional[int]) -> int:
    return -1 if value is None else value


@dataclass(frozen=True, slots=True)
class DrawAction:
    """抽牌 (观察者看不到的牌 suit_index/rank 为 None)"""
    action_type: ClassVar[ActionType] = ActionType.DRAW
    player_index: int
    order: int
    suit_index: Optional[int] = None
    rank: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "type": "draw",
            "playerIndex": self.player_index,
            "order": self.order,
            "suitIndex": _suit_to_wire(self.suit_index),
            "rank": _suit_to_wire(self.rank),
        }


@dataclass(frozen=True, slots=True)
class PlayAction:
    """成功出牌"""
    action_type: ClassVar[ActionType] = ActionType.PLAY
    player_index: int
    order: int
    suit_index: int
    rank: int

    def to_dict(self) -> dict:
        return {
            "type": "play",
            "playerIndex": self.player_index,
            "order": self.order,
            "suitIndex": self.suit_index,
            "rank": self.rank,
        }


@dataclass(frozen=True, slots=True)
class DiscardAction:
    """弃牌; failed=True 表示失误出牌 (同时记一次失误)"""
    action_type: ClassVar[ActionType] = ActionType.DISCARD
    player_index: int
    order: int
    suit_index: Optional[int]
    rank: Optional[int]
    failed: bool = False

    def to_dict(self) -> dict:
        return {
            "type": "discard",
            "playerIndex": self.player_index,
            "order": self.order,
            "suitIndex": _suit_to_wire(self.suit_index),
            "rank": _suit_to_wire(self.rank),
            "failed": self.failed,
        }


@dataclass(frozen=True, slots=True)
class ClueAction:
    """
    提示

    Attributes:
        giver: 提示者
        target: 被提示者
        clue: 提示内容
        touched: 被碰到的牌 (order)
    """
    action_type: ClassVar[ActionType] = ActionType.CLUE
    giver: int
    target: int
    clue: Clue
    touched: Tuple[int, ...]

    def to_dict(self) -> dict:
        return {
            "type": "clue",
            "giver": self.giver,
            "target": self.target,
            "clue": {"type": int(self.clue.type), "value": self.clue.value},
            "list": list(self.touched),
        }


@dataclass(frozen=True, slots=True)
class CardIdentityAction:
    """公开某张牌的身份"""
    action_type: ClassVar[ActionType] = ActionType.CARD_IDENTITY
    order: int
    suit_index: Optional[int]
    rank: Optional[int]

    def to_dict(self) -> dict:
        return {
            "type": "cardIdentity",
            "order": self.order,
            "suitIndex": _suit_to_wire(self.suit_index),
            "rank": _suit_to_wire(self.rank),
        }


@dataclass(frozen=True, slots=True)
class GameOverAction:
    """游戏结束"""
    action_type: ClassVar[ActionType] = ActionType.GAME_OVER
    end_condition: EndCondition
    player_index: int

    def to_dict(self) -> dict:
        return {
            "type": "gameOver",
            "endCondition": int(self.end_condition),
            "playerIndex": self.player_index,
        }


@dataclass(frozen=True, slots=True)
class NoteAction:
    """玩家对某张牌写的笔记 (只用于复盘)"""
    action_type: ClassVar[ActionType] = ActionType.NOTE
    order: int
    text: str

    def to_dict(self) -> dict:
        return {"type": "note", "order": self.order, "text": self.text}


GameAction = Union[
    DrawAction,
    PlayAction,
    DiscardAction,
    ClueAction,
    CardIdentityAction,
    GameOverAction,
    NoteAction,
]


def action_from_dict(d: dict) -> GameAction:
    """
    从 hanab.live 风格的字典解析动作

    Args:
        d: 如 {"type": "draw", "playerIndex": 0, "order": 3, "suitIndex": 1, "rank": 2}

    Returns:
        动作对象

    Raises:
        ValueError: 未知的动作类型或缺少字段
    """
    action_type = d.get("type")
    try:
        if action_type == "draw":
            return DrawAction(
                player_index=d["playerIndex"],
                order=d["order"],
                suit_index=_suit_from_wire(d.get("suitIndex")),
                rank=_suit_from_wire(d.get("rank")),
            )
        if action_type == "play":
            return PlayAction(
                player_index=d["playerIndex"],
                order=d["order"],
                suit_index=d["suitIndex"],
                rank=d["rank"],
            )
        if action_type == "discard":
            return DiscardAction(
                player_index=d["playerIndex"],
                order=d["order"],
                suit_index=_suit_from_wire(d.get("suitIndex")),
                rank=_suit_from_wire(d.get("rank")),
                failed=d.get("failed", False),
            )
        if action_type == "clue":
            return ClueAction(
                giver=d["giver"],
                target=d["target"],
                clue=Clue(type=ClueType(d["clue"]["type"]), value=d["clue"]["value"]),
                touched=tuple(d["list"]),
            )
        if action_type == "cardIdentity":
            return CardIdentityAction(
                order=d["order"],
                suit_index=_suit_from_wire(d.get("suitIndex")),
                rank=_suit_from_wire(d.get("rank")),
            )
        if action_type == "gameOver":
            return GameOverAction(
                end_condition=EndCondition(d["endCondition"]),
                player_index=d["playerIndex"],
            )
        if action_type == "note":
            return NoteAction(order=d["order"], text=d["text"])
    except KeyError as e:
        raise ValueError(f"Action {action_type!r} is missing field {e}") from e

    raise ValueError(f"Unknown action type: {action_type}")


def is_turn_ending(action: GameAction) -> bool:
    """出牌/弃牌/提示会结束当前玩家的回合"""
    return isinstance(action, (PlayAction, DiscardAction, ClueAction))
