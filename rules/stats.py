"""
统计计算 - 节奏 (pace)、效率、剩余可用提示、双弃检测

所有函数都是纯函数, 互相之间没有共享状态, 调用顺序不影响结果
"""
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from core.cards import CardState
from core.constants import MAX_CLUE_NUM
from core.notes import CardNote
from core.state import GameState, PaceRisk, StackDirection
from core.variants import StackAssignmentKind, Variant

from . import card as card_rules
from . import clue_tokens as clue_tokens_rules
from . import deck as deck_rules
from . import reversible as reversible_rules
from . import sudoku as sudoku_rules
from .hand import is_hand_locked
from .turn import get_next_player_index


# 各堆分配算法: (deck, directions, starts, variant) -> 每个花色的最高分
_MAX_SCORE_SOLVERS: Dict[StackAssignmentKind, Callable[..., Tuple[int, ...]]] = {
    StackAssignmentKind.DEFAULT: lambda deck, directions, starts, variant: (
        reversible_rules.get_max_score_per_stack(deck, directions, variant)
    ),
    StackAssignmentKind.REVERSIBLE: lambda deck, directions, starts, variant: (
        reversible_rules.get_max_score_per_stack(deck, directions, variant)
    ),
    StackAssignmentKind.SUDOKU: lambda deck, directions, starts, variant: (
        sudoku_rules.get_max_score_per_stack(deck, starts, variant)
    ),
}


def get_max_score_per_stack(
    deck: Sequence[CardState],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
) -> Tuple[int, ...]:
    """
    每个花色的最大可达分数 (按变体类型分派)

    Args:
        deck: 牌状态
        play_stack_directions: 各花色方向
        play_stack_starts: 各花色起点 (数独)
        variant: 变体

    Returns:
        每个花色的最高分
    """
    solver = _MAX_SCORE_SOLVERS[variant.stack_assignment_kind]
    return solver(deck, play_stack_directions, play_stack_starts, variant)


def _get_max_discards_before_final_round(
    cards_to_play: int,
    deck_size: int,
    end_game_length: int,
) -> int:
    if cards_to_play <= end_game_length + 1:
        return deck_size - 1
    if cards_to_play <= end_game_length + deck_size:
        return end_game_length + deck_size - cards_to_play
    return 0


def _get_max_plays_during_final_round(cards_to_play: int, end_game_length: int) -> int:
    if cards_to_play < end_game_length + 1:
        return cards_to_play
    return end_game_length + 1


def _get_max_plays(cards_to_play: int, deck_size: int, end_game_length: int) -> int:
    if cards_to_play <= end_game_length + deck_size:
        return cards_to_play
    return end_game_length + deck_size


def get_pace(
    score: int,
    deck_size: int,
    max_score: int,
    end_game_length: int,
    game_over: bool,
) -> Optional[int]:
    """
    还能弃多少张牌而不损失最高分

    Returns:
        pace, 游戏结束或牌堆为空时为 None
    """
    if game_over:
        return None
    if deck_size <= 0:
        return None
    return score + deck_size - max_score + end_game_length


def get_pace_risk(current_pace: Optional[int], num_players: int) -> PaceRisk:
    """
    当前弃牌的风险

    先检查 High 再检查 Medium, 两个公式来源不同, 不能合并
    """
    if current_pace is None:
        return PaceRisk.LOW

    if current_pace <= 0:
        return PaceRisk.ZERO

    # 考虑人数的 "残局" 估计
    if current_pace - num_players + num_players // 2 < 0:
        return PaceRisk.HIGH

    # 不考虑人数的保守估计
    if current_pace - num_players < 0:
        return PaceRisk.MEDIUM

    return PaceRisk.LOW


def get_starting_deck_size(num_players: int, cards_per_hand: int, variant: Variant) -> int:
    """发完起手牌后的牌堆张数"""
    total_cards = deck_rules.get_total_cards_in_deck(variant)
    return total_cards - cards_per_hand * num_players


def get_starting_pace(deck_size: int, max_score: int, end_game_length: int) -> int:
    return end_game_length + deck_size - max_score


def get_cards_gotten(
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    playing: bool,
    shadowing: bool,
    max_score: int,
    variant: Variant,
) -> int:
    """
    已 "拿到" 的牌数

    - 已打出的牌
    - "Throw It in a Hole" 中 (对局或跟随视角下) 失误出牌也算打出
    - 手牌中被提示过且不是已知垃圾的牌

    Returns:
        拿到的牌数, 不超过 max_score
    """
    cards_gotten = 0
    for card in deck:
        if card.is_played or (
            card.is_discarded
            and card.is_misplayed
            and variant.throw_it_in_a_hole
            and (playing or shadowing)
        ):
            cards_gotten += 1
        elif (
            card.in_hand
            and card_rules.is_card_clued(card)
            and not card_rules.is_all_card_possibilities_trash(
                card,
                deck,
                play_stacks,
                play_stack_directions,
                play_stack_starts,
                variant,
            )
        ):
            cards_gotten += 1

    return min(cards_gotten, max_score)


def _get_cards_gotten_by_notes_adjustment(note: Optional[CardNote], card: CardState) -> int:
    if note is None:
        return 0

    is_clued_for_real = card_rules.is_card_clued(card)
    if is_clued_for_real:
        return -1 if note.unclued or note.known_trash else 0

    is_clued_by_notes = (note.clued or note.finessed) and not note.unclued and not note.known_trash
    return 1 if is_clued_by_notes else 0


def get_cards_gotten_by_notes(
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
    notes: Sequence[Optional[CardNote]],
) -> int:
    """
    笔记与真实提示不一致带来的修正值

    笔记说 "未提示"/"已知垃圾" 的已提示牌记 -1, 笔记说 "已提示"/"飞牌" 的未提示牌记 +1
    """
    total = 0
    for order, card in enumerate(deck):
        if not card.in_hand:
            continue
        if card_rules.is_all_card_possibilities_trash(
            card,
            deck,
            play_stacks,
            play_stack_directions,
            play_stack_starts,
            variant,
        ):
            continue
        note = notes[order] if order < len(notes) else None
        total += _get_cards_gotten_by_notes_adjustment(note, card)
    return total


def get_clues_still_usable_not_rounded(
    score: int,
    score_per_stack: Sequence[int],
    max_score_per_stack: Sequence[int],
    stack_size: int,
    deck_size: int,
    end_game_length: int,
    discard_value: float,
    suit_value: float,
    current_clues: float,
) -> Optional[float]:
    """
    从当前局面起, 仍能拿到最高分的前提下最多还能用多少提示

    = 最后一轮前的弃牌次数 × discard_value
      + 最后一轮前能完成的花色数 × suit_value
      + 当前提示数

    Raises:
        ValueError: score_per_stack 与 max_score_per_stack 长度不同,
            或 discard_value < suit_value

    Returns:
        未取整的提示数, 牌堆为空时为 None
    """
    if len(score_per_stack) != len(max_score_per_stack):
        raise ValueError(
            "Failed to calculate efficiency: score_per_stack must have the same length as max_score_per_stack."
        )

    # 弃牌的价值不低于完成花色时, 尽量多弃牌才是最优
    if discard_value < suit_value:
        raise ValueError(
            "Cannot calculate efficiency in variants where discarding gives fewer clues than completing suits."
        )

    if deck_size <= 0:
        return None

    max_score = sum(max_score_per_stack)
    missing_score = max_score - score

    max_discards_before_final_round = _get_max_discards_before_final_round(
        missing_score, deck_size, end_game_length,
    )
    clues_from_discards = max_discards_before_final_round * discard_value

    clues_from_suits = 0
    if suit_value > 0:
        plays_during_final_round = _get_max_plays_during_final_round(missing_score, end_game_length)
        min_plays_before_final_round = (
            _get_max_plays(missing_score, deck_size, end_game_length) - plays_during_final_round
        )

        missing_cards_per_completable_suit: List[int] = sorted(
            stack_max_score - stack_score
            for stack_score, stack_max_score in zip(score_per_stack, max_score_per_stack)
            if stack_max_score == stack_size and stack_score < stack_size
        )

        cards_played = 0
        suits_completed_before_final_round = 0
        for missing_cards_in_suit in missing_cards_per_completable_suit:
            if cards_played + missing_cards_in_suit > min_plays_before_final_round:
                break
            cards_played += missing_cards_in_suit
            suits_completed_before_final_round += 1

        clues_from_suits = suits_completed_before_final_round * suit_value

    return clues_from_discards + clues_from_suits + current_clues


def get_clues_still_usable(
    score: int,
    score_per_stack: Sequence[int],
    max_score_per_stack: Sequence[int],
    stack_size: int,
    deck_size: int,
    end_game_length: int,
    discard_value: float,
    suit_value: float,
    current_clues: float,
) -> Optional[int]:
    """向下取整的版本 (半个提示无法使用)"""
    result = get_clues_still_usable_not_rounded(
        score,
        score_per_stack,
        max_score_per_stack,
        stack_size,
        deck_size,
        end_game_length,
        discard_value,
        suit_value,
        current_clues,
    )
    return None if result is None else math.floor(result)


def get_starting_clues_usable(end_game_length: int, deck_size: int, variant: Variant) -> int:
    """
    开局时整局最多可用的提示数

    Raises:
        ValueError: 起始牌堆为空
    """
    num_suits = len(variant.suits)
    starting_clues = get_clues_still_usable(
        0,
        (0,) * num_suits,
        (variant.stack_size,) * num_suits,
        variant.stack_size,
        deck_size,
        end_game_length,
        clue_tokens_rules.discard_value(variant),
        clue_tokens_rules.suit_value(variant),
        MAX_CLUE_NUM,
    )
    if starting_clues is None:
        raise ValueError("The starting clues usable was None.")
    return starting_clues


def get_min_efficiency(
    num_players: int,
    end_game_length: int,
    variant: Variant,
    cards_per_hand: int,
) -> float:
    """赢下该变体所需的最低效率: 最高分 / 整局可用提示数"""
    deck_size = get_starting_deck_size(num_players, cards_per_hand, variant)
    total_clues = get_starting_clues_usable(end_game_length, deck_size, variant)
    return variant.max_score / total_clues


def get_efficiency(cards_gotten: int, potential_clues_lost: float) -> float:
    """拿到的牌 / 消耗或损失的提示 (调用方负责排除分母为 0)"""
    return cards_gotten / potential_clues_lost


def get_future_efficiency(state: GameState) -> Optional[float]:
    """
    剩余所需效率

    Returns:
        (max_score - cards_gotten) / clues_still_usable; 没有可用提示估计时为 None,
        剩余可用提示为 0 时为无穷大
    """
    clues_still_usable = state.stats.clues_still_usable
    if clues_still_usable is None:
        return None

    cards_not_gotten = state.stats.max_score - state.stats.cards_gotten
    if clues_still_usable == 0:
        return math.inf
    return cards_not_gotten / clues_still_usable


def get_double_discard_card(
    order_of_discarded_card: int,
    state: GameState,
    variant: Variant,
) -> Optional[int]:
    """
    弃牌后是否形成 "双弃" 局面: 这种牌只剩最后一张且仍需要打出

    Args:
        order_of_discarded_card: 刚被弃的牌
        state: 弃牌后的状态 (当前玩家仍为弃牌者)
        variant: 变体

    Returns:
        被弃牌的 order, 不构成双弃时为 None
    """
    card_discarded = state.deck[order_of_discarded_card]

    if state.turn.is_game_over:
        return None

    # 下一位玩家手牌全部被提示过时不会弃牌
    next_player_index = get_next_player_index(
        state.turn.current_player_index,
        len(state.hands),
        state.turn.play_order_inverted,
    )
    if is_hand_locked(state.hands[next_player_index], state.deck):
        return None

    if card_discarded.identity is None:
        return None

    suit_index, rank = card_discarded.suit_index, card_discarded.rank
    if not card_rules.is_card_needs_to_be_played(
        suit_index,
        rank,
        state.deck,
        state.play_stacks,
        state.play_stack_directions,
        state.play_stack_starts,
        variant,
    ):
        return None

    # 其他玩家手中有一张被提示完全确定的同种牌
    for card in state.deck:
        if (
            card.order != card_discarded.order
            and card.suit_index == suit_index
            and card.rank == rank
            and card.in_hand
            and len(card.possible_cards_from_clues) == 1
        ):
            return None

    suit = variant.suits[suit_index]
    num_copies_total = deck_rules.get_num_copies_of_card(suit, rank, variant)
    num_discarded = deck_rules.get_num_discarded_copies_of_card(state.deck, suit_index, rank)

    if num_copies_total == num_discarded + 1:
        return order_of_discarded_card
    return None
