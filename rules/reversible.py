"""
可逆方向变体 ("Reversed" / "Up or Down") 的最大分数计算

普通变体也走这里: 向上的花色只需从 1 开始向上扫描
"""
from typing import Dict, Optional, Sequence, Tuple
import numpy as np

from core.cards import CardState
from core.constants import START_CARD_RANK
from core.state import StackDirection
from core.variants import Variant

from . import deck as deck_rules


def _discarded_map(all_discarded: np.ndarray, suit_index: int, variant: Variant) -> Dict[int, bool]:
    """某花色每个牌面值是否已全部被弃"""
    return {
        rank: bool(all_discarded[suit_index, rank_index])
        for rank_index, rank in enumerate(variant.ranks)
    }


def walk_up(all_discarded: Dict[int, bool], variant: Variant) -> int:
    """
    从底部向上扫描, 返回还能打出的张数

    Args:
        all_discarded: 牌面值 -> 是否已全部被弃
        variant: 变体
    """
    # 先检查该花色能否起步
    if variant.up_or_down:
        if all_discarded[1] and all_discarded[START_CARD_RANK]:
            return 0
    elif all_discarded[1]:
        return 0

    cards_that_can_still_be_played = 1
    for rank in range(2, variant.stack_size + 1):
        if all_discarded[rank]:
            break
        cards_that_can_still_be_played += 1

    return cards_that_can_still_be_played


def walk_down(all_discarded: Dict[int, bool], variant: Variant) -> int:
    """从顶部 (5) 向下扫描, 返回还能打出的张数"""
    top_rank = variant.stack_size
    if variant.up_or_down:
        if all_discarded[top_rank] and all_discarded[START_CARD_RANK]:
            return 0
    elif all_discarded[top_rank]:
        return 0

    cards_that_can_still_be_played = 1
    for rank in range(top_rank - 1, 0, -1):
        if all_discarded[rank]:
            break
        cards_that_can_still_be_played += 1

    return cards_that_can_still_be_played


def get_max_score_for_suit(
    suit_index: int,
    all_discarded: np.ndarray,
    direction: StackDirection,
    variant: Variant,
) -> int:
    discarded = _discarded_map(all_discarded, suit_index, variant)

    if direction == StackDirection.FINISHED:
        return variant.stack_size
    if direction == StackDirection.UNDECIDED:
        return max(walk_up(discarded, variant), walk_down(discarded, variant))
    if direction == StackDirection.DOWN:
        return walk_down(discarded, variant)
    return walk_up(discarded, variant)


def get_max_score_per_stack(
    deck: Sequence[CardState],
    play_stack_directions: Sequence[StackDirection],
    variant: Variant,
) -> Tuple[int, ...]:
    """
    每个花色的最大可达分数

    Args:
        deck: 牌状态
        play_stack_directions: 各花色方向
        variant: 变体

    Returns:
        每个花色的最高分
    """
    all_discarded = deck_rules.get_all_discarded(deck, variant)
    return tuple(
        get_max_score_for_suit(suit_index, all_discarded, play_stack_directions[suit_index], variant)
        for suit_index in range(len(variant.suits))
    )


def _position(rank: int, direction: StackDirection, variant: Variant) -> int:
    # 起始牌总是在第 0 位
    if rank == START_CARD_RANK:
        return 0
    if direction == StackDirection.DOWN:
        return variant.stack_size - rank
    return rank - 1


def is_card_needs_to_be_played(
    suit_index: int,
    rank: int,
    play_stack: Sequence[int],
    direction: StackDirection,
    all_discarded: np.ndarray,
    deck: Sequence[CardState],
    variant: Variant,
) -> bool:
    """
    按方向判断尚未打出的牌是否仍可能被打出

    调用方需先排除已打出的牌
    """
    if direction == StackDirection.FINISHED:
        return False

    if variant.up_or_down:
        if rank == START_CARD_RANK:
            # 起始牌只能作为第一张
            return not play_stack
        bottom_rank: Optional[int] = deck[play_stack[0]].rank if play_stack else None
        # 起始牌只替代所选方向上的第一张牌
        if bottom_rank == START_CARD_RANK:
            if direction == StackDirection.UP and rank == 1:
                return False
            if direction == StackDirection.DOWN and rank == variant.stack_size:
                return False

    discarded = _discarded_map(all_discarded, suit_index, variant)

    if direction == StackDirection.UNDECIDED:
        return (
            _position(rank, StackDirection.UP, variant) < walk_up(discarded, variant)
            or _position(rank, StackDirection.DOWN, variant) < walk_down(discarded, variant)
        )
    if direction == StackDirection.DOWN:
        return _position(rank, direction, variant) < walk_down(discarded, variant)
    return _position(rank, direction, variant) < walk_up(discarded, variant)
