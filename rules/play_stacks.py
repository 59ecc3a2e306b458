"""
出牌堆规则 - 方向、起始点、下一张可出的牌
"""
from typing import Optional, Sequence, Tuple

from core.cards import CardState
from core.constants import START_CARD_RANK
from core.state import StackDirection
from core.variants import Variant


def get_direction(
    suit_index: int,
    play_stack: Sequence[int],
    deck: Sequence[CardState],
    variant: Variant,
) -> StackDirection:
    """
    计算出牌堆方向

    Args:
        suit_index: 花色索引
        play_stack: 该花色出牌堆 (order 列表)
        deck: 牌状态
        variant: 变体

    Returns:
        StackDirection
    """
    if len(play_stack) == variant.stack_size:
        return StackDirection.FINISHED

    suit = variant.suits[suit_index]
    if not variant.up_or_down:
        return StackDirection.DOWN if suit.reversed else StackDirection.UP

    if not play_stack:
        return StackDirection.UNDECIDED

    bottom_rank = deck[play_stack[0]].rank
    if bottom_rank == 1:
        return StackDirection.UP
    if bottom_rank == 5:
        return StackDirection.DOWN

    # 起始牌在底部: 由第二张牌决定方向
    if len(play_stack) == 1:
        return StackDirection.UNDECIDED
    second_rank = deck[play_stack[1]].rank
    return StackDirection.UP if second_rank == 2 else StackDirection.DOWN


def get_stack_start(
    play_stack: Sequence[int],
    deck: Sequence[CardState],
    variant: Variant,
) -> Optional[int]:
    """数独变体中出牌堆的起始牌面值, 未开始 (或非数独) 为 None"""
    if not variant.sudoku or not play_stack:
        return None
    return deck[play_stack[0]].rank


def get_next_playable_ranks(
    suit_index: int,
    play_stack: Sequence[int],
    direction: StackDirection,
    play_stack_starts: Sequence[Optional[int]],
    deck: Sequence[CardState],
    variant: Variant,
) -> Tuple[int, ...]:
    """
    下一张可以打出的牌面值

    Returns:
        可出的牌面值元组 (已完成的花色为空)
    """
    if direction == StackDirection.FINISHED:
        return ()

    top_rank = deck[play_stack[-1]].rank if play_stack else None

    if variant.sudoku:
        if top_rank is None:
            used_starts = {
                start for i, start in enumerate(play_stack_starts)
                if start is not None and i != suit_index
            }
            return tuple(rank for rank in variant.ranks if rank not in used_starts)
        index = variant.rank_index(top_rank)
        return (variant.ranks[(index + 1) % variant.stack_size],)

    if direction == StackDirection.UNDECIDED:
        if top_rank is None:
            return (1, 5, START_CARD_RANK)
        # 只有起始牌
        return (2, 4)

    if direction == StackDirection.UP:
        if top_rank is None:
            return (1,)
        if top_rank == START_CARD_RANK:
            return (2,)
        return (top_rank + 1,)

    # DOWN
    if top_rank is None:
        return (5,)
    if top_rank == START_CARD_RANK:
        return (4,)
    return (top_rank - 1,)


def is_playable(
    suit_index: int,
    rank: int,
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    deck: Sequence[CardState],
    variant: Variant,
) -> bool:
    """这张牌现在打出是否成功"""
    return rank in get_next_playable_ranks(
        suit_index,
        play_stacks[suit_index],
        play_stack_directions[suit_index],
        play_stack_starts,
        deck,
        variant,
    )
