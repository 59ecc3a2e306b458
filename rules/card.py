"""
单张牌的规则判断

所有函数都是纯函数, 调用方负责传入有效的 order
"""
from typing import Optional, Sequence
import numpy as np

from core.cards import CardState
from core.state import StackDirection
from core.variants import StackAssignmentKind, Variant

from . import deck as deck_rules
from . import reversible as reversible_rules
from . import sudoku as sudoku_rules


def is_card_clued(card: CardState) -> bool:
    """至少有一次正向提示"""
    return card.num_positive_clues > 0


def is_card_in_player_hand(card: CardState) -> bool:
    return card.in_hand


def is_card_played(card: CardState) -> bool:
    return card.is_played


def is_card_discarded(card: CardState) -> bool:
    return card.is_discarded


def _is_already_played(
    suit_index: int,
    rank: int,
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
) -> bool:
    for order in play_stacks[suit_index]:
        card = deck[order]
        if card.suit_index == suit_index and card.rank == rank:
            return True
    return False


def _needs_to_be_played(
    suit_index: int,
    rank: int,
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
    all_discarded: np.ndarray,
) -> bool:
    if _is_already_played(suit_index, rank, deck, play_stacks):
        return False

    if variant.stack_assignment_kind == StackAssignmentKind.SUDOKU:
        return sudoku_rules.is_card_needs_to_be_played(
            suit_index, rank, play_stack_starts, all_discarded, variant,
        )

    return reversible_rules.is_card_needs_to_be_played(
        suit_index,
        rank,
        play_stacks[suit_index],
        play_stack_directions[suit_index],
        all_discarded,
        deck,
        variant,
    )


def is_card_needs_to_be_played(
    suit_index: int,
    rank: int,
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
) -> bool:
    """
    这种牌是否仍需要被打出

    Args:
        suit_index: 花色索引
        rank: 牌面值
        deck: 牌状态
        play_stacks: 出牌堆
        play_stack_directions: 方向
        play_stack_starts: 起点 (数独)
        variant: 变体

    Returns:
        尚未打出, 且前置牌没有全部被弃 (仍可达)
    """
    all_discarded = deck_rules.get_all_discarded(deck, variant)
    return _needs_to_be_played(
        suit_index,
        rank,
        deck,
        play_stacks,
        play_stack_directions,
        play_stack_starts,
        variant,
        all_discarded,
    )


def is_all_card_possibilities_trash(
    card: CardState,
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
    empathy: bool = False,
) -> bool:
    """
    这张牌的所有可能身份是否都已无用 (可安全弃掉)

    Args:
        card: 牌状态
        empathy: True 时只使用提示推断出的可能性, 忽略实际身份

    Returns:
        是否全部为垃圾牌
    """
    all_discarded = deck_rules.get_all_discarded(deck, variant)

    # 已知身份时直接判断
    if not empathy and card.identity is not None:
        return not _needs_to_be_played(
            card.suit_index,
            card.rank,
            deck,
            play_stacks,
            play_stack_directions,
            play_stack_starts,
            variant,
            all_discarded,
        )

    possibilities = card.possible_cards_from_clues if empathy else card.possible_cards
    return not any(
        _needs_to_be_played(
            suit_index,
            rank,
            deck,
            play_stacks,
            play_stack_directions,
            play_stack_starts,
            variant,
            all_discarded,
        )
        for suit_index, rank in possibilities
    )


def is_card_critical(
    suit_index: int,
    rank: int,
    deck: Sequence[CardState],
    play_stacks: Sequence[Sequence[int]],
    play_stack_directions: Sequence[StackDirection],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
) -> bool:
    """仍需要打出, 且只剩最后一张未被弃"""
    if not is_card_needs_to_be_played(
        suit_index,
        rank,
        deck,
        play_stacks,
        play_stack_directions,
        play_stack_starts,
        variant,
    ):
        return False

    suit = variant.suits[suit_index]
    num_copies = deck_rules.get_num_copies_of_card(suit, rank, variant)
    num_discarded = deck_rules.get_num_discarded_copies_of_card(deck, suit_index, rank)
    return num_copies - num_discarded == 1
