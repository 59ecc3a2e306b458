"""
牌组规则

牌组组成由变体目录驱动, 不在别处硬编码张数
"""
from typing import Sequence
import numpy as np

from core.cards import CardState
from core.constants import START_CARD_RANK
from core.variants import Suit, Variant


def get_num_copies_of_card(suit: Suit, rank: int, variant: Variant) -> int:
    """
    某种牌 (花色, 牌面值) 在牌组中的张数

    Args:
        suit: 花色
        rank: 牌面值
        variant: 变体

    Returns:
        张数
    """
    if suit.one_of_each:
        return 1

    if variant.critical_rank == rank:
        return 1

    if variant.sudoku:
        return 2

    if rank == 1:
        # "Up or Down" 与倒序花色只有一张 1
        if variant.up_or_down or suit.reversed:
            return 1
        return 3

    if rank in (2, 3, 4):
        return 2

    if rank == 5:
        if suit.reversed:
            return 3
        return 1

    if rank == START_CARD_RANK and variant.up_or_down:
        return 1

    raise ValueError(f"Unknown rank {rank} in variant: {variant.name}")


def get_copy_counts(variant: Variant) -> np.ndarray:
    """
    花色×牌面值 的张数矩阵

    Returns:
        (num_suits, num_ranks) 整数数组, 列顺序与 variant.ranks 相同
    """
    counts = np.zeros((len(variant.suits), len(variant.ranks)), dtype=np.int64)
    for suit_index, suit in enumerate(variant.suits):
        for rank_index, rank in enumerate(variant.ranks):
            counts[suit_index, rank_index] = get_num_copies_of_card(suit, rank, variant)
    return counts


def get_total_cards_in_deck(variant: Variant) -> int:
    """牌组总张数"""
    return int(get_copy_counts(variant).sum())


def get_num_discarded_copies_of_card(
    deck: Sequence[CardState],
    suit_index: int,
    rank: int,
) -> int:
    """已进入弃牌堆 (包括失误出牌) 的同种牌张数"""
    return sum(
        1
        for card in deck
        if card.is_discarded and card.suit_index == suit_index and card.rank == rank
    )


def get_discard_counts(deck: Sequence[CardState], variant: Variant) -> np.ndarray:
    """
    花色×牌面值 的弃牌张数矩阵

    Returns:
        (num_suits, num_ranks) 整数数组
    """
    counts = np.zeros((len(variant.suits), len(variant.ranks)), dtype=np.int64)
    for card in deck:
        if card.is_discarded and card.identity is not None:
            counts[card.suit_index, variant.rank_index(card.rank)] += 1
    return counts


def get_all_discarded(deck: Sequence[CardState], variant: Variant) -> np.ndarray:
    """
    每种牌是否已全部被弃

    Returns:
        (num_suits, num_ranks) 布尔数组
    """
    return get_discard_counts(deck, variant) >= get_copy_counts(variant)


def get_public_counts(deck: Sequence[CardState], variant: Variant) -> np.ndarray:
    """已公开 (打出或弃掉) 的每种牌张数"""
    counts = np.zeros((len(variant.suits), len(variant.ranks)), dtype=np.int64)
    for card in deck:
        if (card.is_played or card.is_discarded) and card.identity is not None:
            counts[card.suit_index, variant.rank_index(card.rank)] += 1
    return counts
