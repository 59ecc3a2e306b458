"""
手牌规则
"""
from typing import Optional, Sequence

from core.cards import CardState
from core.constants import CARDS_PER_HAND

from .card import is_card_clued


def get_cards_per_hand(num_players: int) -> int:
    """
    按人数取默认手牌数

    Raises:
        ValueError: 不支持的人数
    """
    if num_players not in CARDS_PER_HAND:
        raise ValueError(f"Invalid number of players: {num_players}")
    return CARDS_PER_HAND[num_players]


def is_hand_locked(hand: Sequence[int], deck: Sequence[CardState]) -> bool:
    """手牌全部被提示过 (没有可弃的牌)"""
    return all(is_card_clued(deck[order]) for order in hand)


def get_chop_index(hand: Sequence[int], deck: Sequence[CardState]) -> Optional[int]:
    """
    最旧的未被提示的牌在手牌中的位置

    手牌最新的牌在最前, 所以从后往前找

    Returns:
        索引, 手牌锁定时为 None
    """
    for i in range(len(hand) - 1, -1, -1):
        if not is_card_clued(deck[hand[i]]):
            return i
    return None
