"""
提示触碰规则

- 彩虹类花色被所有颜色提示碰到, 白色类不被任何颜色提示碰到
- 粉色类花色被所有数字提示碰到, 棕色类不被任何数字提示碰到
- "Up or Down" 的起始牌不被数字提示碰到
"""
from typing import Sequence, Tuple

from core.actions import Clue, ClueType
from core.cards import CardState, SuitRank
from core.constants import START_CARD_RANK
from core.variants import Variant


def touches_card(variant: Variant, clue: Clue, suit_index: int, rank: int) -> bool:
    """
    提示是否碰到 (花色, 牌面值) 这张牌

    Args:
        variant: 变体
        clue: 提示
        suit_index: 花色索引
        rank: 牌面值
    """
    suit = variant.suits[suit_index]

    if clue.type == ClueType.COLOR:
        if suit.no_clue_colors:
            return False
        if suit.all_clue_colors:
            return True
        color = variant.clue_colors[clue.value]
        return color in suit.clue_colors

    if suit.no_clue_ranks:
        return False
    if suit.all_clue_ranks:
        return True
    if rank == START_CARD_RANK:
        return False
    return rank == clue.value


def get_touched_orders(
    hand: Sequence[int],
    deck: Sequence[CardState],
    clue: Clue,
    variant: Variant,
) -> Tuple[int, ...]:
    """
    手牌中被提示碰到的牌

    Raises:
        ValueError: 手牌中有身份未知的牌
    """
    touched = []
    for order in hand:
        card = deck[order]
        if card.identity is None:
            raise ValueError(f"Cannot determine clue touch for card {order} with an unknown identity.")
        if touches_card(variant, clue, card.suit_index, card.rank):
            touched.append(order)
    return tuple(touched)


def apply_clue_to_possibilities(
    possibilities: Sequence[SuitRank],
    clue: Clue,
    positive: bool,
    variant: Variant,
) -> Tuple[SuitRank, ...]:
    """
    用一次提示过滤可能身份

    Args:
        possibilities: 当前可能身份
        clue: 提示
        positive: 这张牌是否被碰到

    Returns:
        过滤后的可能身份
    """
    return tuple(
        (suit_index, rank)
        for suit_index, rank in possibilities
        if touches_card(variant, clue, suit_index, rank) == positive
    )


def is_valid_clue(clue: Clue, variant: Variant) -> bool:
    """提示是否为该变体中可以给出的提示"""
    if clue.type == ClueType.COLOR:
        return 0 <= clue.value < len(variant.clue_colors)
    return clue.value in variant.clue_ranks
