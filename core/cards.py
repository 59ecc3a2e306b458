"""
牌的状态

每张实体牌按发牌顺序 (order) 编号, order 在整局中不变。
花色/牌面值在公开前为 None。
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .constants import LOCATION_DECK, LOCATION_DISCARD, LOCATION_PLAY_STACK
from .variants import Variant


# (花色索引, 牌面值)
SuitRank = Tuple[int, int]

# 玩家索引 (在手牌中) 或 "deck" / "playStack" / "discard"
CardLocation = Union[int, str]


@dataclass(frozen=True)
class CardState:
    """
    单张牌的不可变状态

    Attributes:
        order: 发牌顺序索引
        location: 当前位置
        suit_index: 花色索引 (未知为 None)
        rank: 牌面值 (未知为 None)
        possible_cards_from_clues: 仅根据提示推断的可能身份
        possible_cards: 结合公开的已打出/已弃牌后推断的可能身份
        positive_color_clues: 碰到该牌的颜色提示 (颜色索引)
        positive_rank_clues: 碰到该牌的数字提示
        num_positive_clues: 正向提示次数
        segment_drawn: 被抽到时的 segment
        segment_first_clued: 第一次被提示时的 segment
        segment_played: 打出时的 segment
        segment_discarded: 弃掉时的 segment
        is_misplayed: 是否为失误出牌 (进入弃牌堆)
        dealt_to_starting_hand: 是否为起手牌
    """
    order: int
    location: CardLocation = LOCATION_DECK
    suit_index: Optional[int] = None
    rank: Optional[int] = None
    possible_cards_from_clues: Tuple[SuitRank, ...] = ()
    possible_cards: Tuple[SuitRank, ...] = ()
    positive_color_clues: Tuple[int, ...] = ()
    positive_rank_clues: Tuple[int, ...] = ()
    num_positive_clues: int = 0
    segment_drawn: Optional[int] = None
    segment_first_clued: Optional[int] = None
    segment_played: Optional[int] = None
    segment_discarded: Optional[int] = None
    is_misplayed: bool = False
    dealt_to_starting_hand: bool = False

    @property
    def identity(self) -> Optional[SuitRank]:
        """已知身份, 未知返回 None"""
        if self.suit_index is None or self.rank is None:
            return None
        return (self.suit_index, self.rank)

    @property
    def in_hand(self) -> bool:
        # bool 也是 int 的子类, 位置永远不会是 bool
        return isinstance(self.location, int)

    @property
    def is_played(self) -> bool:
        return self.location == LOCATION_PLAY_STACK

    @property
    def is_discarded(self) -> bool:
        return self.location == LOCATION_DISCARD

    def revealed(self, suit_index: Optional[int], rank: Optional[int]) -> 'CardState':
        """公开身份后的新状态 (未给出的部分保持原值)"""
        suit_index = self.suit_index if suit_index is None else suit_index
        rank = self.rank if rank is None else rank
        if suit_index is None or rank is None:
            return replace(self, suit_index=suit_index, rank=rank)
        return replace(
            self,
            suit_index=suit_index,
            rank=rank,
            possible_cards_from_clues=((suit_index, rank),),
            possible_cards=((suit_index, rank),),
        )


def initial_card_state(order: int, variant: Variant) -> CardState:
    """牌堆中尚未抽出的牌: 所有身份均有可能"""
    identities = variant.all_identities()
    return CardState(
        order=order,
        possible_cards_from_clues=identities,
        possible_cards=identities,
    )
