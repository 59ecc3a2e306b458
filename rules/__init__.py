"""
Rules Layer - 纯规则函数 (不持有状态, 不做 I/O)

Modules:
    card: 单张牌的判断 (是否被提示、是否仍需打出、是否垃圾)
    deck: 牌组组成与弃牌计数
    clue_tokens: 提示数经济
    clues: 提示触碰
    hand: 手牌锁定、弃牌位
    turn: 下一位玩家、最后一轮长度
    play_stacks: 出牌堆方向与可出的牌
    reversible: 可逆方向变体的最高分
    sudoku: 数独变体的起点分配
    stats: 节奏、效率、双弃检测
"""
from . import card
from . import clue_tokens
from . import clues
from . import deck
from . import hand
from . import play_stacks
from . import reversible
from . import stats
from . import sudoku
from . import turn

from .card import (
    is_card_clued,
    is_card_in_player_hand,
    is_card_played,
    is_card_discarded,
    is_card_needs_to_be_played,
    is_all_card_possibilities_trash,
    is_card_critical,
)

from .clues import (
    touches_card,
    get_touched_orders,
    apply_clue_to_possibilities,
)

from .hand import (
    get_cards_per_hand,
    is_hand_locked,
    get_chop_index,
)

from .turn import (
    get_next_player_index,
    get_end_game_length,
    should_play_order_invert,
)

from .stats import (
    get_max_score_per_stack,
    get_pace,
    get_pace_risk,
    get_cards_gotten,
    get_cards_gotten_by_notes,
    get_clues_still_usable,
    get_clues_still_usable_not_rounded,
    get_efficiency,
    get_future_efficiency,
    get_double_discard_card,
    get_min_efficiency,
    get_starting_deck_size,
    get_starting_pace,
    get_starting_clues_usable,
)

__all__ = [
    # modules
    "card",
    "clue_tokens",
    "clues",
    "deck",
    "hand",
    "play_stacks",
    "reversible",
    "stats",
    "sudoku",
    "turn",
    # card
    "is_card_clued",
    "is_card_in_player_hand",
    "is_card_played",
    "is_card_discarded",
    "is_card_needs_to_be_played",
    "is_all_card_possibilities_trash",
    "is_card_critical",
    # clues
    "touches_card",
    "get_touched_orders",
    "apply_clue_to_possibilities",
    # hand
    "get_cards_per_hand",
    "is_hand_locked",
    "get_chop_index",
    # turn
    "get_next_player_index",
    "get_end_game_length",
    "should_play_order_invert",
    # stats
    "get_max_score_per_stack",
    "get_pace",
    "get_pace_risk",
    "get_cards_gotten",
    "get_cards_gotten_by_notes",
    "get_clues_still_usable",
    "get_clues_still_usable_not_rounded",
    "get_efficiency",
    "get_future_efficiency",
    "get_double_discard_card",
    "get_min_efficiency",
    "get_starting_deck_size",
    "get_starting_pace",
    "get_starting_clues_usable",
]
