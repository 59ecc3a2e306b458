"""
Reducers Layer - 把动作日志折叠成游戏状态

Modules:
    initial_state: 初始状态
    cards: 牌状态
    hands: 手牌
    play_stacks: 出牌堆与弃牌堆
    clue_tokens: 提示数、失误、提示日志
    turn: 回合与结束条件
    notes: 玩家笔记
    stats: 统计
    game: 组合后的整局 reducer
"""
from .initial_state import initial_game_state

from .cards import cards_reducer
from .hands import hands_reducer
from .play_stacks import play_stacks_reducer
from .clue_tokens import clue_tokens_reducer
from .turn import turn_reducer
from .notes import notes_reducer
from .stats import stats_reducer, compute_stats

from .game import (
    game_reducer,
    fold_actions,
    SLICE_REDUCERS,
)

__all__ = [
    "initial_game_state",
    "cards_reducer",
    "hands_reducer",
    "play_stacks_reducer",
    "clue_tokens_reducer",
    "turn_reducer",
    "notes_reducer",
    "stats_reducer",
    "compute_stats",
    "game_reducer",
    "fold_actions",
    "SLICE_REDUCERS",
]
