"""
整局 reducer - 按固定顺序组合各部分 reducer

顺序: 牌 -> 手牌 -> 出牌堆 -> 提示数 -> 回合 -> 笔记 -> 统计
后面的 reducer 读取前面已经更新过的值
"""
from typing import Iterable

from core.actions import (
    CardIdentityAction,
    ClueAction,
    DiscardAction,
    DrawAction,
    GameAction,
    GameOverAction,
    NoteAction,
    PlayAction,
)
from core.state import GameMetadata, GameState

from .cards import cards_reducer
from .clue_tokens import clue_tokens_reducer
from .hands import hands_reducer
from .notes import notes_reducer
from .play_stacks import play_stacks_reducer
from .stats import stats_reducer
from .turn import turn_reducer


KNOWN_ACTIONS = (
    DrawAction,
    PlayAction,
    DiscardAction,
    ClueAction,
    CardIdentityAction,
    GameOverAction,
    NoteAction,
)

SLICE_REDUCERS = (
    cards_reducer,
    hands_reducer,
    play_stacks_reducer,
    clue_tokens_reducer,
    turn_reducer,
    notes_reducer,
)


def game_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    """
    把一个动作折叠进状态

    Args:
        state: 当前状态 (不会被修改)
        action: 动作
        metadata: 对局元数据

    Returns:
        新状态

    Raises:
        ValueError: 未知的动作类型, 或动作与状态不一致
    """
    if not isinstance(action, KNOWN_ACTIONS):
        raise ValueError(f"Unknown action type: {type(action).__name__}")

    new_state = state
    for reducer in SLICE_REDUCERS:
        new_state = reducer(new_state, action, metadata)

    return stats_reducer(state, new_state, action, metadata)


def fold_actions(
    state: GameState,
    actions: Iterable[GameAction],
    metadata: GameMetadata,
) -> GameState:
    """依次折叠多个动作"""
    for action in actions:
        state = game_reducer(state, action, metadata)
    return state
