"""
录像重放

同一个动作日志从初始状态重新折叠, 结果总是完全相同
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.actions import GameAction
from core.state import GameMetadata, GameState
from reducers import fold_actions, game_reducer, initial_game_state


@dataclass
class ReplayConfig:
    """
    重放配置

    Attributes:
        stop_at_segment: 到达该 segment 后停止 (None 表示重放全部)
        playing: 以对局者视角计算统计
        shadowing: 以跟随视角计算统计
        log_level: 日志级别
    """
    stop_at_segment: Optional[int] = None
    playing: bool = False
    shadowing: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: dict) -> 'ReplayConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)


def fold(
    actions: Iterable[GameAction],
    metadata: GameMetadata,
    initial: Optional[GameState] = None,
) -> GameState:
    """
    把动作日志折叠成最终状态

    Args:
        actions: 动作日志
        metadata: 对局元数据
        initial: 起始状态 (默认为新对局)

    Returns:
        最终状态
    """
    state = initial if initial is not None else initial_game_state(metadata)
    return fold_actions(state, actions, metadata)


def replay(
    actions: Iterable[GameAction],
    metadata: GameMetadata,
    initial: Optional[GameState] = None,
) -> List[GameState]:
    """
    重放并返回每一步的快照

    Returns:
        [初始状态, 第 1 个动作之后, ...]
    """
    state = initial if initial is not None else initial_game_state(metadata)
    states = [state]
    for action in actions:
        state = game_reducer(state, action, metadata)
        states.append(state)
    return states


def state_at_segment(
    actions: Iterable[GameAction],
    metadata: GameMetadata,
    segment: int,
) -> GameState:
    """
    重放到指定 segment

    在 segment 达到目标值之前的所有动作都会被折叠, 之后的动作被忽略

    Args:
        actions: 动作日志
        metadata: 对局元数据
        segment: 目标 segment

    Returns:
        该 segment 的状态
    """
    state = initial_game_state(metadata)
    for action in actions:
        next_state = game_reducer(state, action, metadata)
        if next_state.turn.segment > segment:
            break
        state = next_state
    return state
