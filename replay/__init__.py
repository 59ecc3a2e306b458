"""
Replay Layer - 实时折叠、观察者、录像重放、JSON 对局导入

Modules:
    observer: 有序的 (selector, listener) 订阅
    store: 持有实时状态的对局存储
    replay: 动作日志重放
    json_game: hanab.live JSON 对局导入
"""
from .observer import (
    StateObserver,
    Subscription,
)

from .store import GameStore

from .replay import (
    ReplayConfig,
    fold,
    replay,
    state_at_segment,
)

from .json_game import (
    JSONActionType,
    actions_from_json_game,
    load_json_game,
    metadata_from_json_game,
    with_viewer,
)

__all__ = [
    # observer
    "StateObserver",
    "Subscription",
    # store
    "GameStore",
    # replay
    "ReplayConfig",
    "fold",
    "replay",
    "state_at_segment",
    # json_game
    "JSONActionType",
    "actions_from_json_game",
    "load_json_game",
    "metadata_from_json_game",
    "with_viewer",
]
