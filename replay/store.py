"""
对局存储 - 持有实时状态, 折叠动作并通知观察者
"""
from typing import Iterable, List, Optional
import logging

from core.actions import GameAction
from core.state import GameMetadata, GameState
from reducers import game_reducer, initial_game_state

from .observer import Listener, Selector, StateObserver


logger = logging.getLogger(__name__)


class GameStore:
    """
    对局存储

    状态是不可变的, clone() 得到的存储上折叠的动作不会影响原存储
    """

    def __init__(
        self,
        metadata: GameMetadata,
        state: Optional[GameState] = None,
        actions: Optional[List[GameAction]] = None,
    ):
        self.metadata = metadata
        self.state = state if state is not None else initial_game_state(metadata)
        self.actions: List[GameAction] = list(actions) if actions else []
        self.observer = StateObserver(self.state)

    def subscribe(self, select: Selector, on_change: Listener):
        """注册观察者, 返回取消订阅的函数"""
        return self.observer.subscribe(select, on_change)

    def dispatch(self, action: GameAction) -> GameState:
        """
        折叠一个动作, 然后同步通知观察者

        Args:
            action: 动作

        Returns:
            新状态
        """
        self.state = game_reducer(self.state, action, self.metadata)
        self.actions.append(action)
        logger.debug(
            f"Folded {type(action).__name__} | segment {self.state.turn.segment} | "
            f"score {self.state.score}"
        )
        self.observer.notify(self.state)
        return self.state

    def dispatch_all(self, actions: Iterable[GameAction]) -> GameState:
        for action in actions:
            self.dispatch(action)
        return self.state

    def clone(self) -> 'GameStore':
        """用于推演假设的未来: 共享不可变状态, 不共享观察者"""
        return GameStore(self.metadata, state=self.state, actions=self.actions)
