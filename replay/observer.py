"""
状态观察者

按注册顺序保存 (selector, listener) 对; 每次折叠之后同步求值,
只有选出的值按相等性比较发生变化时才调用 listener
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from core.state import GameState


Selector = Callable[[GameState], Any]
Listener = Callable[[Any, Optional[Any]], None]

_UNSET = object()


@dataclass
class Subscription:
    """
    一个订阅

    Attributes:
        select: 从状态中选出关心的部分
        on_change: 值变化时调用 (新值, 旧值)
        last_value: 上次选出的值
    """
    select: Selector
    on_change: Listener
    last_value: Any = _UNSET


class StateObserver:
    """
    有序的状态订阅

    注册时若已有状态, 立即以 (当前值, None) 调用一次 listener
    """

    def __init__(self, state: Optional[GameState] = None):
        self._subscriptions: List[Subscription] = []
        self._state = state

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, select: Selector, on_change: Listener) -> Callable[[], None]:
        """
        注册订阅

        Args:
            select: 选择器
            on_change: 变化回调

        Returns:
            取消订阅的函数
        """
        subscription = Subscription(select=select, on_change=on_change)
        self._subscriptions.append(subscription)

        if self._state is not None:
            value = select(self._state)
            subscription.last_value = value
            on_change(value, None)

        def unsubscribe():
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def unregister_all(self):
        """清除所有订阅"""
        self._subscriptions.clear()

    def notify(self, state: GameState):
        """
        折叠完成后按注册顺序通知

        Args:
            state: 新状态
        """
        self._state = state
        # 回调中可能取消订阅, 先复制一份
        for subscription in list(self._subscriptions):
            value = subscription.select(state)
            if subscription.last_value is not _UNSET and value == subscription.last_value:
                continue
            previous = None if subscription.last_value is _UNSET else subscription.last_value
            subscription.last_value = value
            subscription.on_change(value, previous)
