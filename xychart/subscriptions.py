from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar


T = TypeVar("T")
Listener = Callable[[T], Any]


class Subscription:
    """Revocable handle returned by `ListenerList.subscribe`."""

    def __init__(self, owner: ListenerList[Any], callback: Callable[[Any], Any]) -> None:
        self._owner: ListenerList[Any] | None = owner
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._owner is not None

    def dispose(self) -> None:
        owner = self._owner
        if owner is None:
            return
        self._owner = None
        owner._remove(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class ListenerList(Generic[T]):
    """Ordered change subscribers, notified synchronously on the caller's thread."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, callback: Listener[T]) -> Subscription:
        if not callable(callback):
            raise ValueError("callback must be callable")
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    def notify(self, source: T) -> None:
        # Snapshot so callbacks may dispose themselves or subscribe others.
        for sub in list(self._subscriptions):
            if sub.active:
                sub.callback(source)

    def clear(self) -> None:
        for sub in list(self._subscriptions):
            sub.dispose()

    def __len__(self) -> int:
        return len(self._subscriptions)

    def _remove(self, sub: Subscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)
