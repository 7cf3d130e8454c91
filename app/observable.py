from __future__ import annotations

from typing import Callable, List

Listener = Callable[[], None]


class Observable:
    """Minimal synchronous change notification.

    Listeners are called in subscription order right after a state change,
    on the caller's thread.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


__all__ = ["Listener", "Observable"]
