"""Listener wrapper that fires a limited number of times."""

from __future__ import annotations

from typing import Any, Callable

Remover = Callable[[str, Callable[..., object]], None]


class OnceListener:
    """Invoke ``listener`` on the first ``max_emits`` calls, then deregister.

    The counter advances only after the wrapped listener returns without
    raising. Calls already in flight count against the limit, so a listener
    that re-emits its own event is not invoked again from the nested emit.
    Once the limit is reached the wrapper removes itself from ``key`` so later
    emits never reach it. A ``max_emits`` below one never invokes the listener
    and deregisters on the first matching emit.
    """

    __slots__ = ("key", "listener", "max_emits", "calls", "_pending", "_remove")

    def __init__(self, key: str, listener: Callable[..., object], max_emits: int, remove: Remover) -> None:
        self.key = key
        self.listener = listener
        self.max_emits = max_emits
        self.calls = 0
        self._pending = 0
        self._remove = remove

    @property
    def exhausted(self) -> bool:
        return self.calls >= self.max_emits

    def __call__(self, *args: Any) -> object:
        result = None
        try:
            if self.calls + self._pending < self.max_emits:
                self._pending += 1
                try:
                    result = self.listener(*args)
                finally:
                    self._pending -= 1
                self.calls += 1
        finally:
            if self.exhausted:
                self._remove(self.key, self)
        return result

    def __repr__(self) -> str:
        return f"OnceListener(key={self.key!r}, listener={self.listener!r}, calls={self.calls}/{self.max_emits})"
