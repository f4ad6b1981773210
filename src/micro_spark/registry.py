"""Ordered registry of listeners keyed by event name or wildcard pattern."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Tuple

from .matching import RegistrationKey, classify
from .once import OnceListener

Listener = Callable[..., object]


def _same_listener(entry: Listener, listener: Listener) -> bool:
    # A once-wrapper stands in for the listener it wraps.
    return entry is listener or (isinstance(entry, OnceListener) and entry.listener is listener)


@dataclass(slots=True)
class Registration:
    """Listeners registered under one key, in registration order."""

    key: RegistrationKey
    listeners: List[Listener] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Match:
    """A listener selected for one dispatch."""

    key: RegistrationKey
    listener: Listener

    @property
    def is_wildcard(self) -> bool:
        return self.key.is_wildcard


class ListenerRegistry:
    """Registry that owns every key -> listener sequence."""

    def __init__(self) -> None:
        self._registrations: Dict[str, Registration] = {}

    def add(self, key: str, listener: Listener) -> int:
        """Append ``listener`` under ``key`` and return the new listener count."""

        registration = self._registrations.get(key)
        if registration is None:
            registration = Registration(classify(key))
            self._registrations[key] = registration
        registration.listeners.append(listener)
        return len(registration.listeners)

    def remove(self, key: str, listener: Listener | None = None) -> None:
        registration = self._registrations.get(key)
        if registration is None:
            return
        if listener is None:
            del self._registrations[key]
            return
        remaining = [entry for entry in registration.listeners if not _same_listener(entry, listener)]
        if remaining:
            registration.listeners = remaining
        else:
            del self._registrations[key]

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._registrations.clear()
        else:
            self.remove(key)

    def listeners_for(self, key: str) -> Tuple[Listener, ...]:
        registration = self._registrations.get(key)
        if registration is None:
            return ()
        return tuple(registration.listeners)

    def count(self, key: str) -> int:
        registration = self._registrations.get(key)
        return len(registration.listeners) if registration else 0

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._registrations)

    def matching(self, event: str) -> List[Match]:
        """Snapshot every listener whose key matches ``event``.

        Keys are scanned once in insertion order, exact and wildcard keys
        interleaved; listeners keep their order within a key.
        """

        matches: List[Match] = []
        for registration in self._registrations.values():
            if registration.key.matches(event):
                matches.extend(Match(registration.key, listener) for listener in registration.listeners)
        return matches

    def __contains__(self, key: object) -> bool:
        return key in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

