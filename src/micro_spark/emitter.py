"""In-process event emitter with wildcard matching and async aware dispatch."""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from typing import Any, Awaitable, Callable, Deque, List, Mapping, Tuple, Union

from .config import EmitterSettings, coerce_settings, settings_summary
from .logging import describe_callable, get_logger, log_event
from .once import OnceListener
from .registry import Listener, ListenerRegistry
from .results import EmitResult, EventRecord
from .telemetry import MetricsCollector

LOGGER = get_logger("emitter")

ErrorObserver = Callable[[str, BaseException], object]
EmitOutcome = Union[EmitResult, Awaitable[EmitResult]]


class EventEmitter:
    """Publish/subscribe hub for a single thread of control.

    Usage::

        emitter = EventEmitter()
        emitter.on("user:*", lambda event, payload: print(event, payload))
        result = emitter.emit("user:login", {"id": 1})

    ``emit`` returns an :class:`EmitResult` straight away when every matched
    listener completed synchronously. When any listener returned an awaitable
    it returns an awaitable that settles all of them and resolves to the
    :class:`EmitResult`. ``emit_async`` always returns an awaitable.
    """

    def __init__(self, settings: EmitterSettings | Mapping[str, Any] | None = None) -> None:
        self.settings = coerce_settings(settings)
        self.metrics = MetricsCollector()
        self._registry = ListenerRegistry()
        self._error_observers: List[ErrorObserver] = []
        self._history: Deque[EventRecord] = deque(maxlen=self.settings.history_limit)
        LOGGER.debug("Emitter created", extra={"payload": settings_summary(self.settings)})

    # Registration -------------------------------------------------------

    def on(self, event: str, listener: Listener) -> None:
        """Register ``listener`` for an event name or ``*`` pattern."""

        count = self._registry.add(event, listener)
        LOGGER.debug("Listener registered", extra={"key": event, "listener": describe_callable(listener)})
        limit = self.settings.max_listeners
        if limit is not None and count > limit:
            LOGGER.warning(
                "Max listeners exceeded for event %r (%d > %d)",
                event,
                count,
                limit,
                extra={"key": event},
            )

    def once(self, event: str, listener: Listener, max_emits: int = 1) -> None:
        """Register ``listener`` for the first ``max_emits`` matching emits only."""

        self.on(event, OnceListener(event, listener, max_emits, self._registry.remove))

    def off(self, event: str, listener: Listener | None = None) -> None:
        """Remove ``listener`` from ``event``, or every listener when omitted."""

        self._registry.remove(event, listener)

    def on_pattern(self, pattern: str, listener: Listener) -> None:
        self.on(pattern, listener)

    def once_pattern(self, pattern: str, listener: Listener, max_emits: int = 1) -> None:
        self.once(pattern, listener, max_emits)

    def off_pattern(self, pattern: str, listener: Listener | None = None) -> None:
        # Keyed by the registered pattern string, never by concrete event names.
        self.off(pattern, listener)

    def clear(self, event: str | None = None) -> None:
        """Remove every listener for ``event``, or for every key when omitted."""

        self._registry.clear(event)
        log_event(LOGGER, "listeners_cleared", {"key": event if event is not None else "*all*"})

    # Error channel ------------------------------------------------------

    def on_error(self, observer: ErrorObserver) -> None:
        self._error_observers.append(observer)

    def off_error(self, observer: ErrorObserver) -> None:
        self._error_observers = [item for item in self._error_observers if item is not observer]

    # Introspection ------------------------------------------------------

    def listeners(self, event: str) -> Tuple[Listener, ...]:
        return self._registry.listeners_for(event)

    def listener_count(self, event: str) -> int:
        return self._registry.count(event)

    def event_names(self) -> Tuple[str, ...]:
        return self._registry.keys()

    def history(self) -> Tuple[EventRecord, ...]:
        return tuple(self._history)

    def reset(self) -> None:
        """Drop all listeners, error observers, history and metrics."""

        self._registry.clear()
        self._error_observers.clear()
        self._history.clear()
        self.metrics.reset()
        log_event(LOGGER, "emitter_reset")

    # Dispatch -----------------------------------------------------------

    def emit(self, event: str, *args: Any) -> EmitOutcome:
        """Invoke every listener matching ``event`` in registration order.

        Listener failures never propagate: they are collected into the
        returned :class:`EmitResult` and reported to each error observer.
        """

        args = self._prepare_args(args)
        if self.settings.enable_event_history:
            self._history.append(EventRecord(event, args))
        self.metrics.increment("events_emitted")

        errors: List[BaseException] = []
        pending: List[Awaitable[object]] = []
        with self.metrics.time("emit"):
            for match in self._registry.matching(event):
                call_args = (event, *args) if match.is_wildcard else args
                self.metrics.increment("listeners_invoked")
                try:
                    result = match.listener(*call_args)
                except Exception as exc:
                    self._record_failure(event, exc, errors)
                    continue
                if inspect.isawaitable(result):
                    pending.append(result)

        if not pending:
            return EmitResult.from_errors(errors)
        return self._settle(event, pending, errors)

    async def emit_async(self, event: str, *args: Any) -> EmitResult:
        """Emit ``event`` and always resolve to an :class:`EmitResult`."""

        outcome = self.emit(event, *args)
        if isinstance(outcome, EmitResult):
            return outcome
        return await outcome

    async def _settle(
        self, event: str, pending: List[Awaitable[object]], errors: List[BaseException]
    ) -> EmitResult:
        async def _wait(awaitable: Awaitable[object]) -> None:
            try:
                await awaitable
            except Exception as exc:
                self._record_failure(event, exc, errors)

        await asyncio.gather(*(_wait(awaitable) for awaitable in pending))
        return EmitResult.from_errors(errors)

    def _prepare_args(self, args: Tuple[Any, ...]) -> Tuple[Any, ...]:
        if not self.settings.resolve_callable_args:
            return args
        return tuple(arg() if callable(arg) else arg for arg in args)

    def _record_failure(self, event: str, error: Exception, errors: List[BaseException]) -> None:
        errors.append(error)
        self.metrics.increment("listener_failures")
        LOGGER.warning(
            "Listener failed for event %r: %s",
            event,
            error,
            extra={"event": event, "error": repr(error)},
        )
        for observer in tuple(self._error_observers):
            try:
                observer(event, error)
            except Exception:
                self.metrics.increment("observer_failures")
                LOGGER.exception(
                    "Error observer %s failed", describe_callable(observer), extra={"event": event}
                )

    def __repr__(self) -> str:
        return f"EventEmitter(keys={len(self._registry)}, observers={len(self._error_observers)})"
