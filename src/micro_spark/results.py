"""Value objects returned by the emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class EmitResult:
    """Aggregate outcome of a single ``emit`` call."""

    success: bool = True
    errors: Tuple[BaseException, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[BaseException]) -> "EmitResult":
        if errors:
            return cls(success=False, errors=tuple(errors))
        return cls(success=True)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON compatible mapping, errors rendered as strings."""

        payload: Dict[str, Any] = {"success": self.success}
        if self.errors:
            payload["errors"] = [f"{type(err).__name__}: {err}" for err in self.errors]
        return payload


@dataclass(frozen=True, slots=True)
class EventRecord:
    """History entry describing one emitted event."""

    event: str
    args: Tuple[Any, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event,
            "args": list(self.args),
            "timestamp": self.timestamp.isoformat(),
        }
