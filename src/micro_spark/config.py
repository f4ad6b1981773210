"""Configuration models for micro-spark emitters."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError


class EmitterSettings(BaseModel):
    """Tunable behaviour of an :class:`~micro_spark.emitter.EventEmitter`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_listeners: Optional[int] = Field(
        default=None,
        ge=1,
        description="Soft per-key listener limit. Exceeding it only logs a warning.",
    )
    enable_event_history: bool = Field(
        default=False,
        description="Record every emitted event in a bounded in-memory history.",
    )
    history_limit: int = Field(default=100, ge=1, description="Maximum number of history records kept")
    resolve_callable_args: bool = Field(
        default=False,
        description="Invoke callable emit arguments once and pass their return values to listeners.",
    )


def build_settings_from_dict(raw: Mapping[str, Any]) -> EmitterSettings:
    """Utility helper to build :class:`EmitterSettings` from a plain mapping."""

    if not isinstance(raw, Mapping):
        raise ConfigurationError("Emitter settings must be a mapping")
    try:
        return EmitterSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid emitter settings: {exc}") from exc


def load_settings(path: Path | str) -> EmitterSettings:
    """Load settings from a JSON or YAML file at ``path``."""

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            if path.suffix.lower() in {".yaml", ".yml"}:
                data = yaml.safe_load(handle)
            else:
                data = json.load(handle)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Unable to parse settings file {path}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a mapping")
    return build_settings_from_dict(data)


def coerce_settings(value: EmitterSettings | Mapping[str, Any] | None) -> EmitterSettings:
    """Accept a settings model, a raw mapping or ``None``."""

    if value is None:
        return EmitterSettings()
    if isinstance(value, EmitterSettings):
        return value
    return build_settings_from_dict(value)


def settings_summary(settings: EmitterSettings) -> Dict[str, Any]:
    """Return settings as a JSON compatible mapping for logging."""

    return settings.model_dump()


__all__ = [
    "EmitterSettings",
    "build_settings_from_dict",
    "coerce_settings",
    "load_settings",
    "settings_summary",
]
