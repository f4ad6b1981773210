"""micro-spark: in-process event emitter with wildcard patterns."""

from .config import EmitterSettings, build_settings_from_dict, load_settings
from .emitter import EventEmitter
from .exceptions import ConfigurationError, EmitterError
from .logging import get_logger
from .results import EmitResult, EventRecord

__all__ = [
    "ConfigurationError",
    "EmitResult",
    "EmitterError",
    "EmitterSettings",
    "EventEmitter",
    "EventRecord",
    "build_settings_from_dict",
    "get_logger",
    "load_settings",
]
