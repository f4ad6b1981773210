"""Custom exceptions raised by micro-spark."""


class EmitterError(RuntimeError):
    """Base error for all emitter related exceptions."""


class ConfigurationError(EmitterError):
    """Raised when configuration values or call arguments are invalid."""
