"""Custom exceptions raised by the NEO emitter."""


class EmitterError(RuntimeError):
    """Base error for all emitter related exceptions."""


class InvalidOperationError(EmitterError):
    """Raised when an operation is not valid in the emitter's current state."""


class ConfigurationError(EmitterError):
    """Raised when emitter settings are invalid or missing."""
