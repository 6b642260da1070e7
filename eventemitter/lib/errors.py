"""Exceptions raised by the event emitter."""

from __future__ import annotations

from typing import Any


class EmitterError(Exception):
    """Base class for errors raised by an EventEmitter itself."""


class ValidationError(EmitterError, TypeError):
    """A listener that is not callable was passed to a registration method."""

    def __init__(self, listener: Any = None) -> None:
        super().__init__("listener must be callable")
        self.listener = listener


class CapacityError(EmitterError):
    """Adding a listener would exceed the emitter's max listeners for an event."""

    def __init__(self, event: Any = None, limit: int | None = None) -> None:
        super().__init__("max listeners exceeded")
        self.event = event
        self.limit = limit


class ConfigError(EmitterError, ValueError):
    """An invalid configuration value, e.g. a non-positive max listeners."""
