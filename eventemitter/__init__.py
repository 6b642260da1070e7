from eventemitter.emitter import (
    ERROR_EVENT,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
    EventEmitter,
)
from eventemitter.lib.errors import CapacityError, ConfigError, EmitterError, ValidationError
from eventemitter.lib.logger import configure_logger
from eventemitter.lib.preferences import EmitterPreferences
from eventemitter.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    "ERROR_EVENT",
    "NEW_LISTENER_EVENT",
    "REMOVE_LISTENER_EVENT",
    EventEmitter.__name__,
    EmitterError.__name__,
    ValidationError.__name__,
    CapacityError.__name__,
    ConfigError.__name__,
    EmitterPreferences.__name__,
    configure_logger.__name__,
]
