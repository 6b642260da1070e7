"""Synchronous publish/subscribe registry."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Hashable

from eventemitter.lib.errors import CapacityError, ConfigError, EmitterError, ValidationError
from eventemitter.lib.listener import HandlerEntry

if TYPE_CHECKING:
    from eventemitter.lib.preferences import EmitterPreferences

ERROR_EVENT = "error"
NEW_LISTENER_EVENT = "newListener"
REMOVE_LISTENER_EVENT = "removeListener"


class EventEmitter:
    """Registry mapping events to ordered lists of listeners.

    Listeners are called synchronously, in registration order, by ``emit``.
    Three event names are consulted by the registry itself:

    - ``"error"``: when it has listeners, registration errors are emitted on it
      instead of being raised.
    - ``"newListener"``: emitted with ``(event, listener)`` before a listener
      is added.
    - ``"removeListener"``: emitted with ``(event, listener)`` before a
      listener is removed.

    Every registration method returns the emitter so calls can be chained.

    Attributes:
        default_max_listeners: Max listeners per event for new instances.
    """

    default_max_listeners: int = 10

    def __init__(self, max_listeners: int | None = None) -> None:
        self._listeners: dict[Hashable, list[HandlerEntry]] = {}
        self._max_listeners = self.default_max_listeners
        # Re-entrant: meta events are emitted while the lock is held
        self._lock = threading.RLock()
        if max_listeners is not None:
            self.set_max_listeners(max_listeners)

    @classmethod
    def from_preferences(cls, preferences: EmitterPreferences) -> EventEmitter:
        """Create an emitter with max listeners taken from a preferences file."""
        return cls(max_listeners=preferences.get_or_default("max_listeners"))

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} events={len(self._listeners)} "
            f"max_listeners={self._max_listeners}>"
        )

    # Registration

    def on(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Append a listener for an event."""
        return self._add_listener(event, listener, prepend=False, once=False)

    def add_listener(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Alias of ``on``."""
        return self.on(event, listener)

    def once(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Append a listener that is removed before its first call."""
        return self._add_listener(event, listener, prepend=False, once=True)

    def prepend_listener(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Insert a listener at the front of the event's listener list."""
        return self._add_listener(event, listener, prepend=True, once=False)

    def prepend_once_listener(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Insert a once listener at the front of the event's listener list."""
        return self._add_listener(event, listener, prepend=True, once=True)

    def _add_listener(
        self, event: Hashable, listener: Callable, prepend: bool, once: bool
    ) -> EventEmitter:
        if not callable(listener):
            return self._fail(ValidationError(listener))

        with self._lock:
            if len(self._listeners.get(event, ())) >= self._max_listeners:
                return self._fail(CapacityError(event, self._max_listeners))

            if once:
                entry = HandlerEntry.once(self, event, listener)
            else:
                entry = HandlerEntry(listener)

            # Observers must not see the new listener as already registered
            if NEW_LISTENER_EVENT in self._listeners:
                self.emit(NEW_LISTENER_EVENT, event, listener)
                # An observer may have filled the event up in the meantime
                if len(self._listeners.get(event, ())) >= self._max_listeners:
                    return self._fail(CapacityError(event, self._max_listeners))

            entries = self._listeners.setdefault(event, [])
            if prepend:
                entries.insert(0, entry)
            else:
                entries.append(entry)

        logging.debug(f"Added {entry!r} to event << {event} >>")
        return self

    def _fail(self, error: EmitterError) -> EventEmitter:
        """Emit ``error`` on the emitter if anyone listens for it, else raise."""
        if ERROR_EVENT not in self._listeners:
            raise error
        logging.warning(f"Listener rejected, emitting '{ERROR_EVENT}': {error}")
        self.emit(ERROR_EVENT, error)
        return self

    # Emission

    def emit(self, event: Hashable, *args: Any, **kwargs: Any) -> bool:
        """Call every listener registered for ``event`` with the given arguments.

        Listeners are called from a snapshot of the listener list, so listeners
        added or removed while emitting only take part in later emissions.

        Exceptions raised by a listener are not caught: they stop the current
        emission and the remaining listeners are not called.

        Returns:
            bool: True if the event had listeners, False otherwise.
        """
        with self._lock:
            entries = self._listeners.get(event)
            if not entries:
                return False
            snapshot = list(entries)

        for entry in snapshot:
            entry.callback(*args, **kwargs)
        return True

    # Removal

    def remove_listener(self, event: Hashable, listener: Callable) -> EventEmitter:
        """Remove the first registration of ``listener`` for ``event``.

        Matching is by identity, against either the listener itself or the
        original listener of a ``once`` registration. Unknown events and
        listeners are ignored.
        """
        with self._lock:
            entries = self._listeners.get(event)
            if entries is None:
                return self

            for entry in entries:
                if entry.matches(listener):
                    break
            else:
                return self

            if REMOVE_LISTENER_EVENT in self._listeners:
                self.emit(REMOVE_LISTENER_EVENT, event, entry.listener)

            # The notification may have changed the list
            entries = self._listeners.get(event)
            if entries is not None and entry in entries:
                entries.remove(entry)
                if not entries:
                    del self._listeners[event]

        logging.debug(f"Removed {entry!r} from event << {event} >>")
        return self

    def remove_all_listeners(self, event: Hashable | None = None) -> EventEmitter:
        """Remove all listeners for ``event``, or for every event when omitted.

        If ``removeListener`` has listeners when the call starts, it is notified
        once per removed listener, for every event, before anything is deleted.
        """
        with self._lock:
            notify = REMOVE_LISTENER_EVENT in self._listeners
            if event is not None:
                if event in self._listeners:
                    if notify:
                        self._notify_removed(event)
                    self._listeners.pop(event, None)
                return self

            if notify:
                for name in list(self._listeners):
                    if name in self._listeners:
                        self._notify_removed(name)
            self._listeners.clear()

        logging.debug("Removed all listeners")
        return self

    def _notify_removed(self, event: Hashable) -> None:
        for entry in list(self._listeners[event]):
            self.emit(REMOVE_LISTENER_EVENT, event, entry.listener)

    # Capacity

    def get_max_listeners(self) -> int:
        return self._max_listeners

    def set_max_listeners(self, n: int) -> EventEmitter:
        """Set the max listeners per event. Existing listeners are kept.

        Raises:
            ConfigError: If ``n`` is not a positive integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise ConfigError(f"max listeners must be a positive integer, got {n!r}")
        with self._lock:
            self._max_listeners = n
        logging.debug(f"Max listeners set to {n}")
        return self

    # Introspection

    def event_names(self) -> list[Hashable]:
        with self._lock:
            return list(self._listeners)

    def listener_count(self, event: Hashable) -> int:
        with self._lock:
            return len(self._listeners.get(event, ()))

    def listeners(self, event: Hashable) -> list[Callable]:
        """Return a copy of the listeners for an event, once wrappers unwrapped."""
        with self._lock:
            return [entry.listener for entry in self._listeners.get(event, ())]

    def raw_listeners(self, event: Hashable) -> list[Callable]:
        """Return a copy of the stored callables, including once wrappers."""
        with self._lock:
            return [entry.callback for entry in self._listeners.get(event, ())]
