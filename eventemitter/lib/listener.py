"""Listener entries stored by the EventEmitter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Hashable

if TYPE_CHECKING:
    from eventemitter.emitter import EventEmitter


class OnceWrapper:
    """Adapter that removes itself from its emitter on first call.

    The wrapper keeps a reference to the original listener so that
    ``remove_listener(event, original)`` and ``listeners(event)`` can match
    on the original rather than on the adapter.

    Attributes:
        event: Event the wrapper was registered for.
        listener: The original listener.
        fired: Whether the wrapper has already been called.
    """

    def __init__(self, emitter: EventEmitter, event: Hashable, listener: Callable) -> None:
        self.emitter = emitter
        self.event = event
        self.listener = listener
        self.fired = False

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        # A snapshot taken before a nested emit consumed us may still hold us
        if self.fired:
            return None
        self.fired = True
        self.emitter.remove_listener(self.event, self)
        return self.listener(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<OnceWrapper event={self.event!r} listener={self.listener!r}>"


class HandlerEntry:
    """A single registration: the callable to invoke and the original listener.

    For direct registrations ``callback`` and ``listener`` are the same object.
    """

    __slots__ = ("callback", "listener")

    def __init__(self, callback: Callable, listener: Callable | None = None) -> None:
        self.callback = callback
        self.listener = callback if listener is None else listener

    @classmethod
    def once(cls, emitter: EventEmitter, event: Hashable, listener: Callable) -> HandlerEntry:
        """Build an entry whose callback is a self-removing OnceWrapper."""
        return cls(OnceWrapper(emitter, event, listener), listener)

    @property
    def is_once(self) -> bool:
        return self.callback is not self.listener

    def matches(self, handler: Callable) -> bool:
        """Identity match against either the adapter or the original listener."""
        return self.callback is handler or self.listener is handler

    def __repr__(self) -> str:
        kind = "once" if self.is_once else "direct"
        return f"<HandlerEntry {kind} {self.listener!r}>"
