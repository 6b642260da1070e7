"""Pytest fixtures for eventemitter tests."""

from unittest.mock import MagicMock

import pytest

from eventemitter import EmitterPreferences, EventEmitter


class Recorder:
    """Listener that records its calls in a shared log.

    Several recorders sharing one log make call order across listeners easy to assert.
    """

    def __init__(self, name, log):
        self.name = name
        self.log = log

    def __call__(self, *args, **kwargs):
        self.log.append((self.name, args, kwargs))

    def __repr__(self):
        return f"<Recorder {self.name}>"


@pytest.fixture
def emitter():
    """Create an empty EventEmitter with the default cap."""
    return EventEmitter()


@pytest.fixture
def call_log():
    """Shared list recorders append (name, args, kwargs) tuples to."""
    return []


@pytest.fixture
def make_recorder(call_log):
    """Factory for named recorders writing to the shared call log."""

    def _make(name):
        return Recorder(name, call_log)

    return _make


@pytest.fixture
def error_handler(emitter):
    """Register a MagicMock on the 'error' event and return it."""
    handler = MagicMock()
    emitter.on("error", handler)
    return handler


@pytest.fixture
def preferences(tmp_path, emitter):
    """EmitterPreferences backed by a temp ini file, synced to the emitter fixture."""
    return EmitterPreferences(config_file_path=str(tmp_path / "eventemitter.ini"), target=emitter)
