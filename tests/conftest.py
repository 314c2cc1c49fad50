"""Shared fixtures for the patternkit test suite."""

from __future__ import annotations

import pytest

from patternkit.catalogue import EffectJournal, build_default_registry, plain_butler
from patternkit.core.behavior import Behavior
from patternkit.core.enums import FailurePolicy
from patternkit.factory.registry import FactoryRegistry
from patternkit.notify.hub import NotificationHub
from patternkit.notify.subject import Subject


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> FactoryRegistry:
    """Return a registry with the stock butler and animal kinds."""
    return build_default_registry()


@pytest.fixture
def empty_registry() -> FactoryRegistry:
    return FactoryRegistry()


# ---------------------------------------------------------------------------
# Behaviors
# ---------------------------------------------------------------------------

@pytest.fixture
def journal() -> EffectJournal:
    return EffectJournal()


@pytest.fixture
def butler(journal: EffectJournal) -> Behavior:
    """Return a PlainButler that records into ``journal``."""
    return plain_butler(journal=journal)


@pytest.fixture
def echo() -> Behavior:
    return Behavior("Echo", lambda value: value)


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------

@pytest.fixture
def hub() -> NotificationHub:
    """Return a hub that collects listener failures instead of raising."""
    return NotificationHub("test.hub", failure_policy=FailurePolicy.COLLECT)


@pytest.fixture
def subject() -> Subject:
    """Return a subject with the default (raising) failure policy."""
    return Subject("mood", initial_state="calm")


class Recorder:
    """Listener that remembers every state it was given."""

    def __init__(self, name: str, log: list[tuple[str, object]] | None = None) -> None:
        self.name = name
        self.received: list[object] = []
        self._log = log

    def on_change(self, state: object) -> None:
        self.received.append(state)
        if self._log is not None:
            self._log.append((self.name, state))


@pytest.fixture
def make_recorder():
    """Factory for named Recorder listeners sharing an optional log."""

    def _make(name: str, log: list[tuple[str, object]] | None = None) -> Recorder:
        return Recorder(name, log)

    return _make
