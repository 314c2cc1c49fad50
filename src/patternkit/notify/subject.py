"""Stateful subject whose transitions are broadcast through a hub."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from patternkit.core.config import HubConfig
from patternkit.core.events import StateChanged
from patternkit.observability.metrics import record_state_change

from .hub import DeliveryReport, NotificationHub, Subscription

logger = logging.getLogger(__name__)


class Subject:
    """Holds one opaque state value and notifies listeners on every change.

    Transitions happen only through :meth:`set_state`.  There is no
    terminal state.  With ``thread_safe=True`` concurrent ``set_state``
    calls are serialized (state update, snapshot and delivery happen as
    one step); the lock is re-entrant, so a listener may call
    ``set_state`` on the same subject from its callback.

    The lock stays held while listener callbacks run.  A listener must
    not block waiting for another thread that is itself calling
    ``set_state`` on this subject; that thread cannot enter until the
    current pass returns, so the two would deadlock.
    """

    def __init__(
        self,
        name: str,
        initial_state: Any = None,
        *,
        hub: NotificationHub | None = None,
        thread_safe: bool = False,
        keep_history: bool = True,
    ) -> None:
        self._name = name
        self._state = initial_state
        self._hub = hub if hub is not None else NotificationHub(name)
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if thread_safe else nullcontext()
        )
        self._keep_history = keep_history
        self._history: list[StateChanged] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> Any:
        return self._state

    @property
    def hub(self) -> NotificationHub:
        return self._hub

    # -- Listeners ---------------------------------------------------------

    def subscribe(self, listener: Any) -> Subscription:
        return self._hub.subscribe(listener)

    def unsubscribe(self, target: Subscription | Any) -> bool:
        return self._hub.unsubscribe(target)

    @property
    def listeners(self) -> list[Any]:
        return self._hub.listeners

    # -- Transitions -------------------------------------------------------

    def set_state(self, new_state: Any) -> DeliveryReport:
        """Store *new_state*, record the change, then notify listeners.

        The state is updated before any listener runs, so listeners that
        read ``subject.state`` see the new value.  Listener failures
        follow the hub's failure policy.
        """
        with self._lock:
            previous = self._state
            self._state = new_state
            event = StateChanged(
                source=self._name,
                previous=previous,
                state=new_state,
                listener_count=len(self._hub),
            )
            if self._keep_history:
                self._history.append(event)
            record_state_change(self._name)
            logger.debug(
                "%s: %r -> %r (%d listeners)",
                self._name,
                previous,
                new_state,
                event.listener_count,
            )
            return self._hub.deliver(new_state, delivery_id=event.event_id)

    # -- Testing helpers ---------------------------------------------------

    def get_history(self) -> list[StateChanged]:
        """Recorded transitions, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def __repr__(self) -> str:
        return f"Subject({self._name!r}, state={self._state!r}, listeners={len(self._hub)})"


def create_subject(
    name: str,
    config: HubConfig | None = None,
    initial_state: Any = None,
    on_listener_error: Callable[[str, str, Any, Exception], None] | None = None,
) -> Subject:
    """Create a subject wired according to *config*.

    Args:
        name: Subject name (logs, metrics, failure reports).
        config: Hub policy; defaults to ``HubConfig()``.
        initial_state: State before the first ``set_state``.
        on_listener_error: Optional callback ``(subject, listener, state,
            exc)`` invoked for each listener failure.
    """
    config = config or HubConfig()
    hub = NotificationHub(
        name,
        dedupe=config.dedupe_listeners,
        failure_policy=config.failure_policy,
        on_listener_error=on_listener_error,
        max_dead_letters=config.max_dead_letters,
    )
    return Subject(
        name,
        initial_state,
        hub=hub,
        thread_safe=config.thread_safe,
        keep_history=config.keep_history,
    )
