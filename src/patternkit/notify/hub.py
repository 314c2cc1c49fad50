"""Listener registry with snapshot delivery and per-listener isolation.

Design
------
1.  **Copy-on-write listener list**: subscriptions live in an immutable
    tuple that is replaced under a short lock on every subscribe or
    unsubscribe.  No lock is held while listener callbacks run, so a
    listener may re-enter the hub freely.
2.  **Snapshot delivery**: a pass delivers to the tuple as it was when
    the pass began.  Listeners added mid-pass wait for the next pass;
    listeners removed mid-pass still get the in-flight value if they were
    in the snapshot, and nothing after that.
3.  **Failure isolation**: a raising listener never stops delivery to
    the ones after it.  Failures are collected into the pass's
    ``DeliveryReport`` and, under ``FailurePolicy.RAISE``, raised as one
    ``ListenerFailure`` once the pass is over.
"""

from __future__ import annotations

import inspect
import logging
import threading
import time
import weakref
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from patternkit.core.enums import FailurePolicy
from patternkit.core.errors import InvalidListener, ListenerFailure
from patternkit.core.ids import new_id
from patternkit.observability.metrics import (
    record_delivery,
    record_listener_failure,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class DeliveryFailure:
    """One listener that raised during a delivery pass."""

    subscription_id: str
    listener_name: str
    state: Any
    error: Exception
    timestamp: float = field(default_factory=time.monotonic)


@dataclass
class DeliveryReport:
    """Outcome of one delivery pass."""

    subject: str
    delivery_id: str
    state: Any
    delivered: list[str] = field(default_factory=list)
    failures: list[DeliveryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_listeners(self) -> list[str]:
        return [f.listener_name for f in self.failures]


class Subscription:
    """Handle returned by ``subscribe``.  ``cancel()`` unsubscribes it."""

    __slots__ = ("subscription_id", "listener", "name", "callback", "_hub")

    def __init__(
        self,
        listener: Any,
        callback: Callable[[Any], Any],
        hub: NotificationHub,
    ) -> None:
        self.subscription_id = new_id()
        self.listener = listener
        self.name = listener_name(listener)
        self.callback = callback
        self._hub = weakref.ref(hub)

    @property
    def key(self) -> str:
        """``name#<short id>``: unique per subscription, readable in reports."""
        return f"{self.name}#{self.subscription_id[:8]}"

    @property
    def active(self) -> bool:
        hub = self._hub()
        return hub is not None and self in hub.subscriptions

    def cancel(self) -> bool:
        hub = self._hub()
        if hub is None:
            return False
        return hub.unsubscribe(self)

    def __repr__(self) -> str:
        return f"Subscription({self.name!r}, id={self.subscription_id[:8]})"


# ---------------------------------------------------------------------------
# Hub
# ---------------------------------------------------------------------------

class NotificationHub:
    """Ordered, de-duplicated set of listeners for one subject.

    Parameters
    ----------
    name
        Subject name, used in logs, metrics and failure reports.
    dedupe
        When ``True`` (default) subscribing the same listener identity
        again returns the existing handle instead of adding a second entry.
    failure_policy
        ``RAISE`` (default) raises ``ListenerFailure`` after a pass with
        failures; ``COLLECT`` only returns them on the report.
    on_listener_error
        Optional callback ``(subject, listener_name, state, exc)`` invoked
        for each failure.  Useful for external alerting.
    max_dead_letters
        Cap on retained failure records; oldest are dropped first.
    """

    def __init__(
        self,
        name: str = "hub",
        *,
        dedupe: bool = True,
        failure_policy: FailurePolicy = FailurePolicy.RAISE,
        on_listener_error: Callable[[str, str, Any, Exception], None] | None = None,
        max_dead_letters: int = 1000,
    ) -> None:
        self._name = name
        self._dedupe = dedupe
        self._failure_policy = failure_policy
        self._on_listener_error = on_listener_error
        self._max_dead_letters = max_dead_letters

        self._subscriptions: tuple[Subscription, ...] = ()
        self._lock = threading.Lock()

        # Observability
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[DeliveryFailure] = []
        self._deliveries: int = 0
        self._messages_delivered: int = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def subscribe(self, listener: Any) -> Subscription:
        """Append *listener* to the delivery order and return its handle."""
        callback = _resolve_callback(listener)
        with self._lock:
            if self._dedupe:
                for existing in self._subscriptions:
                    if _same_listener(existing.callback, callback):
                        logger.debug(
                            "%s: %s already subscribed", self._name, existing.name,
                        )
                        return existing
            subscription = Subscription(listener, callback, self)
            self._subscriptions = self._subscriptions + (subscription,)
        logger.debug(
            "%s: subscribed %s (%d listeners)",
            self._name,
            subscription.name,
            len(self._subscriptions),
        )
        return subscription

    def unsubscribe(self, target: Subscription | Any) -> bool:
        """Remove a subscription handle or every entry for a listener.

        Returns ``False`` when nothing matched.  Safe to call from inside a
        listener callback.
        """
        with self._lock:
            if isinstance(target, Subscription):
                remaining = tuple(s for s in self._subscriptions if s is not target)
            else:
                remaining = tuple(
                    s for s in self._subscriptions
                    if not _matches(s, target)
                )
            removed = len(self._subscriptions) - len(remaining)
            self._subscriptions = remaining
        if removed:
            logger.debug(
                "%s: unsubscribed %s (%d listeners)",
                self._name,
                _target_name(target),
                len(remaining),
            )
        return removed > 0

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        """Current registration order (immutable snapshot)."""
        return self._subscriptions

    @property
    def listeners(self) -> list[Any]:
        return [s.listener for s in self._subscriptions]

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, listener: object) -> bool:
        return any(_matches(s, listener) for s in self._subscriptions)

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def deliver(self, state: Any, *, delivery_id: str | None = None) -> DeliveryReport:
        """Call every listener in the current snapshot with *state*.

        Raises
        ------
        ListenerFailure
            After the whole pass, if any listener raised and the failure
            policy is ``RAISE``.
        """
        snapshot = self._subscriptions
        report = DeliveryReport(
            subject=self._name,
            delivery_id=delivery_id or new_id(),
            state=state,
        )

        for subscription in snapshot:
            try:
                subscription.callback(state)
            except Exception as exc:
                self._record_failure(report, subscription, state, exc)
            else:
                report.delivered.append(subscription.name)
                self._messages_delivered += 1
                record_delivery(self._name)

        self._deliveries += 1
        logger.debug(
            "%s: delivery %s reached %d/%d listeners",
            self._name,
            report.delivery_id[:8],
            len(report.delivered),
            len(snapshot),
        )

        if report.failures and self._failure_policy is FailurePolicy.RAISE:
            raise ListenerFailure(report)
        return report

    def _record_failure(
        self,
        report: DeliveryReport,
        subscription: Subscription,
        state: Any,
        exc: Exception,
    ) -> None:
        failure = DeliveryFailure(
            subscription_id=subscription.subscription_id,
            listener_name=subscription.name,
            state=state,
            error=exc,
        )
        report.failures.append(failure)
        self._error_counts[subscription.key] += 1
        self._dead_letters.append(failure)
        if len(self._dead_letters) > self._max_dead_letters:
            del self._dead_letters[: len(self._dead_letters) - self._max_dead_letters]
        record_listener_failure(self._name, subscription.name)
        logger.exception(
            "Listener error on subject=%s listener=%s delivery=%s",
            self._name,
            subscription.name,
            report.delivery_id[:8],
        )

        if self._on_listener_error is not None:
            try:
                self._on_listener_error(self._name, subscription.name, state, exc)
            except Exception:
                logger.warning("on_listener_error callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def get_error_counts(self) -> dict[str, int]:
        """Return failure counts keyed by ``Subscription.key``.

        Keys carry the subscription id, so distinct listeners that share a
        name (two lambdas, say) are counted apart.
        """
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[DeliveryFailure]:
        """Retained failure records (copy)."""
        return list(self._dead_letters)

    def clear_dead_letters(self) -> list[DeliveryFailure]:
        """Drain the dead-letter list and return all entries."""
        drained = self._dead_letters[:]
        self._dead_letters.clear()
        return drained

    @property
    def deliveries(self) -> int:
        """Number of completed delivery passes."""
        return self._deliveries

    @property
    def messages_delivered(self) -> int:
        """Listener calls that returned without raising."""
        return self._messages_delivered


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _resolve_callback(listener: Any) -> Callable[[Any], Any]:
    callback = _callback_of(listener)
    if callback is not None:
        return callback
    raise InvalidListener(
        f"{type(listener).__name__} is not callable and has no on_change()"
    )


def _callback_of(obj: Any) -> Callable[[Any], Any] | None:
    on_change = getattr(obj, "on_change", None)
    if callable(on_change):
        return on_change
    return obj if callable(obj) else None


def _matches(subscription: Subscription, target: Any) -> bool:
    # An object and its own on_change method name the same listener.
    if _same_listener(subscription.listener, target):
        return True
    callback = _callback_of(target)
    return callback is not None and _same_listener(subscription.callback, callback)


def _same_listener(a: Any, b: Any) -> bool:
    # Bound methods are rebuilt on each attribute access; compare by (self, func).
    if a is b:
        return True
    return inspect.ismethod(a) and inspect.ismethod(b) and a == b


def listener_name(listener: Any) -> str:
    """Human-readable identity for logs and failure reports."""
    name = getattr(listener, "name", None)
    if isinstance(name, str) and name:
        return name
    if inspect.ismethod(listener):
        return f"{type(listener.__self__).__name__}.{listener.__func__.__name__}"
    qualname = getattr(listener, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return type(listener).__name__


def _target_name(target: Any) -> str:
    if isinstance(target, Subscription):
        return target.name
    return listener_name(target)
