"""Custom exception hierarchy for the composition framework."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from patternkit.notify.hub import DeliveryReport


class PatternKitError(Exception):
    """Base exception for all framework errors."""


# --- Configuration ---
class ConfigError(PatternKitError):
    """Invalid or missing configuration."""


# --- Construction ---
class ConstructionError(PatternKitError):
    """A constructor failed or produced something that is not constructible."""


class UnknownKind(ConstructionError):
    """No constructor is registered for the requested kind."""

    def __init__(self, kind: str, available: Iterable[str] = ()) -> None:
        self.kind = kind
        self.available = sorted(available)
        listing = ", ".join(self.available) or "<none>"
        super().__init__(f"Unknown kind '{kind}'. Available: {listing}")


# --- Composition ---
class InvalidComposition(PatternKitError):
    """A behavior chain cannot be built around the given inner behavior."""


# --- Notification ---
class InvalidListener(PatternKitError):
    """Object cannot be subscribed: it is neither callable nor has on_change()."""


class ListenerFailure(PatternKitError):
    """One or more listeners raised during a delivery pass.

    Raised only after every listener in the pass has been called.
    """

    def __init__(self, report: DeliveryReport) -> None:
        self.report = report
        details = "; ".join(
            f"{f.listener_name} ({type(f.error).__name__}: {f.error})"
            for f in report.failures
        )
        super().__init__(
            f"{len(report.failures)} listener(s) failed on "
            f"{report.subject!r} delivery {report.delivery_id[:8]}: {details}"
        )

    @property
    def failed_listeners(self) -> list[str]:
        return [f.listener_name for f in self.report.failures]
