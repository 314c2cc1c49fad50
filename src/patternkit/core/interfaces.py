"""Protocol interfaces for the framework.

All module boundaries are defined here as Protocol classes.
Implementations can be swapped without changing callers.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


# ---------------------------------------------------------------------------
# Behavior
# ---------------------------------------------------------------------------

@runtime_checkable
class IBehavior(Protocol):
    """Anything that can be invoked with one input and returns one output.

    Wrappers, chains and strategy selectors all satisfy this, which is
    what lets them nest to arbitrary depth.
    """

    def invoke(self, value: Any) -> Any: ...


@runtime_checkable
class IConstructible(Protocol):
    """A factory product: stable identity plus a behavior entry point."""

    @property
    def name(self) -> str: ...

    def invoke(self, value: Any) -> Any: ...


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------

@runtime_checkable
class IListener(Protocol):
    """Receives every state the subject moves into."""

    def on_change(self, state: Any) -> None: ...


# ---------------------------------------------------------------------------
# Instance provision
# ---------------------------------------------------------------------------

@runtime_checkable
class IInstanceProvider(Protocol[T_co]):
    """Hands out one shared instance.  Injected, never looked up globally."""

    def get(self) -> T_co: ...


def is_behavior_capable(obj: Any) -> bool:
    """True when *obj* exposes a callable ``invoke``."""
    return obj is not None and callable(getattr(obj, "invoke", None))


def is_constructible(obj: Any) -> bool:
    """True when *obj* has a string ``name`` and a callable ``invoke``."""
    return is_behavior_capable(obj) and isinstance(getattr(obj, "name", None), str)
