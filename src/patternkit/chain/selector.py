"""Interchangeable behaviors behind one invocation target."""

from __future__ import annotations

import logging
from typing import Any

from patternkit.core.errors import InvalidComposition, UnknownKind
from patternkit.core.interfaces import IBehavior, is_behavior_capable

logger = logging.getLogger(__name__)


class StrategySelector:
    """Holds named behaviors and delegates ``invoke`` to the selected one.

    A selector is itself behavior-capable, so it can sit at the base of a
    chain and have its strategy swapped at runtime without rebuilding the
    wrappers above it.
    """

    def __init__(
        self,
        name: str,
        strategies: dict[str, IBehavior] | None = None,
        default: str | None = None,
    ) -> None:
        self._name = name
        self._strategies: dict[str, IBehavior] = {}
        self._current_key: str | None = None
        for key, behavior in (strategies or {}).items():
            self.register(key, behavior)
        if default is not None:
            self.select(default)

    @property
    def name(self) -> str:
        return self._name

    def register(self, key: str, behavior: IBehavior) -> None:
        if not is_behavior_capable(behavior):
            raise InvalidComposition(
                f"Strategy {key!r} for {self._name} has no invoke()"
            )
        self._strategies[key] = behavior

    def select(self, key: str) -> None:
        if key not in self._strategies:
            raise UnknownKind(key, self._strategies.keys())
        if key != self._current_key:
            logger.debug("%s: strategy %s -> %s", self._name, self._current_key, key)
        self._current_key = key

    @property
    def current_key(self) -> str | None:
        return self._current_key

    @property
    def current(self) -> IBehavior | None:
        if self._current_key is None:
            return None
        return self._strategies[self._current_key]

    def keys(self) -> list[str]:
        return list(self._strategies)

    def invoke(self, value: Any) -> Any:
        behavior = self.current
        if behavior is None:
            raise InvalidComposition(f"{self._name} has no strategy selected")
        return behavior.invoke(value)
