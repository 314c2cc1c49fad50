"""Instance providers.

Shared instances are handed to the code that needs them through a
provider passed in at construction time.  Nothing in the framework looks
an instance up from a global.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LazyProvider(Generic[T]):
    """Creates its instance on the first ``get()`` and returns it ever after.

    Creation is guarded by a lock so concurrent first calls build exactly
    one instance.  If the factory raises, nothing is cached and the next
    ``get()`` tries again.
    """

    def __init__(self, factory: Callable[[], T], name: str = "") -> None:
        self._factory = factory
        self._name = name or getattr(factory, "__qualname__", "instance")
        self._instance: T | None = None
        self._created = False
        self._lock = threading.Lock()

    def get(self) -> T:
        if self._created:
            return self._instance  # type: ignore[return-value]
        with self._lock:
            if not self._created:
                self._instance = self._factory()
                self._created = True
                logger.debug("Provider %s created its instance", self._name)
        return self._instance  # type: ignore[return-value]

    @property
    def is_created(self) -> bool:
        return self._created

    def reset(self) -> None:
        """Drop the cached instance. For testing."""
        with self._lock:
            self._instance = None
            self._created = False


class StaticProvider(Generic[T]):
    """Provider around an instance that already exists."""

    def __init__(self, instance: T) -> None:
        self._instance = instance

    def get(self) -> T:
        return self._instance
