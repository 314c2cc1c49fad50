"""Stock Constructible: a named function.

Variants that differ only by configuration are expressed as data held in
the closure, not as subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class Behavior:
    """Named invocation target produced by factories.

    Usage::

        shout = Behavior("Shout", lambda text: text.upper())
        shout.invoke("hi")  # "HI"
    """

    name: str
    fn: Callable[[Any], Any] = field(repr=False)
    kind: str = ""

    def invoke(self, value: Any) -> Any:
        return self.fn(value)

    def __str__(self) -> str:
        return self.name
