"""Decorator composition.

A ``Decoration`` is an authored wrapper: a name, an effect, and a fixed
placement.  Wrapping it around a behavior gives a ``Wrapper`` that keeps
the same ``invoke(value) -> result`` contract, so wrappers nest to any
depth.

Ordering
--------
``POST`` effects run after the inner call returns, so for
``decorate(base, inner_dec, outer_dec)`` the observable order is
``base, inner_dec, outer_dec``.  ``PRE`` effects run before delegating
inward, outermost first.  Composition is associative but not
commutative: swapping two decorations can change the output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from patternkit.core.enums import Placement
from patternkit.core.errors import InvalidComposition
from patternkit.core.interfaces import IBehavior, is_behavior_capable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decoration:
    """Authored wrapper: a name, an effect and its placement.

    ``POST``: ``effect(value, result) -> result``.
    ``PRE``: ``effect(value) -> value`` (what the inner behavior receives).
    """

    name: str
    effect: Callable[..., Any] = field(repr=False)
    placement: Placement = Placement.POST

    def wrap(self, inner: IBehavior) -> Wrapper:
        return Wrapper(inner, self)


class Wrapper:
    """One layer of a chain.  Holds exactly one inner behavior, fixed at init."""

    __slots__ = ("_inner", "_decoration")

    def __init__(self, inner: IBehavior, decoration: Decoration) -> None:
        if inner is None:
            raise InvalidComposition(
                f"Cannot wrap {decoration.name!r} around nothing"
            )
        if not is_behavior_capable(inner):
            raise InvalidComposition(
                f"Cannot wrap {decoration.name!r} around "
                f"{type(inner).__name__}: it has no invoke()"
            )
        if not callable(decoration.effect):
            raise InvalidComposition(
                f"Decoration {decoration.name!r} has a non-callable effect"
            )
        self._inner = inner
        self._decoration = decoration

    @property
    def name(self) -> str:
        return self._decoration.name

    @property
    def placement(self) -> Placement:
        return self._decoration.placement

    @property
    def inner(self) -> IBehavior:
        return self._inner

    @property
    def decoration(self) -> Decoration:
        return self._decoration

    def invoke(self, value: Any) -> Any:
        effect = self._decoration.effect
        if self._decoration.placement is Placement.PRE:
            return self._inner.invoke(effect(value))
        result = self._inner.invoke(value)
        return effect(value, result)

    def __repr__(self) -> str:
        return f"Wrapper({self.name!r}, placement={self.placement.value})"


# ---------------------------------------------------------------------------
# Functional helpers
# ---------------------------------------------------------------------------

def wrap(inner: IBehavior, decoration: Decoration) -> Wrapper:
    """Wrap *decoration* around *inner*.  Raises InvalidComposition early."""
    return Wrapper(inner, decoration)


def decorate(base: IBehavior, *decorations: Decoration) -> IBehavior:
    """Apply decorations inside-out: the first one ends up innermost."""
    behavior = base
    if not is_behavior_capable(behavior):
        raise InvalidComposition("A chain needs a base behavior with invoke()")
    for decoration in decorations:
        behavior = Wrapper(behavior, decoration)
    return behavior


def iter_layers(behavior: IBehavior) -> Iterator[IBehavior]:
    """Yield every layer from *behavior* inward, ending with the base."""
    current = behavior
    while isinstance(current, (Wrapper, BehaviorChain)):
        if isinstance(current, BehaviorChain):
            current = current.outer
            continue
        yield current
        current = current.inner
    yield current


def unwrap(behavior: IBehavior) -> IBehavior:
    """Return the base behavior at the bottom of a chain."""
    *_, base = iter_layers(behavior)
    return base


def chain_names(behavior: IBehavior) -> list[str]:
    """Names from the outermost layer to the base."""
    return [_name_of(layer) for layer in iter_layers(behavior)]


def _name_of(behavior: Any) -> str:
    name = getattr(behavior, "name", None)
    return name if isinstance(name, str) else type(behavior).__name__


# ---------------------------------------------------------------------------
# Chain value
# ---------------------------------------------------------------------------

class BehaviorChain:
    """Immutable chain around one base behavior.

    ``wrap()`` returns a new chain; the original is untouched, so partial
    chains can be shared and extended independently.

    Usage::

        chain = BehaviorChain(butler).wrap(fancy_hat).wrap(chef_hat)
        chain.invoke("Tacos")
        chain.describe()  # ["ChefHat", "FancyHat", "PlainButler"]
    """

    __slots__ = ("_base", "_outer", "_decorations")

    def __init__(
        self,
        base: IBehavior,
        decorations: tuple[Decoration, ...] = (),
    ) -> None:
        if base is None or not is_behavior_capable(base):
            raise InvalidComposition("A chain needs a base behavior with invoke()")
        self._base = base
        self._decorations = tuple(decorations)
        self._outer = decorate(base, *self._decorations)

    def wrap(self, decoration: Decoration) -> BehaviorChain:
        return BehaviorChain(self._base, self._decorations + (decoration,))

    def invoke(self, value: Any) -> Any:
        return self._outer.invoke(value)

    @property
    def name(self) -> str:
        return _name_of(self._outer)

    @property
    def base(self) -> IBehavior:
        return self._base

    @property
    def outer(self) -> IBehavior:
        return self._outer

    @property
    def depth(self) -> int:
        """Number of wrappers around the base."""
        return len(self._decorations)

    @property
    def layers(self) -> list[str]:
        """Wrapper names, innermost first."""
        return [d.name for d in self._decorations]

    def describe(self) -> list[str]:
        """Layer names outermost first, ending with the base."""
        return chain_names(self._outer)

    def __len__(self) -> int:
        return len(self._decorations)

    def __repr__(self) -> str:
        return f"BehaviorChain({' -> '.join(self.describe())})"
