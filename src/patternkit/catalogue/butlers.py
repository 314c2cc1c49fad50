"""Butlers and the hats they can wear.

The butler is the base behavior; hats are POST decorations by default,
so each hat's marker is recorded after everything inside it has served.
"""

from __future__ import annotations

from typing import Any

from patternkit.core.behavior import Behavior
from patternkit.core.enums import Placement
from patternkit.chain.wrappers import Decoration

from .journal import EffectJournal

PLAIN_BUTLER = "butler/plain"


def plain_butler(
    greeting: str = "Here are your",
    journal: EffectJournal | None = None,
    name: str = "PlainButler",
) -> Behavior:
    """Serve a dish, recording ``base-serve("<dish>")`` in *journal*."""

    def serve(dish: Any) -> str:
        if journal is not None:
            journal.record(f'base-serve("{dish}")')
        return f"{greeting} {dish}"

    return Behavior(name, serve, kind=PLAIN_BUTLER)


def hat(
    name: str,
    journal: EffectJournal | None = None,
    placement: Placement = Placement.POST,
) -> Decoration:
    """Decoration that records ``<name>-post`` (or ``<name>-pre``).

    POST hats append ``", wearing a <name>"`` to the served text; PRE hats
    pass the dish through unchanged.
    """
    if placement is Placement.PRE:

        def before(dish: Any) -> Any:
            if journal is not None:
                journal.record(f"{name}-pre")
            return dish

        return Decoration(name, before, Placement.PRE)

    def after(dish: Any, served: Any) -> Any:
        if journal is not None:
            journal.record(f"{name}-post")
        return f"{served}, wearing a {name}"

    return Decoration(name, after, Placement.POST)
