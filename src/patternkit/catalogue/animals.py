"""Animals as data: one constructor, the species decides the sound."""

from __future__ import annotations

from functools import partial

from patternkit.core.behavior import Behavior

ANIMAL_FAMILY = "animal"

SOUNDS: dict[str, str] = {
    "lion": "roar",
    "snake": "hiss",
}


def animal(
    kind: str = ANIMAL_FAMILY,
    sound: str | None = None,
    name: str | None = None,
) -> Behavior:
    """Build an animal that greets visitors.

    Species without a known sound (reached through the family default)
    make a generic ``"..."``.
    """
    species = kind.split("/", 1)[-1]
    sound = sound or SOUNDS.get(species, "...")
    name = name or species.capitalize()

    def greet(visitor: object) -> str:
        return f"{name} says {sound} to {visitor}"

    return Behavior(name, greet, kind=kind)


def register_animals(registry) -> None:
    """Register every known species plus the ``animal/*`` family default."""
    for species in SOUNDS:
        kind = f"{ANIMAL_FAMILY}/{species}"
        registry.register(kind, partial(animal, kind=kind))
    registry.register_family_default(ANIMAL_FAMILY, animal)
