"""Stock kinds used by the demo entry point and the test-suite."""

from __future__ import annotations

from patternkit.factory.registry import FactoryRegistry

from .animals import ANIMAL_FAMILY, animal, register_animals
from .butlers import PLAIN_BUTLER, hat, plain_butler
from .journal import EffectJournal


def build_default_registry(*, allow_family_fallback: bool = True) -> FactoryRegistry:
    """Registry with the butler and animal kinds registered."""
    registry = FactoryRegistry(allow_family_fallback=allow_family_fallback)
    registry.register(PLAIN_BUTLER, plain_butler)
    register_animals(registry)
    return registry


__all__ = [
    "ANIMAL_FAMILY",
    "EffectJournal",
    "PLAIN_BUTLER",
    "animal",
    "build_default_registry",
    "hat",
    "plain_butler",
    "register_animals",
]
