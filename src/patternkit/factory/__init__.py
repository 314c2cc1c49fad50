"""Object construction: factory registry, descriptor builder, providers."""

from patternkit.factory.builder import DescriptorBuilder
from patternkit.factory.provider import LazyProvider, StaticProvider
from patternkit.factory.registry import FactoryRegistry

__all__ = [
    "DescriptorBuilder",
    "FactoryRegistry",
    "LazyProvider",
    "StaticProvider",
]
