"""Descriptor builder: fluent helper for assembling construction requests.

The factory only ever sees the finished, frozen Descriptor.
"""

from __future__ import annotations

from typing import Any

from patternkit.core.errors import ConfigError
from patternkit.core.models import Descriptor


class DescriptorBuilder:
    """Accumulates params step by step, then freezes them.

    Usage::

        descriptor = (
            DescriptorBuilder("butler/plain")
            .param("greeting", "Bon appetit,")
            .build()
        )
        registry.create(descriptor)
    """

    def __init__(self, kind: str = "") -> None:
        self._kind = kind
        self._params: dict[str, Any] = {}

    def kind(self, kind: str) -> DescriptorBuilder:
        self._kind = kind
        return self

    def param(self, key: str, value: Any) -> DescriptorBuilder:
        self._params[key] = value
        return self

    def params(self, **values: Any) -> DescriptorBuilder:
        self._params.update(values)
        return self

    def build(self) -> Descriptor:
        """Return a frozen Descriptor holding a copy of the params."""
        if not self._kind or not self._kind.strip():
            raise ConfigError("DescriptorBuilder needs a kind before build()")
        return Descriptor(kind=self._kind, params=dict(self._params))
