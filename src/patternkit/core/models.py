"""Value models shared by the factory and its callers."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Descriptor(BaseModel):
    """Immutable request to construct one object.

    ``kind`` selects the constructor; ``params`` are passed to it as
    keyword arguments.  Kinds may be namespaced as ``family/variant``.
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(min_length=1)
    params: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("kind")
    @classmethod
    def _strip_kind(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("kind must not be blank")
        return value

    @field_validator("params")
    @classmethod
    def _freeze_params(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        # Detached copy behind a read-only view; neither the caller nor a
        # constructor can change it afterwards.
        return MappingProxyType(dict(value))

    @classmethod
    def of(cls, kind: str, **params: Any) -> Descriptor:
        return cls(kind=kind, params=params)

    @property
    def family(self) -> str | None:
        """``"animal"`` for ``"animal/lion"``; ``None`` for top-level kinds."""
        if "/" not in self.kind:
            return None
        return self.kind.split("/", 1)[0]

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def constructor_kwargs(self) -> dict[str, Any]:
        """Fresh copy of params for one constructor call."""
        return dict(self.params)
