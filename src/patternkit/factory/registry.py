"""Factory registry.

Maps kind tags to constructors and turns Descriptors into constructed
objects.  There is no module-level registry: build one, register kinds on
it, and pass it to whoever needs to create objects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from patternkit.core.errors import ConstructionError, UnknownKind
from patternkit.core.interfaces import IConstructible, is_constructible
from patternkit.core.models import Descriptor
from patternkit.observability.metrics import (
    record_construction_failure,
    record_created,
)

logger = logging.getLogger(__name__)

Constructor = Callable[..., IConstructible]


class FactoryRegistry:
    """Resolves descriptors to constructors and builds the result.

    Usage::

        registry = FactoryRegistry()

        @registry.kind("butler/plain")
        def plain_butler(greeting: str = "Here are your") -> Behavior:
            ...

        butler = registry.create(Descriptor.of("butler/plain"))

    Family fallback: when ``allow_family_fallback`` is on, a kind such as
    ``animal/dragon`` that has no constructor of its own resolves to the
    constructor registered with ``register_family_default("animal", ...)``.
    That constructor also receives ``kind=`` with the full tag.  Top-level
    kinds and unknown families always raise ``UnknownKind``.
    """

    def __init__(self, *, allow_family_fallback: bool = True) -> None:
        self._constructors: dict[str, Constructor] = {}
        self._family_defaults: dict[str, Constructor] = {}
        self._allow_family_fallback = allow_family_fallback

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        kind: str,
        constructor: Constructor,
        *,
        replace: bool = False,
    ) -> None:
        """Register *constructor* for *kind*.

        Raises ValueError if the kind is already registered and
        ``replace`` is not set.
        """
        if not kind or not kind.strip():
            raise ValueError("kind must not be blank")
        if not callable(constructor):
            raise TypeError(f"Constructor for '{kind}' is not callable")
        if kind in self._constructors and not replace:
            raise ValueError(f"Kind already registered: {kind}")
        self._constructors[kind] = constructor
        logger.info("Registered kind %s -> %s", kind, _qualname(constructor))

    def register_family_default(
        self,
        family: str,
        constructor: Constructor,
        *,
        replace: bool = False,
    ) -> None:
        """Register the fallback constructor for ``family/<anything>``."""
        if "/" in family:
            raise ValueError(f"Family name must not contain '/': {family}")
        if family in self._family_defaults and not replace:
            raise ValueError(f"Family default already registered: {family}")
        self._family_defaults[family] = constructor
        logger.info(
            "Registered family default %s/* -> %s",
            family,
            _qualname(constructor),
        )

    def kind(self, kind: str, *, replace: bool = False):
        """Decorator form of :meth:`register`."""

        def decorator(constructor: Constructor) -> Constructor:
            self.register(kind, constructor, replace=replace)
            return constructor

        return decorator

    def unregister(self, kind: str) -> Constructor | None:
        """Remove a kind. Returns its constructor, or None if absent."""
        constructor = self._constructors.pop(kind, None)
        if constructor is not None:
            logger.info("Unregistered kind %s", kind)
        return constructor

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def create(self, descriptor: Descriptor | str, **params: Any) -> IConstructible:
        """Construct the object a descriptor asks for.

        A bare kind string is accepted; keyword arguments then become the
        descriptor params.

        Raises:
            UnknownKind: blank kind, or no constructor (and no permitted
                fallback).
            ConstructionError: the constructor raised, or returned an
                object without ``name`` and ``invoke``.
        """
        if isinstance(descriptor, str):
            try:
                descriptor = Descriptor(kind=descriptor, params=params)
            except ValidationError as exc:
                record_construction_failure(descriptor, "invalid_descriptor")
                raise UnknownKind(descriptor, self._constructors.keys()) from exc
        elif params:
            raise TypeError("Pass params either in the Descriptor or as kwargs, not both")

        constructor, kwargs = self._resolve(descriptor)

        try:
            product = constructor(**kwargs)
        except Exception as exc:
            record_construction_failure(descriptor.kind, "constructor_error")
            raise ConstructionError(
                f"Constructor for '{descriptor.kind}' failed: {exc}"
            ) from exc

        if not is_constructible(product):
            record_construction_failure(descriptor.kind, "not_constructible")
            raise ConstructionError(
                f"Constructor for '{descriptor.kind}' returned "
                f"{type(product).__name__}, which lacks name/invoke"
            )

        record_created(descriptor.kind)
        logger.debug("Created %s (kind=%s)", product.name, descriptor.kind)
        return product

    def _resolve(self, descriptor: Descriptor) -> tuple[Constructor, dict[str, Any]]:
        kwargs = descriptor.constructor_kwargs()

        constructor = self._constructors.get(descriptor.kind)
        if constructor is not None:
            return constructor, kwargs

        family = descriptor.family
        if (
            self._allow_family_fallback
            and family is not None
            and family in self._family_defaults
        ):
            logger.debug(
                "Kind %s not registered; using %s family default",
                descriptor.kind,
                family,
            )
            kwargs["kind"] = descriptor.kind
            return self._family_defaults[family], kwargs

        record_construction_failure(descriptor.kind, "unknown_kind")
        raise UnknownKind(descriptor.kind, self._constructors.keys())

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def list_kinds(self) -> list[str]:
        """List all registered kinds."""
        return sorted(self._constructors.keys())

    def list_families(self) -> list[str]:
        """List families that have a fallback constructor."""
        return sorted(self._family_defaults.keys())

    @property
    def allow_family_fallback(self) -> bool:
        return self._allow_family_fallback

    def __contains__(self, kind: object) -> bool:
        return kind in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)


def _qualname(fn: Any) -> str:
    return getattr(fn, "__qualname__", type(fn).__name__)
