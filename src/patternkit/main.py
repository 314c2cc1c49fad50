"""Application bootstrap.

Wires settings, logging, a factory registry, a decorated butler and a
mood subject together and runs one serving.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from .catalogue import PLAIN_BUTLER, EffectJournal, build_default_registry, hat
from .chain.wrappers import BehaviorChain
from .core.config import Settings, load_settings
from .factory.builder import DescriptorBuilder
from .factory.registry import FactoryRegistry
from .notify.subject import create_subject
from .observability.logger import get_logger, run_context, setup_logging

log = get_logger(__name__)

DEFAULT_HATS: tuple[str, ...] = ("FancyHat", "ChefHat")
MOOD_SUBJECT = "butler.mood"


@dataclass
class DemoResult:
    """What one serving produced, for printing or assertions."""

    served: str
    effects: list[str] = field(default_factory=list)
    layers: list[str] = field(default_factory=list)
    moods: list[Any] = field(default_factory=list)
    run_id: str = ""


def run(
    config_path: str | None = None,
    overrides: dict[str, Any] | None = None,
    dish: str = "Tacos",
    hats: Sequence[str] = DEFAULT_HATS,
    registry: FactoryRegistry | None = None,
) -> DemoResult:
    """Main entry point. Load config, wire components, serve one dish.

    Hats are applied in order, so the first hat is innermost and its
    effect is recorded right after the base serving.
    """

    # 1. Load settings
    settings = load_settings(config_path=config_path, overrides=overrides)

    # 2. Set up logging and metrics
    _setup_observability(settings)

    with run_context(dish=dish, subject=MOOD_SUBJECT) as run_id:
        # 3. Factory
        if registry is None:
            registry = build_default_registry(
                allow_family_fallback=settings.factory.allow_family_fallback,
            )

        # 4. Build the chain
        journal = EffectJournal()
        descriptor = DescriptorBuilder(PLAIN_BUTLER).param("journal", journal).build()
        chain = BehaviorChain(registry.create(descriptor))
        for name in hats:
            chain = chain.wrap(hat(name, journal))

        # 5. Subject
        mood = create_subject(MOOD_SUBJECT, settings.hub, initial_state="idle")
        moods: list[Any] = []
        mood.subscribe(moods.append)

        # 6. Serve
        mood.set_state("serving")
        served = chain.invoke(dish)
        mood.set_state("idle")

        log.info("served", layers=chain.describe(), effects=journal.entries)

    return DemoResult(
        served=served,
        effects=journal.entries,
        layers=chain.describe(),
        moods=moods,
        run_id=run_id,
    )


def _setup_observability(settings: Settings) -> None:
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    if settings.observability.metrics_enabled:
        from .observability.metrics import start_metrics_server

        start_metrics_server(port=settings.observability.metrics_port)
        log.info("metrics server started", port=settings.observability.metrics_port)
