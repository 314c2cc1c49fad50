"""Logging setup for application entry points.

Library modules log through ``logging.getLogger(__name__)``.  Entry
points call :func:`setup_logging` once, then wrap each run in
:func:`run_context` so every structlog entry emitted during that run
carries its ``run_id`` and whatever else was bound (dish, subject, ...).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from patternkit.core.ids import new_id


def _stringify_enums(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: render str-enums (Placement, FailurePolicy) by value."""
    for key, value in event_dict.items():
        if isinstance(value, str) and type(value) is not str:
            event_dict[key] = str.__str__(value)
    return event_dict


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """Configure the root handler and the structlog pipeline.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine output, "console" for development.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _stringify_enums,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)


@contextmanager
def run_context(**fields: Any) -> Iterator[str]:
    """Bind a fresh ``run_id`` plus *fields* for the duration of a run.

    Yields the run id.  Bindings are removed on exit, including on error.
    """
    run_id = new_id()
    with structlog.contextvars.bound_contextvars(run_id=run_id, **fields):
        yield run_id


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
