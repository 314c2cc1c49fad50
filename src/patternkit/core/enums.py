"""Enumerations used across the framework."""

from enum import Enum


class Placement(str, Enum):
    """When a decoration runs its effect relative to the wrapped call."""

    PRE = "pre"  # effect(value) -> value, then delegate inward
    POST = "post"  # delegate inward, then effect(value, result) -> result


class FailurePolicy(str, Enum):
    """What a hub does with listener failures once a pass completes."""

    RAISE = "raise"  # raise ListenerFailure with the aggregate report
    COLLECT = "collect"  # return the report, caller inspects failures
