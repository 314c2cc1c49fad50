"""Behavior composition: decorations, wrappers, chains and selectors."""

from patternkit.chain.selector import StrategySelector
from patternkit.chain.wrappers import (
    BehaviorChain,
    Decoration,
    Wrapper,
    chain_names,
    decorate,
    iter_layers,
    unwrap,
    wrap,
)

__all__ = [
    "BehaviorChain",
    "Decoration",
    "StrategySelector",
    "Wrapper",
    "chain_names",
    "decorate",
    "iter_layers",
    "unwrap",
    "wrap",
]
