"""Testing utilities for tanglewalk consumers."""

from .fixtures import (
    FlexiNode,
    Frozen,
    Pair,
    Unclonable,
    make_collider,
    make_deep_chain,
    make_different_heights,
    make_doubleup,
    make_line,
    make_self_cycle,
    make_shared_child,
    make_taproot,
)

__all__ = [
    'FlexiNode',
    'Frozen',
    'Pair',
    'Unclonable',
    'make_collider',
    'make_deep_chain',
    'make_different_heights',
    'make_doubleup',
    'make_line',
    'make_self_cycle',
    'make_shared_child',
    'make_taproot',
]
