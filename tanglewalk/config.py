"""Configuration system for tanglewalk.

This module defines how callers describe a walk: the order, how children
are found, which edges may be followed, how often nodes may be revisited
and what each step should emit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Type, Union

from .core.errors import ConfigurationError
from .core.pathset import AllPaths, NoCycles, OncePerNode, PathSet, resolve_pathset
from .core.shoot import EltType, Shoot, ShootProjection
from .core.traverser import always_connect


class WalkOrder(Enum):
    """In which order to walk the structure."""
    PREORDER = "preorder"     # Parent before children, depth-first
    POSTORDER = "postorder"   # Children before parent, depth-first
    TOPDOWN = "topdown"       # Level by level from the root
    BOTTOMUP = "bottomup"     # Reverse topological, eager


_ORDER_ALIASES = {
    'preorder': WalkOrder.PREORDER,
    'pre': WalkOrder.PREORDER,
    'dfs': WalkOrder.PREORDER,
    'dfs_pre': WalkOrder.PREORDER,
    'postorder': WalkOrder.POSTORDER,
    'post': WalkOrder.POSTORDER,
    'dfs_post': WalkOrder.POSTORDER,
    'topdown': WalkOrder.TOPDOWN,
    'bfs': WalkOrder.TOPDOWN,
    'level': WalkOrder.TOPDOWN,
    'level_order': WalkOrder.TOPDOWN,
    'bottomup': WalkOrder.BOTTOMUP,
    'reverse_level': WalkOrder.BOTTOMUP,
}


def parse_order(order: Union[WalkOrder, str]) -> WalkOrder:
    """Parse a walk order from string or enum.

    Raises:
        ConfigurationError: If the name is not a known order
    """
    if isinstance(order, WalkOrder):
        return order
    key = order.lower().replace("-", "_") if isinstance(order, str) else None
    if key in _ORDER_ALIASES:
        return _ORDER_ALIASES[key]
    raise ConfigurationError(f"Unknown walk order: {order!r}")


@dataclass
class WalkConfig:
    """Complete description of one walk.

    The WalkPlan validates this against itself before any node is touched,
    so a bad configuration fails at call time rather than on first
    iteration.
    """

    order: Union[WalkOrder, str] = WalkOrder.PREORDER

    # Override expansion for this walk only (None = adapter / global default)
    children: Optional[Callable[[Any], Any]] = None

    # Edge gate, evaluated before the path set
    connector: Callable[[Any, Any], bool] = always_connect

    # Revisit policy
    pathset: Union[Type[PathSet], str] = OncePerNode

    # What each step emits
    eltype: EltType = Shoot.NODE

    @classmethod
    def exhaustive(cls, order: Union[WalkOrder, str] = WalkOrder.PREORDER) -> 'WalkConfig':
        """Every path, every time. Does not terminate on cycles."""
        return cls(order=order, pathset=AllPaths)

    @classmethod
    def acyclic(cls, order: Union[WalkOrder, str] = WalkOrder.PREORDER) -> 'WalkConfig':
        """Revisit shared substructure but never re-enter an ancestor."""
        return cls(order=order, pathset=NoCycles)

    @classmethod
    def addressed(cls, order: Union[WalkOrder, str] = WalkOrder.PREORDER) -> 'WalkConfig':
        """Emit ``(trace, node)`` pairs."""
        return cls(order=order, eltype=(Shoot.TRACE, Shoot.NODE))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        try:
            parse_order(self.order)
        except ConfigurationError as e:
            errors.append(str(e))

        if self.children is not None and not callable(self.children):
            errors.append("children must be callable")

        if not callable(self.connector):
            errors.append("connector must be callable")

        try:
            resolve_pathset(self.pathset)
        except ConfigurationError as e:
            errors.append(str(e))

        try:
            ShootProjection(self.eltype)
        except ConfigurationError as e:
            errors.append(str(e))

        return errors
