"""Shoots: what a traversal step emits.

Every step of a walk carries a ``ShootBundle`` (node, trace, level). The
caller picks which parts come out with ``eltype``: a single kind yields bare
values, a tuple of kinds yields tuples in the requested order::

    preorder(root, eltype=Shoot.NODE)                  # node
    preorder(root, eltype=(Shoot.TRACE, Shoot.NODE))   # (trace, node)
    preorder(root, eltype="level")                     # level
"""

from enum import Enum
from typing import Any, Iterator, NamedTuple, Optional, Tuple, Union

from .errors import ConfigurationError


class Shoot(Enum):
    """Kinds of information a traversal step can emit."""
    NODE = "node"      # The node itself
    TRACE = "trace"    # 1-based child indices from the root
    LEVEL = "level"    # Depth, root = 0


NODE = Shoot.NODE
TRACE = Shoot.TRACE
LEVEL = Shoot.LEVEL

Trace = Tuple[int, ...]
EltType = Union[Shoot, str, Tuple[Union[Shoot, str], ...]]


class ShootBundle(NamedTuple):
    """Internal state for one pending or emitted step.

    ``trace`` is None when nobody asked for traces, which keeps deep walks
    from copying an ever-growing tuple at every step. ``parent`` is only
    linked for walks whose path set judges each path on its own.
    """

    node: Any
    trace: Optional[Trace]
    level: int
    parent: Optional["ShootBundle"] = None

    def sprout(self, child: Any, index: Optional[int] = None, increment: int = 1,
               link: bool = False) -> "ShootBundle":
        """Bundle for ``child``, reached through 1-based ``index``.

        An ``index`` of None means no descent: the trace is left unchanged.
        With ``link`` the new bundle points back at this one.
        """
        if self.trace is None or index is None:
            trace = self.trace
        else:
            trace = self.trace + (index,)
        return ShootBundle(child, trace, self.level + increment, self if link else None)

    def ancestors(self) -> Iterator[Any]:
        """Nodes above this one on its own path, nearest first."""
        shoot = self.parent
        while shoot is not None:
            yield shoot.node
            shoot = shoot.parent

    @classmethod
    def seed(cls, root: Any, track_trace: bool, level: int = 0) -> "ShootBundle":
        return cls(root, () if track_trace else None, level)


def _parse_kind(kind: Union[Shoot, str]) -> Shoot:
    if isinstance(kind, Shoot):
        return kind
    if isinstance(kind, str):
        try:
            return Shoot(kind.lower())
        except ValueError:
            pass
    raise ConfigurationError(
        f"Unknown shoot kind: {kind!r}. "
        f"Choose from: {', '.join(s.value for s in Shoot)}"
    )


class ShootProjection:
    """Extracts the requested parts of a ``ShootBundle``."""

    def __init__(self, eltype: EltType = Shoot.NODE):
        if isinstance(eltype, (tuple, list)):
            kinds = tuple(_parse_kind(k) for k in eltype)
            if not kinds:
                raise ConfigurationError("eltype tuple must name at least one shoot kind")
            if len(set(kinds)) != len(kinds):
                raise ConfigurationError(f"eltype has duplicate shoot kinds: {eltype!r}")
            self.kinds = kinds
            self.single = False
        else:
            self.kinds = (_parse_kind(eltype),)
            self.single = True

    @property
    def needs_trace(self) -> bool:
        return Shoot.TRACE in self.kinds

    def extract(self, bundle: ShootBundle) -> Any:
        if self.single:
            return _take(self.kinds[0], bundle)
        return tuple(_take(kind, bundle) for kind in self.kinds)

    __call__ = extract

    def __repr__(self) -> str:
        names = ", ".join(k.name for k in self.kinds)
        return f"ShootProjection({names})" if self.single else f"ShootProjection(({names}))"


def _take(kind: Shoot, bundle: ShootBundle) -> Any:
    if kind is Shoot.NODE:
        return bundle.node
    if kind is Shoot.TRACE:
        return bundle.trace
    return bundle.level
