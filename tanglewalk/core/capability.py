"""The node capability contract.

Any value can take part in a walk. The only thing tanglewalk ever asks of a
node is its children; everything else is optional and only needed by the
operations that rebuild or mutate structures.

Each capability is a ``functools.singledispatch`` generic function with an
explicit default. Specialise them for your own types::

    @tanglewalk.children.register(MyType)
    def _(node):
        return node.kids

    @tanglewalk.set_children.register(MyType)
    def _(node, kids):
        node.kids = list(kids)
        return node

Defaults:

- ``children``: every node is a leaf (empty tuple).
- ``set_children``: only accepted when nothing would change (old and new
  children both empty), otherwise ``MissingCapabilityError``.
- ``data``: the node itself.
- ``set_data``: immutable scalars are simply replaced by the new value,
  anything else raises ``MissingCapabilityError``.
- ``clone``: ``copy.copy`` wrapped in a ``CloneResult``.
"""

import copy
import numbers
from dataclasses import dataclass
from functools import singledispatch
from typing import Any, Optional, Sequence

from .errors import MissingCapabilityError


_IMMUTABLE_SCALARS = (numbers.Number, str, bytes, type(None))


@singledispatch
def children(node) -> Sequence:
    """Return the ordered children of ``node``.

    Leaves must return an empty sequence, never ``None``.
    """
    return ()


@singledispatch
def set_children(node, new_children: Sequence):
    """Replace the children of ``node`` and return the (possibly new) node.

    Implementations must make ``set_children(node, children(node))`` a no-op.
    Nodes that cannot be mutated may return a fresh node instead.
    """
    if len(children(node)) == 0 and len(new_children) == 0:
        return node
    raise MissingCapabilityError("set_children", node)


@singledispatch
def data(node) -> Any:
    """Return the payload of ``node`` that is not already in its children."""
    return node


@singledispatch
def set_data(node, value):
    """Replace the payload of ``node`` and return the (possibly new) node."""
    if isinstance(node, _IMMUTABLE_SCALARS):
        return value
    raise MissingCapabilityError("set_data", node)


@dataclass(frozen=True)
class CloneResult:
    """Outcome of a ``clone`` call.

    Exactly one of ``value`` (on success) or ``error`` (on failure) is
    meaningful.
    """

    ok: bool
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Any) -> "CloneResult":
        return cls(True, value, None)

    @classmethod
    def failure(cls, error: BaseException) -> "CloneResult":
        return cls(False, None, error)


@singledispatch
def clone(node) -> CloneResult:
    """Make a shallow, independent copy of ``node``.

    The copy must accept ``set_children``/``set_data`` without touching the
    original.
    """
    try:
        return CloneResult.success(copy.copy(node))
    except Exception as e:
        return CloneResult.failure(e)


def isleaf(node) -> bool:
    """True if ``node`` has no children."""
    return len(children(node)) == 0


def isbranch(node) -> bool:
    """True if ``node`` has one or more children."""
    return not isleaf(node)
