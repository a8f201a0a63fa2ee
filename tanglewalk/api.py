"""High-level API for tanglewalk.

This module provides simple, functional interfaces for the four walk orders
and the operations built on them. These functions wrap the WalkConfig /
WalkPlan layer for ease of use in the common case.

Every walk function validates its arguments when called and raises
``ConfigurationError`` right away; only the iteration itself is deferred.
"""

import warnings
from typing import Any, Callable, Iterator, List, Optional, Tuple, Type, Union

import numpy as np

from .config import WalkConfig, WalkOrder
from .core.adapter import RecordingAdapter, TreeAdapter, resolve_adapter
from .core.pathset import AllPaths, OncePerNode, PathSet
from .core.shoot import EltType, Shoot, Trace
from .core.traverser import TopdownTraverser, always_connect
from .core.nodeset import NodeMap
from .planning import WalkPlan


def _resolve_revisit(pathset: Union[Type[PathSet], str], revisit: Optional[bool]):
    """Translate the legacy ``revisit`` flag into a path set."""
    if revisit is None:
        return pathset
    warnings.warn(
        "The 'revisit' argument is deprecated; "
        "use pathset=AllPaths (revisit=True) or pathset=OncePerNode (revisit=False)",
        DeprecationWarning,
        stacklevel=3,
    )
    return AllPaths if revisit else OncePerNode


def _walk(order: WalkOrder,
          roots: Tuple[Any, ...],
          children: Optional[Callable[[Any], Any]],
          connector: Optional[Callable[[Any, Any], bool]],
          pathset: Union[Type[PathSet], str],
          eltype: EltType,
          adapter: Optional[TreeAdapter]) -> Iterator[Any]:
    config = WalkConfig(
        order=order,
        children=children,
        connector=connector if connector is not None else always_connect,
        pathset=pathset,
        eltype=eltype,
    )
    plan = WalkPlan(config, adapter)
    # warnings point past _walk and the public walk function
    return plan.execute(*roots, stacklevel=3)


def preorder(*roots: Any,
             children: Optional[Callable[[Any], Any]] = None,
             connector: Optional[Callable[[Any, Any], bool]] = None,
             pathset: Union[Type[PathSet], str] = OncePerNode,
             eltype: EltType = Shoot.NODE,
             adapter: Optional[TreeAdapter] = None,
             revisit: Optional[bool] = None) -> Iterator[Any]:
    """Walk depth-first, emitting each node before its children.

    Children are visited left to right.

    Args:
        *roots: One or more roots; several roots are walked as siblings
        children: Function(node) -> children, overriding the adapter
        connector: Function(parent, child) -> bool; edges it rejects are
            never followed
        pathset: Revisit policy (class or name, default OncePerNode)
        eltype: What each step yields: Shoot.NODE, Shoot.TRACE, Shoot.LEVEL
            or a tuple of them
        adapter: TreeAdapter for the structure
        revisit: Deprecated; use ``pathset``

    Returns:
        Lazy iterator of projected shoots

    Example:
        >>> for trace, node in preorder(root, eltype=(TRACE, NODE)):
        ...     print(trace, node)
    """
    pathset = _resolve_revisit(pathset, revisit)
    return _walk(WalkOrder.PREORDER, roots, children, connector, pathset, eltype, adapter)


def postorder(*roots: Any,
              children: Optional[Callable[[Any], Any]] = None,
              connector: Optional[Callable[[Any, Any], bool]] = None,
              pathset: Union[Type[PathSet], str] = OncePerNode,
              eltype: EltType = Shoot.NODE,
              adapter: Optional[TreeAdapter] = None,
              revisit: Optional[bool] = None) -> Iterator[Any]:
    """Walk depth-first, emitting each node after all of its children.

    Arguments as for ``preorder``. Lazy.
    """
    pathset = _resolve_revisit(pathset, revisit)
    return _walk(WalkOrder.POSTORDER, roots, children, connector, pathset, eltype, adapter)


def topdown(*roots: Any,
            children: Optional[Callable[[Any], Any]] = None,
            connector: Optional[Callable[[Any, Any], bool]] = None,
            pathset: Union[Type[PathSet], str] = OncePerNode,
            eltype: EltType = Shoot.NODE,
            adapter: Optional[TreeAdapter] = None,
            revisit: Optional[bool] = None) -> Iterator[Any]:
    """Walk breadth-first, one level at a time from the root.

    Arguments as for ``preorder``. Lazy.
    """
    pathset = _resolve_revisit(pathset, revisit)
    return _walk(WalkOrder.TOPDOWN, roots, children, connector, pathset, eltype, adapter)


def bottomup(*roots: Any,
             children: Optional[Callable[[Any], Any]] = None,
             connector: Optional[Callable[[Any, Any], bool]] = None,
             pathset: Union[Type[PathSet], str] = OncePerNode,
             eltype: EltType = Shoot.NODE,
             adapter: Optional[TreeAdapter] = None,
             revisit: Optional[bool] = None) -> Iterator[Any]:
    """Walk from the leaves up, every node after all of its children.

    Unlike the other orders this one is eager: the whole structure is
    walked when the function is called. Nodes on (or above) a cycle can
    never be emitted; they are left out with a ``CycleWarning``.

    Arguments as for ``preorder``.
    """
    pathset = _resolve_revisit(pathset, revisit)
    return _walk(WalkOrder.BOTTOMUP, roots, children, connector, pathset, eltype, adapter)


def leaves(*roots: Any,
           children: Optional[Callable[[Any], Any]] = None,
           adapter: Optional[TreeAdapter] = None,
           **kwargs) -> Iterator[Any]:
    """Nodes without children, in preorder.

    Args:
        *roots: Root node(s)
        children: Function(node) -> children, overriding the adapter
        adapter: TreeAdapter for the structure
        **kwargs: connector, pathset (see ``preorder``)
    """
    adapter = resolve_adapter(adapter, children)
    return filter(adapter.is_leaf, preorder(*roots, adapter=adapter, **kwargs))


def branches(*roots: Any,
             children: Optional[Callable[[Any], Any]] = None,
             adapter: Optional[TreeAdapter] = None,
             **kwargs) -> Iterator[Any]:
    """Nodes with at least one child, in preorder.

    Arguments as for ``leaves``.
    """
    adapter = resolve_adapter(adapter, children)
    return filter(adapter.is_branch, preorder(*roots, adapter=adapter, **kwargs))


def traces(*roots: Any, **kwargs) -> Iterator[Trace]:
    """Traces of every node in preorder. The root's trace is ``()``."""
    return preorder(*roots, eltype=Shoot.TRACE, **kwargs)


def tracepairs(*roots: Any, **kwargs) -> Iterator[Tuple[Trace, Any]]:
    """``(trace, node)`` pairs in preorder."""
    return preorder(*roots, eltype=(Shoot.TRACE, Shoot.NODE), **kwargs)


def adjacencymatrix(root: Any,
                    children: Optional[Callable[[Any], Any]] = None,
                    adapter: Optional[TreeAdapter] = None,
                    connector: Optional[Callable[[Any, Any], bool]] = None,
                    return_nodes: bool = False) -> Union[np.ndarray, Tuple[np.ndarray, List[Any]]]:
    """Build the adjacency matrix of everything reachable from ``root``.

    Nodes are numbered in the order a top-down walk first meets them, so
    the root is always row 0. Entry ``[i, j]`` is 1 when ``nodes[j]`` is
    a child of ``nodes[i]``. Each node is expanded exactly once and the
    rows are filled from that expansion, so repeated children, cycles and
    ``children`` functions that build fresh objects are all fine.

    Args:
        root: Root node
        children: Function(node) -> children, overriding the adapter
        adapter: TreeAdapter for the structure
        connector: Function(parent, child) -> bool; rejected edges are left out
        return_nodes: Also return the node order

    Returns:
        Square ``numpy`` int array, or ``(matrix, nodes)`` with ``return_nodes``

    Example:
        >>> m, nodes = adjacencymatrix(root, return_nodes=True)
        >>> m.shape == (len(nodes), len(nodes))
        True
    """
    recorder = RecordingAdapter(resolve_adapter(adapter, children))
    connector = connector if connector is not None else always_connect
    nodes = list(TopdownTraverser(recorder, connector, OncePerNode).traverse(root))

    index = NodeMap()
    for i, node in enumerate(nodes):
        index[node] = i

    matrix = np.zeros((len(nodes), len(nodes)), dtype=int)
    for i, node in enumerate(nodes):
        for child in recorder.expansion(node):
            j = index.get(child)
            if j is not None and connector(node, child):
                matrix[i, j] = 1

    if return_nodes:
        return matrix, nodes
    return matrix
