"""Trace addressing: reading, writing and searching by trace.

A trace is a tuple of 1-based child indices leading from a root to a node.
``()`` addresses the root itself. Traces come out of any walk with
``eltype=TRACE`` and go back in through ``pluck`` and ``graft``.
"""

import numbers
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .api import preorder, tracepairs
from .core.adapter import FunctionAdapter, RecordingAdapter, TreeAdapter, resolve_adapter
from .core.errors import CloneError
from .core.nodeset import NodeMap, NodeSet
from .core.pathset import AllPaths, OncePerNode
from .core.shoot import Trace
from .core.traverser import PostorderTraverser, TopdownTraverser


def _child_at(adapter: TreeAdapter, node: Any, index: Any) -> Any:
    """The ``index``-th (1-based) child of ``node``.

    Raises:
        TypeError: If ``index`` is not an integer
        IndexError: If ``index`` is out of range
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise TypeError(f"trace entries must be integers, got {index!r}")
    kids = adapter.get_children(node)
    if index < 1 or index > len(kids):
        raise IndexError(f"child index {index} out of range for {len(kids)} children")
    return kids[index - 1]


def pluck(root: Any, trace: Iterable[int], default: Any = None, *,
          adapter: Optional[TreeAdapter] = None,
          children: Optional[Callable[[Any], Any]] = None) -> Any:
    """Get the node at ``trace`` below ``root``.

    Never raises for a bad trace: an index out of range, below 1 or not an
    integer, or a step through a leaf, all return ``default``.

    Example:
        >>> pluck(root, (1, 2))        # second child of the first child
        >>> pluck(root, (9,), default="missing")
        'missing'
    """
    adapter = resolve_adapter(adapter, children)
    node = root
    try:
        for index in trace:
            node = _child_at(adapter, node, index)
    except (IndexError, TypeError, KeyError):
        return default
    return node


def graft(root: Any, trace: Sequence[int], value: Any, *,
          adapter: Optional[TreeAdapter] = None,
          children: Optional[Callable[[Any], Any]] = None) -> Any:
    """Put ``value`` at ``trace`` below ``root``.

    The parent at ``trace[:-1]`` gets a copy of its children list with one
    entry replaced, written back with ``set_children``. When a parent is
    immutable and ``set_children`` hands back a new object, that object is
    grafted into its own parent in turn, up to the root.

    Args:
        root: Root of the structure (modified in place where possible)
        trace: Where to put ``value``
        value: The replacement node
        adapter: TreeAdapter for the structure
        children: Function(node) -> children, overriding the adapter

    Returns:
        The root: ``root`` itself, a rebuilt root if the path to it was
        immutable, or ``value`` when ``trace`` is empty

    Raises:
        IndexError: If an index is out of range
        ValueError: If an index is below 1 or not an integer
        MissingCapabilityError: If a parent type has no ``set_children``
    """
    adapter = resolve_adapter(adapter, children)
    trace = tuple(trace)
    if not trace:
        return value
    for index in trace:
        if isinstance(index, bool) or not isinstance(index, numbers.Integral) or index < 1:
            raise ValueError(f"invalid trace {trace!r}: entries must be integers >= 1")

    # each parent is rewritten from the same children list it was navigated through
    recorder = RecordingAdapter(adapter)
    path = [root]
    for index in trace[:-1]:
        path.append(_child_at(recorder, path[-1], index))

    replacement = value
    for parent, index in zip(reversed(path), reversed(trace)):
        kids = list(recorder.get_children(parent))
        if index > len(kids):
            raise IndexError(f"child index {index} out of range for {len(kids)} children")
        kids[index - 1] = replacement
        updated = adapter.set_children(parent, kids)
        if updated is parent:
            return root
        replacement = updated
    return replacement


def findtrace_where(predicate: Callable[[Any], bool], root: Any, **kwargs) -> Optional[Trace]:
    """Trace of the first node (in preorder) for which ``predicate`` is true.

    Returns:
        The trace, or None if nothing matches
    """
    for trace, node in tracepairs(root, pathset=OncePerNode, **kwargs):
        if predicate(node):
            return trace
    return None


def findtrace(target: Any, root: Any, **kwargs) -> Optional[Trace]:
    """Trace of the first node equal to ``target``, or None."""
    return findtrace_where(lambda node: node == target, root, **kwargs)


def findtraces_where(predicate: Callable[[Any], bool], root: Any, **kwargs) -> List[Trace]:
    """Every trace leading to a node for which ``predicate`` is true.

    All paths are followed, so a shared node shows up once per path.
    Does not terminate on cyclic structures.
    """
    return [
        trace
        for trace, node in tracepairs(root, pathset=AllPaths, **kwargs)
        if predicate(node)
    ]


def findtraces(target: Any, root: Any, **kwargs) -> List[Trace]:
    """Every trace leading to a node equal to ``target``."""
    return findtraces_where(lambda node: node == target, root, **kwargs)


def _parent_map(root: Any, adapter: TreeAdapter) -> NodeMap:
    """Map every reachable node to its distinct parents, first-seen order."""
    recorder = RecordingAdapter(adapter)
    parents_of = NodeMap()
    for node in TopdownTraverser(recorder, pathset=OncePerNode).traverse(root):
        for child in recorder.expansion(node):
            seen = parents_of.setdefault(child, ([], NodeSet()))
            if node not in seen[1]:
                seen[1].add(node)
                seen[0].append(node)
    return parents_of


def parents(root: Any, child: Any, *,
            adapter: Optional[TreeAdapter] = None,
            children: Optional[Callable[[Any], Any]] = None) -> List[Any]:
    """Distinct nodes below ``root`` that have ``child`` among their children.

    Each node is expanded once, so shared substructure and cycles are fine.
    The root only counts if some path leads back to it.
    """
    adapter = resolve_adapter(adapter, children)
    entry = _parent_map(root, adapter).get(child)
    return list(entry[0]) if entry is not None else []


def uproot(root: Any, child: Any, *,
           adapter: Optional[TreeAdapter] = None,
           children: Optional[Callable[[Any], Any]] = None) -> Any:
    """Cut ``child`` and everything above it out of ``root`` and flip the arrows.

    In the result ``child`` is the root and each node's children are its
    former parents. Every node is cloned first and rewired with
    ``set_children``, so the original structure is left untouched. On a
    cycle, edges that would lead back to a node still being built are
    left out.

    Example:
        root -> mid -> leaf  becomes  leaf' -> mid' -> root'

    Raises:
        CloneError: If a node on the way up cannot be cloned
        MissingCapabilityError: If a node type has no ``set_children``
    """
    adapter = resolve_adapter(adapter, children)
    parents_of = _parent_map(root, adapter)

    def view_children(node: Any) -> List[Any]:
        entry = parents_of.get(node)
        return entry[0] if entry is not None else []

    reversed_view = FunctionAdapter(view_children)
    built = NodeMap()
    for node in PostorderTraverser(reversed_view, pathset=OncePerNode).traverse(child):
        result = adapter.clone(node)
        if not result.ok:
            raise CloneError(node, result.error) from result.error
        kids = [built[p] for p in view_children(node) if p in built]
        built[node] = adapter.set_children(result.value, kids)
    return built[child]


def ischild(potential_child: Any, parent: Any, *,
            adapter: Optional[TreeAdapter] = None,
            children: Optional[Callable[[Any], Any]] = None) -> bool:
    """True if ``potential_child`` is anywhere below ``parent``.

    This is a descendant test, not just ``in children(parent)``. ``parent``
    only counts as its own child through a cycle.
    """
    adapter = resolve_adapter(adapter, children)
    kids = adapter.get_children(parent)
    if len(kids) == 0:
        return False
    return any(node == potential_child for node in preorder(*kids, adapter=adapter))


def isparent(potential_parent: Any, child: Any, *,
             adapter: Optional[TreeAdapter] = None,
             children: Optional[Callable[[Any], Any]] = None) -> bool:
    """True if ``child`` is anywhere below ``potential_parent``."""
    return ischild(child, potential_parent, adapter=adapter, children=children)


def getatkeys(container: Any, keys: Iterable[Any], default: Any = None) -> Any:
    """Index into plain nested containers, e.g. ``d[1]['a'][0]``.

    Works on anything subscriptable, with no capabilities involved.
    Returns ``default`` if any step fails.

    Example:
        >>> getatkeys({1: {'a': ['x']}}, (1, 'a', 0))
        'x'
    """
    current = container
    try:
        for key in keys:
            current = current[key]
    except (LookupError, TypeError):
        return default
    return current


def setatkeys(container: Any, keys: Sequence[Any], value: Any) -> Any:
    """Assign ``value`` at ``keys`` in plain nested containers.

    Returns:
        ``container``

    Raises:
        LookupError: If an intermediate key is missing
        ValueError: If ``keys`` is empty
    """
    keys = tuple(keys)
    if not keys:
        raise ValueError("setatkeys needs at least one key")
    current = container
    for key in keys[:-1]:
        current = current[key]
    current[keys[-1]] = value
    return container
