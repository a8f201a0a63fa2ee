"""Mapping and pruning whole structures.

Every function here is a postorder rebuild: each distinct node is visited
once, children before parents, and written back with ``set_data`` and
``set_children``. Since the value those return is what gets wired into the
parent, immutable node types that hand back a new object work as well as
mutable ones.

The ``inplace=False`` default clones every node first (``CloneError`` on
failure) and leaves the input untouched. With ``inplace=True`` mutable
nodes are modified where they are.

Cycles are kept: an edge back to a node that is still being rebuilt points
at that node's original.
"""

from typing import Any, Callable, Optional

from .core.adapter import RecordingAdapter, TreeAdapter, resolve_adapter
from .core.errors import CloneError
from .core.nodeset import NodeMap
from .core.traverser import Connector, PostorderTraverser, always_connect


Predicate = Callable[[Any], bool]


def _rebuild(root: Any,
             adapter: TreeAdapter,
             inplace: bool,
             transform: Optional[Callable[[Any], Any]] = None,
             condition: Optional[Predicate] = None,
             connector: Connector = always_connect) -> Any:
    """Postorder rebuild shared by the public functionals.

    Args:
        root: Root of the structure
        adapter: TreeAdapter for the structure
        inplace: Modify nodes in place instead of cloning them
        transform: Function(data) -> data applied where ``condition`` holds
        condition: Function(original node) -> bool (None = everywhere)
        connector: Edges it rejects are dropped from the result
    """
    built = NodeMap()
    recorder = RecordingAdapter(adapter)
    for node in PostorderTraverser(recorder, connector).traverse(root):
        kids = [
            built.get(child, child)
            for child in recorder.expansion(node)
            if connector(node, child)
        ]
        mapped = condition is None or condition(node)

        if inplace:
            new_node = node
        else:
            result = adapter.clone(node)
            if not result.ok:
                raise CloneError(node, result.error) from result.error
            new_node = result.value

        if transform is not None and mapped:
            new_node = adapter.set_data(new_node, transform(adapter.get_data(new_node)))
        built[node] = adapter.set_children(new_node, kids)
    return built[root]


def map_data(f: Callable[[Any], Any],
             root: Any,
             condition: Optional[Predicate] = None,
             inplace: bool = False,
             adapter: Optional[TreeAdapter] = None) -> Any:
    """Apply ``f`` to the data of every node (or every node matching ``condition``).

    Args:
        f: Function(data) -> new data
        root: Root of the structure
        condition: Function(node) -> bool; only matching nodes are mapped
        inplace: Modify the structure itself instead of a copy
        adapter: TreeAdapter for the structure

    Returns:
        The (new) root

    Example:
        >>> doubled = map_data(lambda x: x * 2, root, condition=isleaf)
    """
    adapter = resolve_adapter(adapter)
    return _rebuild(root, adapter, inplace, transform=f, condition=condition)


def map_leaves(f: Callable[[Any], Any], root: Any, inplace: bool = False,
               adapter: Optional[TreeAdapter] = None) -> Any:
    """``map_data`` restricted to leaves."""
    adapter = resolve_adapter(adapter)
    return _rebuild(root, adapter, inplace, transform=f, condition=adapter.is_leaf)


def map_branches(f: Callable[[Any], Any], root: Any, inplace: bool = False,
                 adapter: Optional[TreeAdapter] = None) -> Any:
    """``map_data`` restricted to branches. Links to children are kept."""
    adapter = resolve_adapter(adapter)
    return _rebuild(root, adapter, inplace, transform=f, condition=adapter.is_branch)


def prune(keep: Predicate,
          root: Any,
          condition: Optional[Predicate] = None,
          inplace: bool = False,
          adapter: Optional[TreeAdapter] = None) -> Any:
    """Remove every child for which ``keep`` is false, like ``filter``.

    Only children matching ``condition`` are candidates for removal. A
    removed child takes its whole subtree with it unless that subtree is
    also reachable some other way. The root itself is never removed.

    Args:
        keep: Function(node) -> bool; False removes the node
        root: Root of the structure
        condition: Function(node) -> bool limiting which nodes may be removed
        inplace: Modify the structure itself instead of a copy
        adapter: TreeAdapter for the structure

    Returns:
        The (new) root
    """
    adapter = resolve_adapter(adapter)

    def kept_edge(parent: Any, child: Any) -> bool:
        if condition is not None and not condition(child):
            return True
        return bool(keep(child))

    return _rebuild(root, adapter, inplace, connector=kept_edge)


def prune_leaves(keep: Predicate, root: Any, inplace: bool = False,
                 adapter: Optional[TreeAdapter] = None) -> Any:
    """``prune`` that only ever removes leaves."""
    adapter = resolve_adapter(adapter)
    return prune(keep, root, condition=adapter.is_leaf, inplace=inplace, adapter=adapter)


def prune_branches(keep: Predicate, root: Any, inplace: bool = False,
                   adapter: Optional[TreeAdapter] = None) -> Any:
    """``prune`` that only ever removes branches (with their subtrees)."""
    adapter = resolve_adapter(adapter)
    return prune(keep, root, condition=adapter.is_branch, inplace=inplace, adapter=adapter)


def copy_structure(root: Any, adapter: Optional[TreeAdapter] = None) -> Any:
    """Clone every node and rewire the clones.

    Shallower than ``copy.deepcopy``: only what the capabilities reach is
    copied, and shared substructure stays shared.
    """
    adapter = resolve_adapter(adapter)
    return _rebuild(root, adapter, inplace=False)
