"""Walk strategies for tanglewalk.

Traversers implement the four walk orders. They are independent of the
structure being walked: children come from the TreeAdapter, revisit rules
from a PathSet, scheduling from a Frontier and output from a
ShootProjection.

None of them recurse, so depth is bounded by memory rather than by the
interpreter's call stack. Preorder, postorder and topdown are lazy
generators; bottomup needs the whole structure before it can emit anything
and is computed eagerly when ``traverse`` is called.
"""

import warnings
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, Union

from .adapter import DEFAULT_ADAPTER, RecordingAdapter, TreeAdapter
from .errors import ConfigurationError, CycleWarning
from .frontier import PostorderStackFrontier, QueueFrontier, StackFrontier, TraceQueueFrontier
from .nodeset import NodeSet
from .pathset import NoCycles, OncePerNode, PathSet, resolve_pathset
from .shoot import EltType, Shoot, ShootBundle, ShootProjection, Trace


Connector = Callable[[Any, Any], bool]


def always_connect(node: Any, child: Any) -> bool:
    """Default connector: every edge may be followed."""
    return True


class MultiRoot:
    """Transient parent used to walk several roots in one call.

    It is never emitted; its children are the roots, in order.
    """

    __slots__ = ("roots",)

    def __init__(self, roots: Sequence[Any]):
        self.roots = list(roots)

    def __repr__(self) -> str:
        return f"MultiRoot({len(self.roots)} roots)"


class TreeTraverser(ABC):
    """Abstract base class for walk orders.

    Subclasses implement ``_walk``, which produces ShootBundles starting
    from a seed bundle. ``traverse`` handles seeding and projection.
    """

    #: False for orders that must materialize everything before the first result
    lazy = True

    def __init__(self,
                 adapter: Optional[TreeAdapter] = None,
                 connector: Optional[Connector] = None,
                 pathset: Union[Type[PathSet], str] = OncePerNode,
                 eltype: Union[EltType, ShootProjection] = Shoot.NODE):
        """Initialize traverser.

        Args:
            adapter: TreeAdapter providing children (default: global capabilities)
            connector: Function(node, child) -> bool gating every edge
            pathset: PathSet class (or name) created fresh for each traversal
            eltype: What to emit per step (see ``Shoot``)
        """
        self.adapter = adapter if adapter is not None else DEFAULT_ADAPTER
        self.connector = connector if connector is not None else always_connect
        self.pathset = resolve_pathset(pathset)
        self.projection = eltype if isinstance(eltype, ShootProjection) else ShootProjection(eltype)

    @property
    def track_trace(self) -> bool:
        return self.projection.needs_trace

    def traverse(self, root: Any, level: int = 0, omit_root: bool = False,
                 stacklevel: int = 1) -> Iterator[Any]:
        """Walk the structure below ``root``.

        Args:
            root: Starting node
            level: Level assigned to ``root``
            omit_root: Leave ``root`` itself out of the output
            stacklevel: Which caller warnings point at, counted as for
                ``warnings.warn`` (1 is the caller of ``traverse``)

        Returns:
            Iterator of projected shoots
        """
        seed = ShootBundle.seed(root, self.track_trace, level)
        bundles: Iterable[ShootBundle] = self._walk(seed, stacklevel + 2)
        if omit_root:
            bundles = (b for b in bundles if b.node is not root)
        return map(self.projection.extract, bundles)

    @abstractmethod
    def _walk(self, seed: ShootBundle, stacklevel: int = 2) -> Iterable[ShootBundle]:
        pass

    def _expand(self, node: Any) -> List[Tuple[int, Any]]:
        """Connector-approved ``(index, child)`` pairs, left to right."""
        if isinstance(node, MultiRoot):
            return list(enumerate(node.roots, start=1))
        return [
            (i, child)
            for i, child in enumerate(self.adapter.get_children(node), start=1)
            if self.connector(node, child)
        ]

    def _sprouts(self, shoot: ShootBundle, pathset: PathSet, link: bool = False) -> List[ShootBundle]:
        """Bundles for every child the path set lets us follow."""
        node = shoot.node
        return [
            shoot.sprout(child, i, link=link)
            for i, child in self._expand(node)
            if pathset.visit_child(node, child)
        ]

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(adapter={self.adapter!r}, "
                f"pathset={self.pathset.__name__}, eltype={self.projection!r})")


class PreorderTraverser(TreeTraverser):
    """Depth-first, parents before children.

    Children are visited left to right: they are pushed onto the stack in
    reverse so the leftmost child is popped first.
    """

    def _walk(self, seed: ShootBundle, stacklevel: int = 2) -> Iterator[ShootBundle]:
        pathset = self.pathset()
        stack = StackFrontier(seed)
        while not stack.is_empty():
            shoot, node, level = stack.take()
            if not pathset.visit_node(node, level):
                continue
            yield shoot
            for child_shoot in reversed(self._sprouts(shoot, pathset)):
                stack.put(child_shoot)
            pathset.track_node(node, level)


class PostorderTraverser(TreeTraverser):
    """Depth-first, children before parents.

    A node is expanded the first time it is popped and pushed back as seen
    underneath its children, so it comes out only after every child it
    scheduled has been emitted.
    """

    def _walk(self, seed: ShootBundle, stacklevel: int = 2) -> Iterator[ShootBundle]:
        pathset = self.pathset()
        stack = PostorderStackFrontier(seed)
        while not stack.is_empty():
            shoot, node, level, seen = stack.take()
            if seen:
                yield shoot
                continue
            if not pathset.visit_node(node, level):
                continue
            stack.put((shoot, True))
            for child_shoot in reversed(self._sprouts(shoot, pathset)):
                stack.put((child_shoot, False))
            pathset.track_node(node, level)


class TopdownTraverser(TreeTraverser):
    """Breadth-first level order: every parent before any child layer.

    Paths are interleaved, so per-path policies get each shoot's own
    ancestors through parent links instead of the walk's history.
    """

    def _walk(self, seed: ShootBundle, stacklevel: int = 2) -> Iterator[ShootBundle]:
        pathset = self.pathset()
        per_path = pathset.per_path
        queue = QueueFrontier(seed)
        while not queue.is_empty():
            shoot, node, level = queue.take()
            if per_path:
                if not pathset.visit_path(node, shoot.ancestors()):
                    continue
            elif not pathset.visit_node(node, level):
                continue
            yield shoot
            for child_shoot in self._sprouts(shoot, pathset, link=per_path):
                queue.put(child_shoot)
            if not per_path:
                pathset.track_node(node, level)


class BottomupTraverser(TreeTraverser):
    """Reverse topological order, children strictly before their parents.

    Works on DAGs with shared substructure, not just trees:

    1. find every leaf trace with a cycle-safe (NoCycles) preorder;
    2. seed a trace queue with them;
    3. each popped trace requeues its parent trace;
    4. a node is emitted once all of its connected children have been
       emitted, otherwise it is deferred until a later child requeues it.

    Each trace is emitted at most once; the path set decides whether a node
    reached through a second trace is emitted again.

    Nodes on a genuine cycle can never have all their children emitted, so
    they (and their ancestors) are dropped with a ``CycleWarning``. The walk
    itself always terminates.
    """

    lazy = False

    def _walk(self, seed: ShootBundle, stacklevel: int = 2) -> List[ShootBundle]:
        by_trace: Dict[Trace, Any] = {}
        leaf_traces: List[Trace] = []
        # every later look at a node's children replays the finder's expansion
        finder = PreorderTraverser(RecordingAdapter(self.adapter), self.connector, NoCycles,
                                   (Shoot.TRACE, Shoot.NODE))
        for shoot in finder._walk(ShootBundle.seed(seed.node, True, seed.level)):
            by_trace[shoot.trace] = shoot.node
            if not finder._expand(shoot.node):
                leaf_traces.append(shoot.trace)

        queue = TraceQueueFrontier(by_trace.__getitem__, leaf_traces, base_level=seed.level)
        pathset = self.pathset()
        seen_traces = set()
        emitted = NodeSet()
        results: List[ShootBundle] = []
        while not queue.is_empty():
            shoot, node, level = queue.take()
            trace = shoot.trace
            if trace:
                queue.put(trace[:-1])
            if any(child not in emitted for _, child in finder._expand(node)):
                continue
            if pathset.per_path:
                ancestors = (by_trace[trace[:k]] for k in range(len(trace) - 1, -1, -1))
                should_visit_node = pathset.visit_path(node, ancestors)
            else:
                should_visit_node = pathset.visit_node(node, level)
                pathset.track_node(node, level)
            should_visit_trace = trace not in seen_traces
            seen_traces.add(trace)
            if not should_visit_node or not should_visit_trace:
                continue
            emitted.add(node)
            results.append(shoot)

        dropped = NodeSet(
            node for node in by_trace.values()
            if node not in emitted and not isinstance(node, MultiRoot)
        )
        if len(dropped):
            warnings.warn(
                f"bottomup dropped {len(dropped)} node(s) that sit on or above a cycle; "
                f"filter cycles with a connector before walking bottom-up",
                CycleWarning,
                stacklevel=stacklevel,
            )
        return results


TRAVERSERS: Dict[str, Type[TreeTraverser]] = {
    "preorder": PreorderTraverser,
    "postorder": PostorderTraverser,
    "topdown": TopdownTraverser,
    "bottomup": BottomupTraverser,
}


def create_traverser(order: str, adapter: Optional[TreeAdapter] = None, **kwargs) -> TreeTraverser:
    """Create a traverser instance by walk order name.

    Args:
        order: One of preorder, postorder, topdown, bottomup
        adapter: TreeAdapter for the structure
        **kwargs: connector, pathset, eltype

    Returns:
        TreeTraverser instance

    Raises:
        ConfigurationError: If the order name is not recognized
    """
    key = order.lower()
    if key not in TRAVERSERS:
        raise ConfigurationError(
            f"Unknown walk order: {order}. "
            f"Choose from: {', '.join(TRAVERSERS)}"
        )
    return TRAVERSERS[key](adapter, **kwargs)
