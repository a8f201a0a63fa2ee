"""Path sets: how often a walk may revisit nodes and edges.

A path set is created fresh for every traversal call and answers three
questions as the walk proceeds:

- ``visit_node(node, level)``: may this node be emitted now?
- ``visit_child(node, child)``: may this edge be followed?
- ``track_node(node, level)``: record that ``node`` was expanded.

Path sets whose answer depends on the path that reached a node set
``per_path``. Walks that do not finish one path before starting the next
(topdown, bottomup) ask those through ``visit_path(node, ancestors)``
instead of ``visit_node``.

Path sets never raise; at worst they prune a branch.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Tuple, Type, Union

from .errors import ConfigurationError
from .nodeset import NodeMap, NodeSet, same_node


class PathSet(ABC):
    """Base class for revisit policies."""

    #: snake_case name accepted wherever a path set can be selected
    name: str = ""

    #: True if ``visit_path`` must be used by interleaving walks
    per_path: bool = False

    def visit_path(self, node: Any, ancestors: Iterable[Any]) -> bool:
        """May ``node`` be emitted, given the nodes above it on its own path?"""
        return True

    @abstractmethod
    def visit_node(self, node: Any, level: int) -> bool:
        pass

    @abstractmethod
    def visit_child(self, node: Any, child: Any) -> bool:
        pass

    @abstractmethod
    def track_node(self, node: Any, level: int) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class AllPaths(PathSet):
    """Follow every path. Cycles are walked forever unless the caller stops."""

    name = "all_paths"

    def visit_node(self, node: Any, level: int) -> bool:
        return True

    def visit_child(self, node: Any, child: Any) -> bool:
        return True

    def track_node(self, node: Any, level: int) -> None:
        pass


class OncePerNode(PathSet):
    """Emit each distinct node at most once. Terminates on any finite graph."""

    name = "once_per_node"

    def __init__(self):
        self.visited = NodeSet()

    def visit_node(self, node: Any, level: int) -> bool:
        return node not in self.visited

    def visit_child(self, node: Any, child: Any) -> bool:
        return True

    def track_node(self, node: Any, level: int) -> None:
        self.visited.add(node)


class OncePerEdge(PathSet):
    """Emit a node once per incoming path, but expand its children only once."""

    name = "once_per_edge"

    def __init__(self):
        self.expanded = NodeSet()

    def visit_node(self, node: Any, level: int) -> bool:
        return True

    def visit_child(self, node: Any, child: Any) -> bool:
        return node not in self.expanded

    def track_node(self, node: Any, level: int) -> None:
        self.expanded.add(node)


class NoCycles(PathSet):
    """Refuse to re-enter a live ancestor.

    Ancestry is a stack of ``(node, level)`` entries. An entry is dropped as
    soon as the walk comes back to its level or above, so shared
    substructure reached along different branches is still revisited; only
    genuine self-ancestry is blocked.

    The stack only matches real ancestry for depth-first walks. Topdown and
    bottomup walks interleave paths, so they check each path's own
    ancestors with ``visit_path``.
    """

    name = "no_cycles"
    per_path = True

    def visit_path(self, node: Any, ancestors: Iterable[Any]) -> bool:
        return not any(same_node(node, ancestor) for ancestor in ancestors)

    def __init__(self):
        self.ancestry: List[Tuple[Any, int]] = []
        self.live = NodeMap()  # node -> number of live entries

    def _unwind(self, level: int) -> None:
        while self.ancestry and self.ancestry[-1][1] >= level:
            stale, _ = self.ancestry.pop()
            self.live[stale] -= 1

    def visit_node(self, node: Any, level: int) -> bool:
        self._unwind(level)
        return self.live.get(node, 0) == 0

    def visit_child(self, node: Any, child: Any) -> bool:
        return True

    def track_node(self, node: Any, level: int) -> None:
        self._unwind(level)
        self.ancestry.append((node, level))
        self.live[node] = self.live.get(node, 0) + 1


PATHSETS: Dict[str, Type[PathSet]] = {
    cls.name: cls for cls in (AllPaths, OncePerNode, OncePerEdge, NoCycles)
}


def resolve_pathset(pathset: Union[Type[PathSet], str]) -> Type[PathSet]:
    """Turn a path set class or its name into a class.

    Raises:
        ConfigurationError: If the selector is not a known path set
    """
    if isinstance(pathset, type) and issubclass(pathset, PathSet):
        return pathset
    if isinstance(pathset, str):
        key = pathset.lower().replace("-", "_")
        if key in PATHSETS:
            return PATHSETS[key]
    raise ConfigurationError(
        f"Unknown path set: {pathset!r}. "
        f"Choose from: {', '.join(PATHSETS)}"
    )
