"""Membership containers keyed by node equality.

Hashable nodes are compared with ``==``/``hash`` like any set member.
Unhashable nodes (lists, dicts, dataclasses with ``eq=True``) fall back to
identity, so they can still take part in cycle detection.
"""

from typing import Any, Dict, Iterator, Set, Tuple


class NodeSet:
    """A set of nodes that also accepts unhashable members."""

    def __init__(self, nodes=()):
        self._hashed: Set[Any] = set()
        self._by_id: Dict[int, Any] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: Any) -> None:
        try:
            self._hashed.add(node)
        except TypeError:
            # keep a reference so the id cannot be reused while tracked
            self._by_id[id(node)] = node

    def discard(self, node: Any) -> None:
        try:
            self._hashed.discard(node)
        except TypeError:
            self._by_id.pop(id(node), None)

    def __contains__(self, node: Any) -> bool:
        try:
            return node in self._hashed
        except TypeError:
            return id(node) in self._by_id

    def __len__(self) -> int:
        return len(self._hashed) + len(self._by_id)

    def __iter__(self) -> Iterator[Any]:
        yield from self._hashed
        yield from self._by_id.values()

    def __repr__(self) -> str:
        return f"NodeSet({len(self)} nodes)"


class NodeMap:
    """A dict keyed by nodes, with the same hashing rules as ``NodeSet``."""

    def __init__(self):
        self._hashed: Dict[Any, Any] = {}
        self._by_id: Dict[int, Tuple[Any, Any]] = {}

    def __setitem__(self, node: Any, value: Any) -> None:
        try:
            self._hashed[node] = value
        except TypeError:
            self._by_id[id(node)] = (node, value)

    def __getitem__(self, node: Any) -> Any:
        try:
            return self._hashed[node]
        except TypeError:
            return self._by_id[id(node)][1]

    def __contains__(self, node: Any) -> bool:
        try:
            return node in self._hashed
        except TypeError:
            return id(node) in self._by_id

    def get(self, node: Any, default: Any = None) -> Any:
        try:
            return self[node]
        except KeyError:
            return default

    def setdefault(self, node: Any, default: Any) -> Any:
        if node not in self:
            self[node] = default
        return self[node]

    def __len__(self) -> int:
        return len(self._hashed) + len(self._by_id)


def same_node(a: Any, b: Any) -> bool:
    """Compare two nodes the way ``NodeSet`` membership does."""
    if a is b:
        return True
    try:
        if hash(a) != hash(b):
            return False
    except TypeError:
        return False
    return a == b
