"""Frontiers: pending work for each walk order.

A frontier decides which scheduled step comes next. All of them share the
same small interface:

- ``put(item)``: schedule an item
- ``take()``: remove the next item, returning ``(shoot, node, level, ...)``
- ``peek()``: look at the next item without removing it
- ``is_empty()``
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, List, Tuple

from .shoot import ShootBundle, Trace


class Frontier(ABC):
    """Abstract pending-work structure."""

    @abstractmethod
    def put(self, item: Any) -> None:
        pass

    @abstractmethod
    def take(self) -> Tuple:
        pass

    @abstractmethod
    def peek(self) -> Tuple:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def is_empty(self) -> bool:
        return len(self) == 0

    def __bool__(self) -> bool:
        return not self.is_empty()


class StackFrontier(Frontier):
    """LIFO frontier for preorder walks."""

    def __init__(self, *shoots: ShootBundle):
        self.next: List[ShootBundle] = list(shoots)

    def put(self, shoot: ShootBundle) -> None:
        self.next.append(shoot)

    def take(self) -> Tuple[ShootBundle, Any, int]:
        shoot = self.next.pop()
        return shoot, shoot.node, shoot.level

    def peek(self) -> Tuple[ShootBundle, Any, int]:
        shoot = self.next[-1]
        return shoot, shoot.node, shoot.level

    def __len__(self) -> int:
        return len(self.next)


class PostorderStackFrontier(Frontier):
    """LIFO of ``(shoot, seen)`` pairs for postorder walks.

    An unseen item is expanded and pushed back as seen underneath its
    children; a seen item is ready to be emitted.
    """

    def __init__(self, *shoots: ShootBundle):
        self.next: List[ShootBundle] = list(shoots)
        self.seen: List[bool] = [False] * len(self.next)

    def put(self, item: Tuple[ShootBundle, bool]) -> None:
        shoot, seen = item
        self.next.append(shoot)
        self.seen.append(seen)

    def take(self) -> Tuple[ShootBundle, Any, int, bool]:
        shoot = self.next.pop()
        return shoot, shoot.node, shoot.level, self.seen.pop()

    def peek(self) -> Tuple[ShootBundle, Any, int, bool]:
        shoot = self.next[-1]
        return shoot, shoot.node, shoot.level, self.seen[-1]

    def __len__(self) -> int:
        return len(self.next)


class QueueFrontier(Frontier):
    """FIFO frontier for top-down (level order) walks."""

    def __init__(self, *shoots: ShootBundle):
        self.next: Deque[ShootBundle] = deque(shoots)

    def put(self, shoot: ShootBundle) -> None:
        self.next.append(shoot)

    def take(self) -> Tuple[ShootBundle, Any, int]:
        shoot = self.next.popleft()
        return shoot, shoot.node, shoot.level

    def peek(self) -> Tuple[ShootBundle, Any, int]:
        shoot = self.next[0]
        return shoot, shoot.node, shoot.level

    def __len__(self) -> int:
        return len(self.next)


class TraceQueueFrontier(Frontier):
    """FIFO of traces for bottom-up walks.

    Items are traces, not shoots. ``take`` resolves a trace back to its node
    with ``lookup`` and rebuilds the shoot from it.
    """

    def __init__(self, lookup: Callable[[Trace], Any], traces=(), base_level: int = 0):
        """Initialize with a trace resolver.

        Args:
            lookup: Function(trace) -> node
            traces: Initial traces, taken in order
            base_level: Level of the node at the empty trace
        """
        self.lookup = lookup
        self.traces: Deque[Trace] = deque(traces)
        self.base_level = base_level

    def put(self, trace: Trace) -> None:
        self.traces.append(trace)

    def _resolve(self, trace: Trace) -> Tuple[ShootBundle, Any, int]:
        node = self.lookup(trace)
        level = self.base_level + len(trace)
        return ShootBundle(node, trace, level), node, level

    def take(self) -> Tuple[ShootBundle, Any, int]:
        return self._resolve(self.traces.popleft())

    def peek(self) -> Tuple[ShootBundle, Any, int]:
        return self._resolve(self.traces[0])

    def __len__(self) -> int:
        return len(self.traces)
