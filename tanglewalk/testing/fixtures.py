"""Example structures for testing code built on tanglewalk.

Each ``make_*`` function returns a fresh structure, so tests that mutate
one never leak into another. The node types here register their own
capabilities and double as examples of how to hook a type up.
"""

from typing import Any, List, NamedTuple, Optional, Sequence

from ..core import capability
from ..core.capability import CloneResult
from ..core.node import TreeNode


class FlexiNode:
    """Mutable node with ``data`` and a list of ``children``.

    Children may be anything, including plain strings acting as leaves.
    """

    def __init__(self, data: Any, children: Optional[Sequence[Any]] = None):
        self.data = data
        self.children = list(children) if children is not None else []

    def __repr__(self) -> str:
        return f"FlexiNode({self.data!r})+{len(self.children)} children"


@capability.children.register(FlexiNode)
def _flexi_children(node: FlexiNode) -> List[Any]:
    return node.children


@capability.set_children.register(FlexiNode)
def _flexi_set_children(node: FlexiNode, new_children: Sequence[Any]) -> FlexiNode:
    node.children = list(new_children)
    return node


@capability.data.register(FlexiNode)
def _flexi_data(node: FlexiNode) -> Any:
    return node.data


@capability.set_data.register(FlexiNode)
def _flexi_set_data(node: FlexiNode, value: Any) -> FlexiNode:
    node.data = value
    return node


class Pair:
    """Mutable binary node whose children are always ``(left, right)``."""

    def __init__(self, left: Any = None, right: Any = None):
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return "Pair(...)"


@capability.children.register(Pair)
def _pair_children(node: Pair):
    return (node.left, node.right)


@capability.set_children.register(Pair)
def _pair_set_children(node: Pair, new_children: Sequence[Any]) -> Pair:
    node.left, node.right = new_children
    return node


class Frozen(NamedTuple):
    """Immutable node: ``set_children`` returns a new instance."""

    label: str
    kids: tuple = ()


@capability.children.register(Frozen)
def _frozen_children(node: Frozen) -> tuple:
    return node.kids


@capability.set_children.register(Frozen)
def _frozen_set_children(node: Frozen, new_children: Sequence[Any]) -> Frozen:
    return node._replace(kids=tuple(new_children))


@capability.data.register(Frozen)
def _frozen_data(node: Frozen) -> str:
    return node.label


@capability.set_data.register(Frozen)
def _frozen_set_data(node: Frozen, value: str) -> Frozen:
    return node._replace(label=value)


@capability.clone.register(Frozen)
def _frozen_clone(node: Frozen) -> CloneResult:
    return CloneResult.success(node)


class Unclonable(FlexiNode):
    """FlexiNode whose clone capability always fails."""


@capability.clone.register(Unclonable)
def _unclonable_clone(node: Unclonable) -> CloneResult:
    return CloneResult.failure(RuntimeError("this node refuses to be copied"))


def make_collider() -> FlexiNode:
    """Two branches that both lead to the string ``"Collider"``.

        The top
        ├── Go left
        │   ├── "Collider"
        │   └── "Loner"
        └── Go right
            └── "Collider"
    """
    return FlexiNode("The top", [
        FlexiNode("Go left", ["Collider", "Loner"]),
        FlexiNode("Go right", ["Collider"]),
    ])


def make_shared_child():
    """``R -> [A, B]`` and ``A -> [B]``. Returns ``(R, A, B)``."""
    b = FlexiNode("B")
    a = FlexiNode("A", [b])
    r = FlexiNode("R", [a, b])
    return r, a, b


def make_doubleup() -> TreeNode:
    """Two stacked diamonds sharing a single final leaf."""
    final = TreeNode("A final collision")
    first = TreeNode("First collider", [
        TreeNode("Go left second", [final]),
        TreeNode("Go right second", [final]),
    ])
    return TreeNode("Doubleup root", [
        TreeNode("Go left first", [first]),
        TreeNode("Go right first", [first]),
    ])


def make_taproot() -> TreeNode:
    """A small plain tree of TreeNodes with leaves at different depths."""
    return TreeNode("The Root", [
        TreeNode("First branch", [TreeNode("Leaf 1")]),
        TreeNode(2, [TreeNode("Stubby")]),
        TreeNode("Leaf at the top"),
    ])


def make_different_heights() -> FlexiNode:
    """``Top -> [A -> [Leaf], B]``."""
    return FlexiNode("Top", [
        FlexiNode("A", [FlexiNode("Leaf")]),
        FlexiNode("B"),
    ])


def make_self_cycle() -> Pair:
    """A Pair whose left child is itself."""
    node = Pair(None, None)
    node.left = node
    return node


def make_deep_chain(depth: int = 20000) -> FlexiNode:
    """A single path ``depth`` edges long (``depth + 1`` nodes)."""
    root = FlexiNode(0)
    current = root
    for i in range(1, depth + 1):
        child = FlexiNode(i)
        current.children.append(child)
        current = child
    return root


def make_line(*labels: str) -> FlexiNode:
    """``labels[0] -> labels[1] -> ...``, e.g. ``make_line("root", "mid", "child")``."""
    root = FlexiNode(labels[0])
    current = root
    for label in labels[1:]:
        child = FlexiNode(label)
        current.children.append(child)
        current = child
    return root
