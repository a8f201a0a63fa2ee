"""TreeNode: a ready-made container for tanglewalk.

You never need TreeNode to walk your own structures, but it is handy as a
neutral format: sink any structure into TreeNodes, map or prune it, then
rebuild your own types from the result.

TreeNodes compare by identity. Two nodes holding equal data are still
different nodes, which keeps revisit tracking exact and avoids comparing
whole subtrees.
"""

from typing import Any, Callable, List, Optional, Sequence

from . import capability
from .adapter import RecordingAdapter, TreeAdapter, resolve_adapter
from .capability import CloneResult
from .nodeset import NodeMap
from .traverser import PostorderTraverser, TopdownTraverser


class TreeNode:
    """A mutable node holding ``data`` and an ordered list of ``children``."""

    __slots__ = ("data", "children")

    def __init__(self, data: Any = None, children: Optional[Sequence["TreeNode"]] = None):
        self.data = data
        self.children: List[Any] = list(children) if children is not None else []

    @classmethod
    def from_node(cls,
                  node: Any,
                  adapter: Optional[TreeAdapter] = None,
                  sink: Optional[Callable[[Any], Any]] = None) -> "TreeNode":
        """Copy any structure into TreeNodes.

        Shared substructure stays shared and cycles stay cycles: every
        distinct node becomes exactly one TreeNode. Each node is expanded
        once, and its TreeNode gets exactly the children that expansion
        returned.

        Args:
            node: Root of the structure to copy
            adapter: TreeAdapter for the structure (default: global capabilities)
            sink: Function(node) -> data to store; defaults to ``data(node)``

        Returns:
            The TreeNode standing in for ``node``
        """
        recorder = RecordingAdapter(resolve_adapter(adapter))
        sink = sink if sink is not None else recorder.get_data
        order = list(TopdownTraverser(recorder).traverse(node))
        built = NodeMap()
        for original in order:
            built[original] = cls(sink(original))
        for original in order:
            built[original].children = [built[child] for child in recorder.expansion(original)]
        return built[node]

    def to_node(self, sink: Callable[[Any, List[Any]], Any]) -> Any:
        """Rebuild a structure of your own types from this TreeNode.

        ``sink(data, children)`` is called children-first and must return the
        node to use in place of each TreeNode. Shared TreeNodes are sunk
        once. Back edges of a cycle are left out, since a node cannot be
        built before itself.

        Args:
            sink: Function(data, children) -> your node

        Returns:
            The node built for this TreeNode
        """
        built = NodeMap()
        for tree_node in PostorderTraverser().traverse(self):
            kids = [built[child] for child in tree_node.children if child in built]
            built[tree_node] = sink(tree_node.data, kids)
        return built[self]

    def __repr__(self) -> str:
        if not self.children:
            second = " (leaf)"
        elif len(self.children) == 1:
            second = "+(1 child)"
        else:
            second = f"+({len(self.children)} children)"
        return f"TreeNode({self.data!r}){second}"


@capability.children.register(TreeNode)
def _tree_node_children(node: TreeNode) -> List[Any]:
    return node.children


@capability.set_children.register(TreeNode)
def _tree_node_set_children(node: TreeNode, new_children: Sequence) -> TreeNode:
    node.children = list(new_children)
    return node


@capability.data.register(TreeNode)
def _tree_node_data(node: TreeNode) -> Any:
    return node.data


@capability.set_data.register(TreeNode)
def _tree_node_set_data(node: TreeNode, value: Any) -> TreeNode:
    node.data = value
    return node


@capability.clone.register(TreeNode)
def _tree_node_clone(node: TreeNode) -> CloneResult:
    return CloneResult.success(TreeNode(node.data, node.children))
