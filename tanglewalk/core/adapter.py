"""TreeAdapter abstraction for tanglewalk.

The adapter is what lets one traversal engine work over any structure. The
engine never touches a node directly; it asks the adapter for children and,
for rebuilding operations, for the mutation capabilities.

The default adapter forwards to the global capability functions in
``tanglewalk.core.capability``. A walk may swap in a different adapter (or
just a children function, wrapped in ``FunctionAdapter``) without changing
the global defaults.
"""

from typing import Any, Callable, Sequence

from . import capability
from .capability import CloneResult
from .nodeset import NodeMap


class TreeAdapter:
    """Navigation and mutation capabilities for one kind of structure.

    Every method has a working default, so subclasses only override what
    their structure needs. Capability flags let callers check up front
    whether a rebuild is going to work.
    """

    def get_children(self, node: Any) -> Sequence:
        """Get the ordered children of ``node``.

        Args:
            node: The parent node

        Returns:
            Sequence of child nodes (empty for leaves, never None)
        """
        return capability.children(node)

    def set_children(self, node: Any, new_children: Sequence) -> Any:
        """Replace the children of ``node``.

        Args:
            node: The node to modify
            new_children: The new ordered children

        Returns:
            The modified node, or a replacement for immutable nodes

        Raises:
            MissingCapabilityError: If the node type cannot be modified
        """
        return capability.set_children(node, new_children)

    def get_data(self, node: Any) -> Any:
        """Get the payload of ``node``."""
        return capability.data(node)

    def set_data(self, node: Any, value: Any) -> Any:
        """Replace the payload of ``node``, returning the (possibly new) node."""
        return capability.set_data(node, value)

    def clone(self, node: Any) -> CloneResult:
        """Make an independent shallow copy of ``node``."""
        return capability.clone(node)

    def is_leaf(self, node: Any) -> bool:
        """True if the adapter reports no children for ``node``."""
        return len(self.get_children(node)) == 0

    def is_branch(self, node: Any) -> bool:
        return not self.is_leaf(node)

    # Capability flags - adapters declare what they support

    def supports_modification(self) -> bool:
        """Check if adapter can rebuild structures (graft, uproot, maps).

        Returns:
            True if ``set_children`` is expected to work
        """
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class FunctionAdapter(TreeAdapter):
    """Adapter whose expansion is a plain ``children(node)`` function.

    Mutation capabilities still come from the global defaults.
    """

    def __init__(self, children_fn: Callable[[Any], Sequence]):
        """Initialize with an expansion function.

        Args:
            children_fn: Function(node) -> ordered sequence of children
        """
        if not callable(children_fn):
            raise TypeError(f"children function must be callable, got {children_fn!r}")
        self.children_fn = children_fn

    def get_children(self, node: Any) -> Sequence:
        kids = self.children_fn(node)
        if kids is None:
            return ()
        return kids

    def __repr__(self) -> str:
        name = getattr(self.children_fn, "__name__", repr(self.children_fn))
        return f"FunctionAdapter({name})"


class RecordingAdapter(TreeAdapter):
    """Adapter that expands each node once and replays the answer.

    ``children`` functions may build fresh objects on every call. Code that
    needs a node's children again after walking it reads them back from
    the recording, so it sees exactly the objects the walk followed. Nodes
    are matched like ``NodeSet`` members. Everything else is delegated to
    the wrapped adapter.
    """

    def __init__(self, base: TreeAdapter):
        self.base = base
        self.expanded = NodeMap()

    def get_children(self, node: Any) -> Sequence:
        if node in self.expanded:
            return self.expanded[node]
        kids = list(self.base.get_children(node))
        self.expanded[node] = kids
        return kids

    def expansion(self, node: Any) -> Sequence:
        """Children recorded for ``node``, or ``()`` if it was never expanded."""
        return self.expanded.get(node, ())

    def set_children(self, node: Any, new_children: Sequence) -> Any:
        return self.base.set_children(node, new_children)

    def get_data(self, node: Any) -> Any:
        return self.base.get_data(node)

    def set_data(self, node: Any, value: Any) -> Any:
        return self.base.set_data(node, value)

    def clone(self, node: Any) -> CloneResult:
        return self.base.clone(node)

    def supports_modification(self) -> bool:
        return self.base.supports_modification()

    def __repr__(self) -> str:
        return f"RecordingAdapter({self.base!r})"


DEFAULT_ADAPTER = TreeAdapter()


def resolve_adapter(adapter: TreeAdapter = None, children: Callable = None) -> TreeAdapter:
    """Pick the adapter for one call.

    An explicit ``children`` function wins over ``adapter``; with neither,
    the global default adapter is used.
    """
    if children is not None:
        return FunctionAdapter(children)
    if adapter is not None:
        return adapter
    return DEFAULT_ADAPTER
