"""tanglewalk - traversal for trees, DAGs and cyclic graphs you don't own.

Any value can be walked once tanglewalk knows its children. Register that
capability for your type (or pass ``children=`` to a single call) and every
walk order, trace operation and rebuild works on it:

    import tanglewalk

    @tanglewalk.children.register(MyNode)
    def _(node):
        return node.kids

    for trace, node in tanglewalk.preorder(root, eltype=(tanglewalk.TRACE, tanglewalk.NODE)):
        ...

Shared substructure is visited once by default (``OncePerNode``); pick a
different path set to follow every path, every edge once, or everything
except cycles.
"""

__version__ = "0.3.0"

# Capabilities
from .core.capability import (
    children,
    set_children,
    data,
    set_data,
    clone,
    CloneResult,
    isleaf,
    isbranch,
)
from .core.adapter import TreeAdapter, FunctionAdapter, RecordingAdapter
from .core.node import TreeNode

# Path sets and projections
from .core.pathset import PathSet, AllPaths, OncePerNode, OncePerEdge, NoCycles
from .core.shoot import Shoot, NODE, TRACE, LEVEL

# Configuration and planning
from .config import WalkConfig, WalkOrder
from .planning import WalkPlan

# Errors
from .core.errors import (
    TanglewalkError,
    ConfigurationError,
    MissingCapabilityError,
    CloneError,
    CycleWarning,
)

# High-level API
from .api import (
    preorder,
    postorder,
    topdown,
    bottomup,
    leaves,
    branches,
    traces,
    tracepairs,
    adjacencymatrix,
)
from .addressing import (
    pluck,
    graft,
    findtrace,
    findtraces,
    findtrace_where,
    findtraces_where,
    parents,
    uproot,
    ischild,
    isparent,
    getatkeys,
    setatkeys,
)
from .functionals import (
    map_data,
    map_leaves,
    map_branches,
    prune,
    prune_leaves,
    prune_branches,
    copy_structure,
)

__all__ = [
    "__version__",
    # Capabilities
    "children",
    "set_children",
    "data",
    "set_data",
    "clone",
    "CloneResult",
    "isleaf",
    "isbranch",
    "TreeAdapter",
    "FunctionAdapter",
    "RecordingAdapter",
    "TreeNode",
    # Path sets and projections
    "PathSet",
    "AllPaths",
    "OncePerNode",
    "OncePerEdge",
    "NoCycles",
    "Shoot",
    "NODE",
    "TRACE",
    "LEVEL",
    # Configuration
    "WalkConfig",
    "WalkOrder",
    "WalkPlan",
    # Errors
    "TanglewalkError",
    "ConfigurationError",
    "MissingCapabilityError",
    "CloneError",
    "CycleWarning",
    # Walks
    "preorder",
    "postorder",
    "topdown",
    "bottomup",
    "leaves",
    "branches",
    "traces",
    "tracepairs",
    "adjacencymatrix",
    # Addressing
    "pluck",
    "graft",
    "findtrace",
    "findtraces",
    "findtrace_where",
    "findtraces_where",
    "parents",
    "uproot",
    "ischild",
    "isparent",
    "getatkeys",
    "setatkeys",
    # Functionals
    "map_data",
    "map_leaves",
    "map_branches",
    "prune",
    "prune_leaves",
    "prune_branches",
    "copy_structure",
]
