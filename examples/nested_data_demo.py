#!/usr/bin/env python3
"""Demo script for walking nested data with tanglewalk.

Plain dicts and lists are walked through a ``children`` function, a small
DAG of TreeNodes shows how shared substructure is handled, and the last
part rebuilds a structure with uproot and the functionals.
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

import tanglewalk
from tanglewalk import NODE, TRACE, LEVEL, TreeNode


def json_children(value):
    """Children of JSON-like data: dict values and list items."""
    if isinstance(value, dict):
        return list(value.values())
    if isinstance(value, list):
        return value
    return ()


def describe(value):
    if isinstance(value, dict):
        return "{...}"
    if isinstance(value, list):
        return "[...]"
    return repr(value)


def demo_json_walk():
    """Walk a config-like document and address values by trace."""
    print("\n=== Walking JSON-like data ===")
    document = {
        "name": "service",
        "ports": [80, 443],
        "limits": {"cpu": 2, "memory": "4Gi"},
    }

    for trace, level, node in tanglewalk.preorder(
            document, children=json_children, eltype=(TRACE, LEVEL, NODE)):
        print(f"{'  ' * level}{trace} {describe(node)}")

    trace = tanglewalk.findtrace(443, document, children=json_children)
    print(f"\n443 lives at trace {trace}")
    print(f"pluck(document, {trace}) -> {tanglewalk.pluck(document, trace, children=json_children)}")

    print("\nLeaves:", list(tanglewalk.leaves(document, children=json_children)))


def demo_shared_substructure():
    """Show the revisit policies on a diamond."""
    print("\n=== Shared substructure ===")
    bottom = TreeNode("bottom")
    top = TreeNode("top", [TreeNode("left", [bottom]), TreeNode("right", [bottom])])

    for pathset in (tanglewalk.OncePerNode, tanglewalk.AllPaths, tanglewalk.OncePerEdge):
        names = [node.data for node in tanglewalk.preorder(top, pathset=pathset)]
        print(f"{pathset.__name__:12} {names}")

    print("bottomup     ", [node.data for node in tanglewalk.bottomup(top)])

    matrix, nodes = tanglewalk.adjacencymatrix(top, return_nodes=True)
    print("\nAdjacency matrix for", [node.data for node in nodes])
    print(matrix)


def demo_rebuilding():
    """Flip a path with uproot and map a copy."""
    print("\n=== Rebuilding ===")
    leaf = TreeNode("leaf")
    root = TreeNode("root", [TreeNode("mid", [leaf])])

    flipped = tanglewalk.uproot(root, leaf)
    print("uproot:", [node.data for node in tanglewalk.preorder(flipped)])
    print("original:", [node.data for node in tanglewalk.preorder(root)])

    shouted = tanglewalk.map_data(str.upper, root)
    print("map_data:", [node.data for node in tanglewalk.preorder(shouted)])


def main():
    demo_json_walk()
    demo_shared_substructure()
    demo_rebuilding()
    return 0


if __name__ == "__main__":
    sys.exit(main())
