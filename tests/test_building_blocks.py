"""Unit tests for path sets, frontiers, shoots and node containers."""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tanglewalk import ConfigurationError
from tanglewalk.core.frontier import (
    PostorderStackFrontier,
    QueueFrontier,
    StackFrontier,
    TraceQueueFrontier,
)
from tanglewalk.core.nodeset import NodeMap, NodeSet, same_node
from tanglewalk.core.pathset import (
    AllPaths,
    NoCycles,
    OncePerEdge,
    OncePerNode,
    resolve_pathset,
)
from tanglewalk.core.shoot import Shoot, ShootBundle, ShootProjection


class TestPathSets(unittest.TestCase):
    """Test the revisit policies in isolation."""

    def test_all_paths_allows_everything(self):
        ps = AllPaths()
        ps.track_node("a", 0)
        self.assertTrue(ps.visit_node("a", 1))
        self.assertTrue(ps.visit_child("a", "a"))

    def test_once_per_node(self):
        ps = OncePerNode()
        self.assertTrue(ps.visit_node("a", 0))
        ps.track_node("a", 0)
        self.assertFalse(ps.visit_node("a", 3))
        self.assertTrue(ps.visit_child("a", "a"))

    def test_once_per_edge(self):
        ps = OncePerEdge()
        self.assertTrue(ps.visit_child("a", "b"))
        ps.track_node("a", 0)
        self.assertFalse(ps.visit_child("a", "b"))
        self.assertTrue(ps.visit_node("a", 0))

    def test_no_cycles_blocks_ancestors_only(self):
        ps = NoCycles()
        ps.track_node("a", 0)
        ps.track_node("b", 1)
        self.assertFalse(ps.visit_node("a", 2))
        self.assertFalse(ps.visit_node("b", 2))
        self.assertTrue(ps.visit_node("c", 2))

    def test_no_cycles_forgets_finished_branches(self):
        ps = NoCycles()
        ps.track_node("a", 0)
        ps.track_node("b", 1)
        ps.track_node("x", 2)
        # back at level 1: "b" and "x" are no longer ancestors
        self.assertTrue(ps.visit_node("x", 1))
        self.assertTrue(ps.visit_node("b", 1))
        self.assertFalse(ps.visit_node("a", 1))

    def test_no_cycles_unhashable_nodes(self):
        ps = NoCycles()
        node = []
        ps.track_node(node, 0)
        self.assertFalse(ps.visit_node(node, 1))
        self.assertTrue(ps.visit_node([], 1))

    def test_no_cycles_checks_own_path(self):
        ps = NoCycles()
        self.assertTrue(ps.per_path)
        self.assertFalse(ps.visit_path("a", iter(["b", "a"])))
        self.assertTrue(ps.visit_path("a", iter(["b", "c"])))
        self.assertTrue(ps.visit_path([], iter([[]])))

    def test_other_policies_judge_history(self):
        for cls in (AllPaths, OncePerNode, OncePerEdge):
            with self.subTest(pathset=cls.__name__):
                self.assertFalse(cls.per_path)

    def test_resolve_by_name(self):
        self.assertIs(resolve_pathset("all_paths"), AllPaths)
        self.assertIs(resolve_pathset("once-per-edge"), OncePerEdge)
        self.assertIs(resolve_pathset("No_Cycles"), NoCycles)
        self.assertIs(resolve_pathset(OncePerNode), OncePerNode)

    def test_resolve_unknown(self):
        with self.assertRaises(ConfigurationError):
            resolve_pathset("sometimes")
        with self.assertRaises(ConfigurationError):
            resolve_pathset(int)


class TestFrontiers(unittest.TestCase):
    """Test scheduling order of each frontier."""

    def setUp(self):
        self.a = ShootBundle("a", None, 0)
        self.b = ShootBundle("b", None, 1)

    def test_stack_is_lifo(self):
        stack = StackFrontier(self.a)
        stack.put(self.b)
        self.assertEqual(len(stack), 2)
        self.assertEqual(stack.peek(), (self.b, "b", 1))
        self.assertEqual(stack.take(), (self.b, "b", 1))
        self.assertEqual(stack.take(), (self.a, "a", 0))
        self.assertTrue(stack.is_empty())
        self.assertFalse(stack)

    def test_queue_is_fifo(self):
        queue = QueueFrontier(self.a)
        queue.put(self.b)
        self.assertEqual(queue.take()[1], "a")
        self.assertEqual(queue.take()[1], "b")
        self.assertTrue(queue.is_empty())

    def test_postorder_stack_tracks_seen(self):
        stack = PostorderStackFrontier(self.a)
        stack.put((self.a, True))
        stack.put((self.b, False))
        self.assertEqual(stack.take(), (self.b, "b", 1, False))
        self.assertEqual(stack.peek(), (self.a, "a", 0, True))
        stack.take()
        self.assertEqual(stack.take(), (self.a, "a", 0, False))

    def test_trace_queue_resolves_traces(self):
        lookup = {(): "root", (1,): "child", (1, 2): "grandchild"}
        queue = TraceQueueFrontier(lookup.__getitem__, [(1, 2)])
        queue.put(())
        shoot, node, level = queue.take()
        self.assertEqual((node, level), ("grandchild", 2))
        self.assertEqual(shoot.trace, (1, 2))
        self.assertEqual(queue.take()[1:], ("root", 0))

    def test_trace_queue_base_level(self):
        queue = TraceQueueFrontier({(1,): "r"}.__getitem__, [(1,)], base_level=-1)
        self.assertEqual(queue.take()[2], 0)


class TestShoots(unittest.TestCase):
    """Test ShootBundle growth and projection."""

    def test_sprout_extends_trace(self):
        root = ShootBundle.seed("r", track_trace=True)
        child = root.sprout("c", 2)
        self.assertEqual(child, ShootBundle("c", (2,), 1))
        self.assertEqual(child.sprout("g", 1).trace, (2, 1))

    def test_sprout_without_index_keeps_trace(self):
        shoot = ShootBundle("r", (1,), 1).sprout("same", None, increment=0)
        self.assertEqual(shoot, ShootBundle("same", (1,), 1))

    def test_linked_sprouts_know_their_ancestors(self):
        root = ShootBundle.seed("r", track_trace=False)
        grandchild = root.sprout("c", 1, link=True).sprout("g", 1, link=True)
        self.assertEqual(list(grandchild.ancestors()), ["c", "r"])
        self.assertEqual(list(root.sprout("c", 1).ancestors()), [])

    def test_untracked_traces_stay_none(self):
        root = ShootBundle.seed("r", track_trace=False)
        self.assertIsNone(root.sprout("c", 1).trace)

    def test_single_projection(self):
        projection = ShootProjection("level")
        self.assertFalse(projection.needs_trace)
        self.assertEqual(projection(ShootBundle("n", None, 4)), 4)

    def test_tuple_projection(self):
        projection = ShootProjection((Shoot.TRACE, "node"))
        self.assertTrue(projection.needs_trace)
        self.assertEqual(projection.extract(ShootBundle("n", (1,), 1)), ((1,), "n"))

    def test_invalid_projections(self):
        for bad in ((), ("node", Shoot.NODE), "depth", 3):
            with self.subTest(eltype=bad):
                with self.assertRaises(ConfigurationError):
                    ShootProjection(bad)


class TestNodeContainers(unittest.TestCase):
    """Test NodeSet and NodeMap with hashable and unhashable nodes."""

    def test_nodeset_identity_for_unhashables(self):
        first, second = [1], [1]
        nodes = NodeSet([first, "x"])
        self.assertIn(first, nodes)
        self.assertNotIn(second, nodes)
        self.assertIn("x", nodes)
        self.assertEqual(len(nodes), 2)
        nodes.discard(first)
        self.assertNotIn(first, nodes)

    def test_nodemap(self):
        key = {"unhashable": True}
        mapping = NodeMap()
        mapping[key] = 1
        mapping["k"] = 2
        self.assertEqual(mapping[key], 1)
        self.assertEqual(mapping.get({"unhashable": True}, "missing"), "missing")
        self.assertEqual(mapping.setdefault("k", 5), 2)
        self.assertEqual(len(mapping), 2)
        with self.assertRaises(KeyError):
            mapping["nope"]

    def test_same_node(self):
        shared = [1]
        self.assertTrue(same_node("a", "a"))
        self.assertTrue(same_node((1, 2), (1, 2)))
        self.assertTrue(same_node(shared, shared))
        self.assertFalse(same_node(shared, [1]))
        self.assertFalse(same_node("a", "b"))


if __name__ == "__main__":
    unittest.main()
