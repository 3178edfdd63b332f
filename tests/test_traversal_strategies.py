"""Unit tests for walking finished member trees and the functional API."""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from membertree import (
    BuildConfig,
    DepthConfig,
    FilterConfig,
    NodeKind,
    TraversalStrategy,
    build_tree,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_paths,
    get_tree_stats,
    iter_levels,
    traverse_tree,
    walk,
)
from sample_models import Fragile, Player

PRE_ORDER = [
    "Player",
    "Player.name",
    "Player.inventory",
    "Player.inventory.capacity",
    "Player.inventory.items",
    "Player.element",
    "Player._health",
    "Player.heal",
    "Player.companion",
    "Player.kind",
    "Player._id",
    "Player.describe",
]


class TestTraversalStrategies(unittest.TestCase):
    """Test different traversal strategies."""

    def setUp(self):
        """Build the tree described in sample_models."""
        self.root = build_tree(Player())

    def visit(self, strategy, root=None, **limits):
        depth = DepthConfig(**limits)
        return [(node.path, level) for node, level in walk(root or self.root, strategy, depth)]

    def test_breadth_first_traversal(self):
        """Test BFS traversal order."""
        nodes = self.visit(TraversalStrategy.BREADTH_FIRST)

        # All depth 1 members come before the members of inventory
        depths = [depth for _, depth in nodes]
        self.assertEqual(depths, sorted(depths))
        self.assertEqual(nodes[-2:], [("Player.inventory.capacity", 2),
                                      ("Player.inventory.items", 2)])

    def test_depth_first_pre_order(self):
        """Test DFS pre-order traversal."""
        paths = [path for path, _ in self.visit(TraversalStrategy.DEPTH_FIRST_PRE)]
        self.assertEqual(paths, PRE_ORDER)

    def test_default_order_is_pre_order(self):
        self.assertEqual([n.path for n, _ in walk(self.root)], PRE_ORDER)

    def test_depth_first_post_order(self):
        """Test DFS post-order traversal."""
        paths = [path for path, _ in self.visit(TraversalStrategy.DEPTH_FIRST_POST)]

        # Root should be last, children before their parent
        self.assertEqual(paths[-1], "Player")
        self.assertLess(paths.index("Player.inventory.items"), paths.index("Player.inventory"))
        self.assertEqual(sorted(paths), sorted(PRE_ORDER))

    def test_level_order(self):
        nodes = self.visit(TraversalStrategy.LEVEL_ORDER)
        self.assertEqual(nodes, self.visit(TraversalStrategy.BREADTH_FIRST))

    def test_max_depth_filtering(self):
        """Test maximum depth filtering."""
        for strategy in TraversalStrategy:
            shallow = self.visit(strategy, max_depth=1)

            self.assertEqual(len(shallow), 10, strategy)
            self.assertTrue(all(depth <= 1 for _, depth in shallow))

    def test_min_depth_filtering(self):
        """Test minimum depth filtering."""
        nodes = self.visit(TraversalStrategy.DEPTH_FIRST_PRE, min_depth=2)

        self.assertEqual([path for path, _ in nodes],
                         ["Player.inventory.capacity", "Player.inventory.items"])
        self.assertEqual(nodes, self.visit(TraversalStrategy.BREADTH_FIRST, min_depth=2))

    def test_subtree_depth_is_relative(self):
        inventory = self.root.get_children()[1]
        nodes = self.visit(TraversalStrategy.DEPTH_FIRST_PRE, root=inventory)

        self.assertEqual([depth for _, depth in nodes], [0, 1, 1])

    def test_iter_levels(self):
        levels = [(level, [n.name for n in nodes]) for level, nodes in iter_levels(self.root)]

        self.assertEqual([level for level, _ in levels], [0, 1, 2])
        self.assertEqual(levels[0][1], ["Player"])
        self.assertEqual(len(levels[1][1]), 9)
        self.assertEqual(levels[2][1], ["capacity", "items"])

    def test_iter_levels_stops_at_max_depth(self):
        levels = list(iter_levels(self.root, DepthConfig(max_depth=0)))

        self.assertEqual(len(levels), 1)
        self.assertIs(levels[0][1][0], self.root)


class TestTraversalConfig(unittest.TestCase):
    """Test DepthConfig and FilterConfig."""

    def test_depth_config(self):
        config = DepthConfig(min_depth=1, max_depth=2)

        self.assertFalse(config.should_yield(0))
        self.assertTrue(config.should_yield(2))
        self.assertFalse(config.should_yield(3))
        self.assertTrue(config.should_explore(1))
        self.assertFalse(config.should_explore(2))
        self.assertTrue(DepthConfig().should_explore(100))

    def test_filter_config(self):
        """Exclusion wins over inclusion."""
        root = build_tree(Player())
        name, inventory = root.get_children()[:2]

        config = FilterConfig(include_filter=lambda n: True,
                              exclude_filter=lambda n: n.name == "name")
        self.assertFalse(config.should_include(name))
        self.assertTrue(config.should_include(inventory))

        by_kind = FilterConfig(include_kinds={NodeKind.PROPERTY})
        self.assertFalse(by_kind.should_include(name))


class TestFunctionalApi(unittest.TestCase):
    """Test the functional wrappers in membertree.api."""

    def setUp(self):
        self.root = build_tree(Player())

    def test_build_tree_overrides(self):
        config = BuildConfig(max_depth=5)
        root = build_tree(Player(), max_depth=0, include_methods=False, config=config)

        self.assertEqual(config.max_depth, 5)
        self.assertIsNone(root.get_children()[1].children)
        self.assertNotIn(NodeKind.METHOD, {c.kind for c in root.get_children()})

    def test_traverse_tree_strategies(self):
        pre = [n.path for n in traverse_tree(self.root)]
        bfs = [n.path for n in traverse_tree(self.root, strategy="bfs")]
        post = [n.path for n in traverse_tree(self.root,
                                              strategy=TraversalStrategy.DEPTH_FIRST_POST)]

        self.assertEqual(pre, PRE_ORDER)
        self.assertEqual(bfs[0], "Player")
        self.assertEqual(post[-1], "Player")

        with self.assertRaises(ValueError):
            list(traverse_tree(self.root, strategy="sideways"))

    def test_traverse_tree_filters(self):
        methods = [n.name for n in traverse_tree(self.root, include_kinds={NodeKind.METHOD})]
        self.assertEqual(methods, ["heal", "describe"])

        no_inventory = traverse_tree(self.root, exclude_filter=lambda n: "inventory" in n.path)
        self.assertEqual(len(list(no_inventory)), 9)

    def test_count_nodes(self):
        self.assertEqual(count_nodes(self.root), 12)
        self.assertEqual(count_nodes(self.root, max_depth=0), 1)
        self.assertEqual(count_nodes(self.root, include_kinds={NodeKind.PROPERTY}), 2)

    def test_find_nodes(self):
        found = list(find_nodes(self.root, lambda n: n.value == 100))
        self.assertEqual([n.path for n in found], ["Player._health"])

    def test_get_tree_paths(self):
        self.assertEqual(get_tree_paths(self.root), PRE_ORDER)
        self.assertEqual(get_tree_paths(self.root, min_depth=2),
                         ["Player.inventory.capacity", "Player.inventory.items"])

    def test_get_leaf_nodes(self):
        leaves = [n.path for n in get_leaf_nodes(self.root)]

        self.assertEqual(len(leaves), 10)
        self.assertNotIn("Player", leaves)
        self.assertNotIn("Player.inventory", leaves)

    def test_get_tree_stats(self):
        stats = get_tree_stats(self.root)

        self.assertEqual(stats['total_nodes'], 12)
        self.assertEqual(stats['leaf_nodes'], 10)
        self.assertEqual(stats['internal_nodes'], 2)
        self.assertEqual(stats['unexpanded_nodes'], 10)
        self.assertEqual(stats['unreadable_nodes'], 0)
        self.assertEqual(stats['max_depth'], 2)
        self.assertEqual(stats['depths'], {0: 1, 1: 9, 2: 2})
        self.assertEqual(stats['kinds'], {'root': 1, 'field': 7, 'property': 2, 'method': 2})

    def test_stats_count_unreadable(self):
        stats = get_tree_stats(build_tree(Fragile()))
        self.assertEqual(stats['unreadable_nodes'], 1)


if __name__ == '__main__':
    unittest.main()
