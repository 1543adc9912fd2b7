"""Utility functions for testing AVLTree invariants."""

import math
import logging
from avl_trees.avl_tree import (
    AVLTree,
    Stats
)

TREE_FLAGS = (
    "is_search_tree",
    "is_balanced",
    "heights_consistent",
    "sizes_consistent",
)

def avl_height_bound(size: int) -> int:
    """Upper bound on the height of an AVL tree holding `size` keys."""
    return math.ceil(1.44 * math.log2(size + 2))

def assert_tree_invariants_tc(tc, t: AVLTree, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n"
            f"Tree structure:\n{t.print_structure(max_depth=8)}"
        )

    tc.assertLessEqual(
        stats.max_abs_balance, 1,
        f"Invariant failed: max_abs_balance={stats.max_abs_balance} > 1"
    )

    if t.is_empty():
        tc.assertEqual(stats.node_count, 0)
        tc.assertEqual(t.size(), 0)
        tc.assertEqual(t.in_order_traversal(), [])
        return

    tc.assertGreater(
        stats.height, 0,
        f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree"
    )
    tc.assertLessEqual(
        stats.height, avl_height_bound(stats.node_count),
        f"Invariant failed: height={stats.height} exceeds AVL bound for "
        f"{stats.node_count} keys"
    )
    tc.assertEqual(
        t.size(), stats.node_count,
        f"Invariant failed: size()={t.size()} != node_count={stats.node_count}"
    )
    tc.assertIsNotNone(
        stats.least_key,
        "Invariant failed: least_key is None for non-empty tree"
    )
    tc.assertIsNotNone(
        stats.greatest_key,
        "Invariant failed: greatest_key is None for non-empty tree"
    )

    # traversal must be strictly ascending under the tree's comparator
    keys = t.in_order_traversal()
    tc.assertEqual(len(keys), stats.node_count)
    cmp = t.comparator
    for prev, cur in zip(keys, keys[1:]):
        tc.assertLess(
            cmp(prev, cur), 0,
            f"Invariant failed: traversal not strictly ascending at {prev!r}, {cur!r}"
        )
    tc.assertEqual(keys[0], stats.least_key)
    tc.assertEqual(keys[-1], stats.greatest_key)
    logging.debug(f"Invariants hold for tree of size {stats.node_count}, height {stats.height}")
