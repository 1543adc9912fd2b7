"""AVL tree holder implementation"""

from __future__ import annotations
import logging
import threading
from typing import Any, Iterator, List, Optional
from dataclasses import dataclass

from avl_trees.base import (
    AbstractSetDataStructure,
    Comparator,
    natural_order,
)
from avl_trees import avl_node
from avl_trees.avl_node import AVLNode

# Configure logging
logger = logging.getLogger(__name__)
# Clear all handlers to ensure we don't add duplicates
if logger.hasHandlers():
    logger.handlers.clear()
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.INFO)
# Prevent propagation to the root logger to avoid duplicate logs
logger.propagate = False

DEFAULT_COMPARATOR: Comparator = natural_order

DEBUG = False


class AVLTree(AbstractSetDataStructure):
    """
    Holder of the current version of a persistent AVL tree.

    The tree owns a single nullable root reference and the comparator bound
    to it. Every write forwards into the node algorithm and replaces the
    held root with the returned one. Nodes are never modified, so readers
    holding an earlier root (see `snapshot`) keep seeing that version.

    Attributes:
        node (Optional[AVLNode]): The root node, or None if the tree is empty.
        comparator (Comparator): Total order over the stored keys.
    """
    __slots__ = ("node", "comparator", "_write_lock")

    def __init__(
        self,
        node: Optional[AVLNode] = None,
        comparator: Comparator = DEFAULT_COMPARATOR,
    ):
        if not callable(comparator):
            raise TypeError(f"AVLTree(): comparator must be callable, got {comparator!r}")
        self.node: Optional[AVLNode] = node
        self.comparator = comparator
        self._write_lock = threading.Lock()

    def is_empty(self) -> bool:
        return self.node is None

    def __str__(self):
        return "Empty AVLTree" if self.is_empty() else f"AVLTree(node={self.node})"

    __repr__ = __str__

    # Public API
    def insert(self, key) -> AVLTree:
        """
        Public method (O(log n)): Insert a key into the AVL tree.
        If an equal key already exists, it is replaced.

        Args:
            key: The key to be inserted.
        Returns:
            AVLTree: The updated tree.

        Raises:
            TypeError: If key is None.
        """
        if key is None:
            raise TypeError("insert(): key must not be None")
        with self._write_lock:
            old_root = self.node
            new_root = avl_node.insert(old_root, key, self.comparator)
            self.node = new_root
        if DEBUG:
            logger.debug(f"insert({key!r}): size {avl_node.size(old_root)} -> {new_root.size}")
        return self

    def delete(self, key) -> AVLTree:
        """
        Public method (O(log n)): Delete a key from the AVL tree.
        Deleting a key that is not present leaves the tree unchanged.

        Raises:
            TypeError: If key is None.
        """
        if key is None:
            raise TypeError("delete(): key must not be None")
        with self._write_lock:
            old_root = self.node
            new_root = avl_node.delete(old_root, key, self.comparator)
            self.node = new_root
        if DEBUG:
            if new_root is old_root:
                logger.debug(f"delete({key!r}): key not present, root unchanged")
            else:
                logger.debug(f"delete({key!r}): size {avl_node.size(old_root)} -> {avl_node.size(new_root)}")
        return self

    def contains(self, key) -> bool:
        """Return True if `key` is stored in the tree (iterative, O(log n))."""
        if key is None:
            raise TypeError("contains(): key must not be None")
        return avl_node.contains(self.node, key, self.comparator)

    def __contains__(self, key) -> bool:
        # None is never stored, so membership is simply False
        if key is None:
            return False
        return avl_node.contains(self.node, key, self.comparator)

    def get_range(self, start, end) -> List:
        """
        Return the keys k with start <= k <= end in ascending order.
        An inverted range (start after end) yields an empty list.
        """
        if start is None or end is None:
            raise TypeError("get_range(): bounds must not be None")
        return avl_node.get_range(self.node, start, end, self.comparator)

    def in_order_traversal(self) -> List:
        return avl_node.traverse(self.node)

    def __iter__(self) -> Iterator:
        # Iterate over the version current at call time.
        return iter(avl_node.traverse(self.node))

    def size(self) -> int:
        return avl_node.size(self.node)

    __len__ = size

    def height(self) -> int:
        return avl_node.height(self.node)

    def min(self):
        if self.is_empty():
            raise ValueError("min(): tree is empty")
        return self.node.min_key()

    def max(self):
        if self.is_empty():
            raise ValueError("max(): tree is empty")
        return self.node.max_key()

    def snapshot(self) -> AVLTree:
        """
        Return a new holder sharing the current root. Subsequent writes to
        either tree do not affect the other.
        """
        root = self.node
        logger.debug(f"snapshot(): sharing root of size {avl_node.size(root)}")
        return self.__class__(root, self.comparator)

    def print_structure(self, indent: int = 0, depth: int = 0, max_depth: int = 2) -> str:
        return _print_subtree(self.node, indent, depth, max_depth, "Root")


def _print_subtree(
    node: Optional[AVLNode], indent: int, depth: int, max_depth: int, label: str
) -> str:
    prefix = ' ' * indent
    if node is None:
        return f"{prefix}{label}: Empty"

    if depth > max_depth:
        return f"{prefix}{label}: ... (max depth reached)"

    result = [
        f"{prefix}{label}: {node.__class__.__name__}(key={node.key!r}, "
        f"height={node.height}, size={node.size}, balance={node.balance_factor()})"
    ]
    if node.left is not None or node.right is not None:
        result.append(_print_subtree(node.left, indent + 4, depth + 1, max_depth, "Left"))
        result.append(_print_subtree(node.right, indent + 4, depth + 1, max_depth, "Right"))
    return "\n".join(result)


@dataclass
class Stats:
    height: int
    node_count: int
    size: int
    max_abs_balance: int
    least_key: Optional[Any]
    greatest_key: Optional[Any]
    is_search_tree: bool
    is_balanced: bool
    heights_consistent: bool
    sizes_consistent: bool


def avl_stats_(node: Optional[AVLNode], cmp: Comparator = DEFAULT_COMPARATOR) -> Stats:
    """
    Returns aggregated statistics for an AVL tree in **O(n)** time.

    `height` and `node_count` are recomputed from the structure; `size` is
    the value stored in the root, so a mismatch between the two is reported
    through `sizes_consistent`.
    """
    # ---------- empty tree return ---------------------------------
    if node is None:
        return Stats(height             = 0,
                     node_count         = 0,
                     size               = 0,
                     max_abs_balance    = 0,
                     least_key          = None,
                     greatest_key       = None,
                     is_search_tree     = True,
                     is_balanced        = True,
                     heights_consistent = True,
                     sizes_consistent   = True,)

    left_stats = avl_stats_(node.left, cmp)
    right_stats = avl_stats_(node.right, cmp)

    # ---------- aggregate ----------------------------------
    real_height = 1 + max(left_stats.height, right_stats.height)
    node_count = 1 + left_stats.node_count + right_stats.node_count
    balance = right_stats.height - left_stats.height

    stats = Stats(
        height=real_height,
        node_count=node_count,
        size=node.size,
        max_abs_balance=max(abs(balance), left_stats.max_abs_balance, right_stats.max_abs_balance),
        least_key=left_stats.least_key if node.left is not None else node.key,
        greatest_key=right_stats.greatest_key if node.right is not None else node.key,
        is_search_tree=left_stats.is_search_tree and right_stats.is_search_tree,
        is_balanced=left_stats.is_balanced and right_stats.is_balanced and -1 <= balance <= 1,
        heights_consistent=(
            left_stats.heights_consistent
            and right_stats.heights_consistent
            and node.height == real_height
        ),
        sizes_consistent=(
            left_stats.sizes_consistent
            and right_stats.sizes_consistent
            and node.size == node_count
        ),
    )

    # Every left key orders strictly before this key, every right key strictly after.
    if node.left is not None and cmp(left_stats.greatest_key, node.key) >= 0:
        stats.is_search_tree = False
    if node.right is not None and cmp(right_stats.least_key, node.key) <= 0:
        stats.is_search_tree = False

    return stats


def collect_keys(tree: AVLTree) -> List:
    return tree.in_order_traversal()

