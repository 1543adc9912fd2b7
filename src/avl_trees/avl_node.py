# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Persistent AVL node implementation"""

from __future__ import annotations
from typing import List, Optional

from avl_trees.base import Comparator


class AVLNode:
    """
    An immutable node of a persistent AVL tree.

    A tree version is a reference to its root node; the empty tree is None.
    Mutating operations never modify an existing node. They rebuild the
    nodes on the path from the affected position back to the root and
    share every other subtree with the previous version.

    Attributes:
        key: The key stored in this node, ordered by an injected comparator.
        left (Optional[AVLNode]): Subtree of keys ordering before `key`, or None.
        right (Optional[AVLNode]): Subtree of keys ordering after `key`, or None.
        height (int): 1 for a leaf, else 1 + the taller child's height.
        size (int): Number of keys in the subtree rooted here.
    """
    __slots__ = ("key", "left", "right", "height", "size")

    def __init__(
        self,
        key,
        left: Optional[AVLNode] = None,
        right: Optional[AVLNode] = None,
    ) -> None:
        """
        Construct a node over existing children, deriving height and size
        from the children actually passed in.

        Parameters:
            key: The node's key.
            left (Optional[AVLNode]): Existing left child.
            right (Optional[AVLNode]): Existing right child.
        """
        left_height = left.height if left is not None else 0
        right_height = right.height if right is not None else 0
        left_size = left.size if left is not None else 0
        right_size = right.size if right is not None else 0

        _set = object.__setattr__
        _set(self, "key", key)
        _set(self, "left", left)
        _set(self, "right", right)
        _set(self, "height", 1 + (right_height if right_height > left_height else left_height))
        _set(self, "size", 1 + left_size + right_size)

    @classmethod
    def leaf(cls, key) -> AVLNode:
        """Construct a new leaf node with no children."""
        node = cls.__new__(cls)
        _set = object.__setattr__
        _set(node, "key", key)
        _set(node, "left", None)
        _set(node, "right", None)
        _set(node, "height", 1)
        _set(node, "size", 1)
        return node

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable; cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable; cannot delete '{name}'")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r}, height={self.height}, size={self.size})"

    def has_left(self) -> bool:
        return self.left is not None

    def has_right(self) -> bool:
        return self.right is not None

    def balance_factor(self) -> int:
        """
        Relative height of the two subtrees: right height minus left height.
        Positive if the right subtree is taller, negative if the left one is.
        """
        return height(self.right) - height(self.left)

    # Mutation
    def insert(self, key, cmp: Comparator) -> AVLNode:
        """
        Insert `key` into the subtree rooted at this node.

        A key comparing equal to this node's key replaces it, keeping both
        children; the subtree size does not change.

        Parameters:
            key: The key to insert.
            cmp (Comparator): Total order over keys.

        Returns:
            AVLNode: The root of the new, rebalanced subtree.
        """
        comparison = cmp(key, self.key)
        if comparison < 0:
            if self.left is None:
                # A new leaf cannot unbalance this node by more than one.
                return AVLNode(self.key, AVLNode.leaf(key), self.right)
            new_left = self.left.insert(key, cmp)
            return AVLNode(self.key, new_left, self.right)._rotate_right_if_unbalanced()

        if comparison > 0:
            if self.right is None:
                return AVLNode(self.key, self.left, AVLNode.leaf(key))
            new_right = self.right.insert(key, cmp)
            return AVLNode(self.key, self.left, new_right)._rotate_left_if_unbalanced()

        # Duplicate key: replace it.
        return AVLNode(key, self.left, self.right)

    def delete(self, key, cmp: Comparator) -> Optional[AVLNode]:
        """
        Delete `key` from the subtree rooted at this node.

        If the key is not present the subtree is returned by reference and no
        node is allocated.

        Parameters:
            key: The key to delete.
            cmp (Comparator): Total order over keys.

        Returns:
            Optional[AVLNode]: The root of the new subtree, or None if it became empty.
        """
        comparison = cmp(key, self.key)
        if comparison < 0:
            if self.left is None:
                return self
            new_left = self.left.delete(key, cmp)
            if new_left is self.left:
                return self
            return AVLNode(self.key, new_left, self.right)._rotate_left_if_unbalanced()

        if comparison > 0:
            if self.right is None:
                return self
            new_right = self.right.delete(key, cmp)
            if new_right is self.right:
                return self
            return AVLNode(self.key, self.left, new_right)._rotate_right_if_unbalanced()

        # Found the key.
        if self.left is not None and self.right is not None:
            # Promote a key from the taller side so that removing it needs no
            # rotation at this level.
            replacement_key = self._find_replacement_key()
            root = self.delete(replacement_key, cmp)
            return AVLNode(replacement_key, root.left, root.right)

        return self.left if self.left is not None else self.right

    def _find_replacement_key(self):
        """
        Key to take this node's place in a delete when it has two children:
        the minimum of the right subtree if the right side is at least as
        tall, else the maximum of the left subtree.
        """
        if self.balance_factor() > -1:
            return self.right.min_key()
        return self.left.max_key()

    # Balancing
    def _rotate_right_if_unbalanced(self) -> AVLNode:
        root = self
        if root.balance_factor() < -1:
            # Left child leaning right needs a left rotation first.
            if root.left.balance_factor() > 0:
                root = AVLNode(root.key, root.left._rotate_left(), root.right)
            root = root._rotate_right()
        return root

    def _rotate_left_if_unbalanced(self) -> AVLNode:
        root = self
        if root.balance_factor() > 1:
            if root.right.balance_factor() < 0:
                root = AVLNode(root.key, root.left, root.right._rotate_right())
            root = root._rotate_left()
        return root

    def _rotate_left(self) -> AVLNode:
        """
        Left rotation around this node; the right child becomes the root.

                [10]                    (15)
               /    \\                  /    \\
              5     (15)     ->      [10]    20
                   /    \\           /    \\
                  12    20          5     12
        """
        pivot = self.right
        new_self = AVLNode(self.key, self.left, pivot.left)
        return AVLNode(pivot.key, new_self, pivot.right)

    def _rotate_right(self) -> AVLNode:
        """
        Right rotation around this node; the left child becomes the root.

                [10]                    (5)
               /    \\                 /   \\
             (5)    15      ->       2    [10]
            /   \\                         /   \\
           2     7                        7    15
        """
        pivot = self.left
        new_self = AVLNode(self.key, pivot.right, self.right)
        return AVLNode(pivot.key, pivot.left, new_self)

    # Queries
    def contains(self, key, cmp: Comparator) -> bool:
        """Iterative O(height) membership test."""
        current = self
        while current is not None:
            comparison = cmp(key, current.key)
            if comparison == 0:
                return True
            current = current.left if comparison < 0 else current.right
        return False

    def min_key(self):
        current = self
        while current.left is not None:
            current = current.left
        return current.key

    def max_key(self):
        current = self
        while current.right is not None:
            current = current.right
        return current.key

    def get_range(self, start, end, cmp: Comparator) -> List:
        """
        Return the keys k with start <= k <= end in ascending order, visiting
        only the subtrees that can hold such keys.
        """
        result: List = []
        self._collect_range(start, end, cmp, result)
        return result

    def _collect_range(self, start, end, cmp: Comparator, result: List) -> None:
        after_start = cmp(start, self.key) <= 0
        before_end = cmp(end, self.key) >= 0
        if after_start and self.left is not None:
            self.left._collect_range(start, end, cmp, result)
        if after_start and before_end:
            result.append(self.key)
        if before_end and self.right is not None:
            self.right._collect_range(start, end, cmp, result)

    def in_order_traversal(self) -> List:
        """Return all keys of this subtree in ascending order."""
        result: List = []
        self._collect_in_order(result)
        return result

    def _collect_in_order(self, result: List) -> None:
        if self.left is not None:
            self.left._collect_in_order(result)
        result.append(self.key)
        if self.right is not None:
            self.right._collect_in_order(result)


# Functions over optional roots; None is the empty tree.

def height(root: Optional[AVLNode]) -> int:
    return root.height if root is not None else 0


def size(root: Optional[AVLNode]) -> int:
    return root.size if root is not None else 0


def insert(root: Optional[AVLNode], key, cmp: Comparator) -> AVLNode:
    """Insert `key` into the tree rooted at `root` and return the new root."""
    if root is None:
        return AVLNode.leaf(key)
    return root.insert(key, cmp)


def delete(root: Optional[AVLNode], key, cmp: Comparator) -> Optional[AVLNode]:
    """Delete `key` from the tree rooted at `root`; returns None once the tree is empty."""
    if root is None:
        return None
    return root.delete(key, cmp)


def contains(root: Optional[AVLNode], key, cmp: Comparator) -> bool:
    return root is not None and root.contains(key, cmp)


def get_range(root: Optional[AVLNode], start, end, cmp: Comparator) -> List:
    if root is None:
        return []
    return root.get_range(start, end, cmp)


def traverse(root: Optional[AVLNode]) -> List:
    if root is None:
        return []
    return root.in_order_traversal()
