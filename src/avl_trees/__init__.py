"""
Persistent AVL trees.

This package provides an immutable, structurally shared AVL tree storing an
ordered set of unique keys under an injected comparison function.
"""

from avl_trees.base import (
    AbstractSetDataStructure,
    Comparator,
    natural_order,
    reverse_order,
    key_order,
)

from avl_trees.avl_node import AVLNode

from avl_trees.avl_tree import (
    AVLTree,
    Stats,
    avl_stats_,
)

from avl_trees.factory import (
    make_comparator,
    create_avl_tree,
)

__all__ = [
    'AbstractSetDataStructure',
    'Comparator',
    'natural_order',
    'reverse_order',
    'key_order',
    'AVLNode',
    'AVLTree',
    'Stats',
    'avl_stats_',
    'make_comparator',
    'create_avl_tree',
]
