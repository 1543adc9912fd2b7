"""Factory for the creation of AVL trees"""

from typing import Any, Callable, Dict, Iterable, Optional
import logging

from avl_trees.base import Comparator, key_order, natural_order, reverse_order
from avl_trees.avl_tree import AVLTree

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for the key-less comparators, keyed by direction; comparators built
# from a key function are never cached
_comparator_cache: Dict[bool, Comparator] = {}


def make_comparator(
    key: Optional[Callable[[Any], Any]] = None,
    reverse: bool = False,
) -> Comparator:
    """
    Factory function to generate a comparator from a key function and a direction,
    following the conventions of sorted().

    Returns:
        Comparator – natural order over key(x) (or x itself if key is None),
                     inverted if reverse is True.
    """
    if key is None and reverse in _comparator_cache:
        logger.debug(f"Using cached comparator for reverse={reverse}")
        return _comparator_cache[reverse]

    logger.debug(f"Creating new comparator for key={key}, reverse={reverse}")
    cmp = natural_order if key is None else key_order(key)
    if reverse:
        cmp = reverse_order(cmp)

    if key is None:
        _comparator_cache[reverse] = cmp
    return cmp


def create_avl_tree(
    keys: Iterable = (),
    key: Optional[Callable[[Any], Any]] = None,
    reverse: bool = False,
    comparator: Optional[Comparator] = None,
) -> AVLTree:
    """
    Create an AVL tree and insert `keys` into it in iteration order.

    Either pass an explicit `comparator`, or describe the order with
    `key` / `reverse`; combining both raises ValueError.
    """
    if comparator is not None and (key is not None or reverse):
        raise ValueError("create_avl_tree(): pass either comparator or key/reverse, not both")
    if comparator is None:
        comparator = make_comparator(key, reverse)

    tree = AVLTree(comparator=comparator)
    tree.insert_all(keys)
    logger.debug(f"Created tree instance of type {type(tree).__name__} with {tree.size()} keys")
    return tree
