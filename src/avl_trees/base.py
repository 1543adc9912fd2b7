from abc import ABC, abstractmethod

from typing import Any, Callable, Generic, Iterable, List, TypeVar

K = TypeVar("K")

Comparator = Callable[[Any, Any], int]


def natural_order(a, b) -> int:
    """
    Compare two keys using their own ordering.

    Returns:
        int: negative if a orders before b, zero if equal, positive otherwise.
    """
    return (a > b) - (a < b)


def reverse_order(cmp: Comparator) -> Comparator:
    """Return a comparator that orders keys opposite to `cmp`."""
    def _reversed(a, b) -> int:
        return cmp(b, a)
    return _reversed


def key_order(key_func: Callable[[Any], Any]) -> Comparator:
    """Return a comparator ordering keys by `key_func(key)`, like sorted(key=...)."""
    def _by_key(a, b) -> int:
        return natural_order(key_func(a), key_func(b))
    return _by_key


T = TypeVar("T", bound="AbstractSetDataStructure")

class AbstractSetDataStructure(ABC, Generic[T]):
    """
    Abstract base class for an ordered set of unique keys.
    """

    @abstractmethod
    def insert(self, key) -> T:
        """
        Insert a key into the set. An equal key already present is replaced.

        Parameters:
            key: The key to be inserted.

        Returns:
            AbstractSetDataStructure: The set data structure instance where the key was inserted.
        """
        pass

    @abstractmethod
    def delete(self, key) -> T:
        """
        Delete the given key from the set. Deleting an absent key is a no-op.

        Parameters:
            key: The key to be deleted.

        Returns:
            AbstractSetDataStructure: The set data structure instance after deletion.
        """
        pass

    @abstractmethod
    def contains(self, key) -> bool:
        """Return True if a key equal to `key` is stored in the set."""
        pass

    @abstractmethod
    def get_range(self, start, end) -> List:
        """
        Return all stored keys k with start <= k <= end in ascending order.
        """
        pass

    @abstractmethod
    def in_order_traversal(self) -> List:
        """Return all stored keys in ascending order."""
        pass

    def insert_all(self: T, keys: Iterable) -> T:
        """Insert every key of `keys` in iteration order."""
        for key in keys:
            self.insert(key)
        return self
