"""
Traversable protocol for tree structures that support ordered walks.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from enum import IntEnum
from typing import Any


class TraversalOrder(IntEnum):
    """Visiting order for a tree walk."""

    IN_ORDER = 0  # left, node, right
    PRE_ORDER = 1  # node, left, right
    POST_ORDER = 2  # left, right, node


class Traversable(ABC):
    """
    Protocol for data structures that can be walked in tree order.

    Implementations must support:
    - Full in-order iteration via __iter__
    - Key-bounded in-order iteration via iterator(start, end)
    - Pre-order and post-order walks via traverse(order)
    - Async counterparts of the above via __aiter__, async_iterator and
      async_traverse
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Return an iterator over all values in ascending key order."""
        pass

    @abstractmethod
    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        """
        Return an in-order iterator over values in the specified key range.

        Args:
            start: Start key (inclusive). If None, starts from the smallest value.
            end: End key (exclusive). If None, iterates to the largest value.

        Returns:
            Iterator yielding values in ascending key order.
        """
        pass

    @abstractmethod
    def traverse(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Any]:
        """
        Return an iterator that walks the whole structure in the given order.

        Args:
            order: In-order, pre-order or post-order.

        Returns:
            Iterator yielding every stored value exactly once.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Any]:
        """Return an async iterator over all values in ascending key order."""
        pass

    @abstractmethod
    def async_iterator(self, start: Any = None, end: Any = None) -> AsyncIterator[Any]:
        """
        Return an async in-order iterator over values in the specified key range.

        Args:
            start: Start key (inclusive). If None, starts from the smallest value.
            end: End key (exclusive). If None, iterates to the largest value.

        Returns:
            AsyncIterator yielding values in ascending key order.
        """
        pass

    @abstractmethod
    def async_traverse(
        self, order: TraversalOrder = TraversalOrder.IN_ORDER
    ) -> AsyncIterator[Any]:
        """Async counterpart of traverse()."""
        pass
