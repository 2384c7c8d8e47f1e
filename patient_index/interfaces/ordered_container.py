"""
OrderedContainer abstract base class for keyed, ordered value containers.
"""

from abc import abstractmethod
from typing import Any

from patient_index.interfaces.traversable import Traversable


class OrderedContainer(Traversable):
    """
    Abstract base class for ordered containers keyed by a total order.

    Values are compared with a three-way comparison; two values that compare
    equal are the same entry for find, update and remove, even if their other
    fields differ. Inserting an equal value never overwrites.

    Implementations:
    - OrderedTree: Plain unbalanced binary search tree
    """

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True if the container holds no values."""
        pass

    @abstractmethod
    def insert(self, value: Any) -> None:
        """
        Insert a value. Always succeeds; equal-keyed values are kept side by side.

        Args:
            value: The value to insert.

        Time complexity: O(depth)
        """
        pass

    @abstractmethod
    def remove(self, key: Any) -> bool:
        """
        Remove one value that compares equal to key.

        Args:
            key: A value carrying the key to remove.

        Returns:
            True if a value was found and removed, False otherwise.

        Time complexity: O(depth)
        """
        pass

    @abstractmethod
    def find(self, key: Any) -> Any | None:
        """
        Retrieve the stored value that compares equal to key.

        Args:
            key: A value carrying the key to look up.

        Returns:
            The stored value if found, None otherwise.

        Time complexity: O(depth)
        """
        pass

    @abstractmethod
    def contains(self, key: Any) -> bool:
        """
        Check if a value with the given key exists.

        Args:
            key: A value carrying the key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(depth)
        """
        pass

    @abstractmethod
    def update(self, value: Any) -> bool:
        """
        Replace the stored value that find() would return, without moving it.

        Args:
            value: The replacement; its key must equal the stored value's key.

        Returns:
            True if a value was replaced, False if the key was not found.
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored values.

        Time complexity: O(N)
        """
        pass

    @abstractmethod
    def depth(self) -> int:
        """
        Return the height of the structure in edges (-1 when empty).

        Time complexity: O(N)
        """
        pass
