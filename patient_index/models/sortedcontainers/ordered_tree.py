"""
Unbalanced binary search tree implementation for ordered value storage.

Ties go right: a value equal to a node's value is inserted into that node's
right subtree, so equal-keyed values sit next to each other in insertion order.
The tree is never rebalanced.
"""

from collections.abc import AsyncIterator, Callable, Iterator
from dataclasses import dataclass
from typing import Any

from patient_index.interfaces.ordered_container import OrderedContainer
from patient_index.interfaces.traversable import TraversalOrder

Compare = Callable[[Any, Any], int]


def natural_compare(a: Any, b: Any) -> int:
    """Three-way comparison using the values' own ordering."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


@dataclass
class Node:
    """Node in the binary search tree."""

    value: Any
    left: "Node | None" = None
    right: "Node | None" = None


class OrderedTree(OrderedContainer):
    """
    Plain binary search tree implementation of OrderedContainer.

    Properties maintained:
    1. Every value in a node's left subtree compares less than the node's value
    2. Every value in a node's right subtree compares greater than or equal
    3. Every node is reachable from the root through exactly one path

    Size and depth are recomputed from the structure on every call.
    """

    def __init__(
        self,
        compare: Compare | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> None:
        """
        Initialize an empty tree.

        Args:
            compare: Three-way comparison returning <0, 0 or >0.
            key: Projection of a value onto its order key. Mutually
                 exclusive with compare.
        """
        if compare is not None and key is not None:
            raise ValueError("Pass either compare or key, not both")

        if key is not None:
            self._compare: Compare = lambda a, b: natural_compare(key(a), key(b))
        else:
            self._compare = compare or natural_compare

        self._root: Node | None = None

    @property
    def root(self) -> Node | None:
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def insert(self, value: Any) -> None:
        """Insert a value; equal keys descend right. O(depth)"""
        new_node = Node(value=value)
        if self._root is None:
            self._root = new_node
            return

        current = self._root
        while True:
            if self._compare(value, current.value) < 0:
                if current.left is None:
                    current.left = new_node
                    return
                current = current.left
            else:
                if current.right is None:
                    current.right = new_node
                    return
                current = current.right

    def remove(self, key: Any) -> bool:
        """Remove the first value equal to key. O(depth)"""
        parent: Node | None = None
        went_left = False
        current = self._root

        while current is not None:
            cmp = self._compare(key, current.value)
            if cmp < 0:
                parent, went_left, current = current, True, current.left
            elif cmp > 0:
                parent, went_left, current = current, False, current.right
            else:
                break

        if current is None:
            return False

        # Splice the replacement subtree into the slot that held the match
        replacement = self._detach(current)
        if parent is None:
            self._root = replacement
        elif went_left:
            parent.left = replacement
        else:
            parent.right = replacement
        return True

    def find(self, key: Any) -> Any | None:
        """Retrieve the earliest inserted value equal to key. O(depth)"""
        node = self._find_node(key)
        return node.value if node else None

    def contains(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def update(self, value: Any) -> bool:
        """Replace a stored value in place, keeping the tree shape. O(depth)"""
        node = self._find_node(value)
        if node is None:
            return False

        node.value = value
        return True

    def size(self) -> int:
        count = 0
        stack = [self._root] if self._root else []
        while stack:
            node = stack.pop()
            count += 1
            if node.left:
                stack.append(node.left)
            if node.right:
                stack.append(node.right)
        return count

    def depth(self) -> int:
        """Height in edges; -1 for an empty tree, 0 for a single node."""
        height = -1
        level = [self._root] if self._root else []
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    def __iter__(self) -> Iterator[Any]:
        return self.iterator()

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        return _RangeIterator(self._root, self._compare, start, end)

    def traverse(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Any]:
        if order == TraversalOrder.PRE_ORDER:
            return _PreOrderIterator(self._root)
        if order == TraversalOrder.POST_ORDER:
            return _PostOrderIterator(self._root)
        return self.iterator()

    def __aiter__(self) -> AsyncIterator[Any]:
        return self.async_iterator()

    def async_iterator(self, start: Any = None, end: Any = None) -> AsyncIterator[Any]:
        return _AsyncTraversal(self.iterator(start, end))

    def async_traverse(
        self, order: TraversalOrder = TraversalOrder.IN_ORDER
    ) -> AsyncIterator[Any]:
        return _AsyncTraversal(self.traverse(order))

    def _find_node(self, key: Any) -> Node | None:
        """Find the first node on the search path whose value equals key."""
        current = self._root
        while current is not None:
            cmp = self._compare(key, current.value)
            if cmp < 0:
                current = current.left
            elif cmp > 0:
                current = current.right
            else:
                return current
        return None

    def _detach(self, node: Node) -> Node | None:
        """
        Unlink a matched node and return the subtree that takes its place.

        - No children: nothing takes its place.
        - One child: that child is promoted.
        - Two children: the largest node of the left subtree (the in-order
          predecessor) is promoted, adopting the node's right subtree and
          what remains of its left subtree.
        """
        if node.left is not None and node.right is not None:
            largest, remaining = self._remove_largest(node.left)
            largest.left = remaining
            largest.right = node.right
            replacement: Node | None = largest
        elif node.left is not None:
            replacement = node.left
        else:
            replacement = node.right

        node.left = None
        node.right = None
        return replacement

    @staticmethod
    def _remove_largest(subtree: Node) -> tuple[Node, Node | None]:
        """
        Detach the rightmost node of a subtree.

        Returns:
            (detached node with no children, remaining subtree root)
        """
        parent: Node | None = None
        current = subtree
        while current.right is not None:
            parent, current = current, current.right

        # The detached node's left child takes its slot
        remaining_left = current.left
        current.left = None
        if parent is None:
            return current, remaining_left

        parent.right = remaining_left
        return current, subtree


class _RangeIterator(Iterator[Any]):
    """In-order iterator over values in [start, end)."""

    def __init__(self, root: Node | None, compare: Compare, start: Any, end: Any) -> None:
        self._stack: list[Node] = []
        self._compare = compare
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        if self._end is not None and self._compare(node.value, self._end) >= 0:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.value

    def _push_left_path(self, node: Node | None, start: Any) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node:
            if start is not None and self._compare(node.value, start) < 0:
                node = node.right
            else:
                self._stack.append(node)
                node = node.left


class _PreOrderIterator(Iterator[Any]):
    """Node, then left subtree, then right subtree."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = [root] if root else []

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()
        if node.right:
            self._stack.append(node.right)
        if node.left:
            self._stack.append(node.left)
        return node.value


class _PostOrderIterator(Iterator[Any]):
    """Left subtree, then right subtree, then node."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = []
        self._current = root
        self._last_visited: Node | None = None

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        while True:
            while self._current is not None:
                self._stack.append(self._current)
                self._current = self._current.left

            if not self._stack:
                raise StopIteration

            top = self._stack[-1]
            if top.right is not None and top.right is not self._last_visited:
                self._current = top.right
                continue

            self._stack.pop()
            self._last_visited = top
            return top.value


class _AsyncTraversal(AsyncIterator[Any]):
    """Async view of an in-memory walk (no I/O, never suspends)."""

    def __init__(self, iterator: Iterator[Any]) -> None:
        self._iterator = iterator

    def __aiter__(self) -> "_AsyncTraversal":
        return self

    async def __anext__(self) -> Any:
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration from None
