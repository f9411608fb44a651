"""Node types of the lazy Merkle tree: empty, sparse and dense subtrees.

Every node exposes ``depth``, ``hash_node``, ``root()``, ``get_leaf(index)``,
``proof_path(index)`` and ``update(index, value, mutate)``. Proof paths are
returned top to bottom. ``update`` never changes an existing node unless
``mutate`` is true, in which case dense storage is rewritten in place.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, Iterable, MutableSequence

from semaphore.trees.proof import Branch, Left, Right

HashNode = Callable[[Any, Any], Any]


class Turn(Enum):
    """Which child a path takes at a given level."""

    LEFT = "left"
    RIGHT = "right"


def get_turn_at_depth(index: int, depth: int) -> Turn:
    """The turn taken by ``index`` at a subtree of the given depth."""
    if depth < 1:
        raise ValueError("depth must be at least 1 to take a turn")
    return Turn.RIGHT if index & (1 << (depth - 1)) else Turn.LEFT


def clear_turn_at_depth(index: int, depth: int) -> int:
    """The index within the child subtree after taking the turn at ``depth``."""
    if depth < 1:
        raise ValueError("depth must be at least 1 to take a turn")
    return index & ~(1 << (depth - 1))


def _branch(turn: Turn, sibling: Any) -> Branch:
    return Left(sibling) if turn is Turn.LEFT else Right(sibling)


def dense_values(
    values: Iterable[Any], empty_value: Any, depth: int, hash_node: HashNode
) -> list[Any]:
    """Build the flat storage of a dense tree holding ``values`` as its first leaves.

    The storage is 1-indexed: slot 1 is the root, the leaves occupy the last
    ``2 ** depth`` slots, and slot 0 holds the empty value as padding.
    """
    if depth < 0:
        raise ValueError("tree depth must not be negative")
    leaf_count = 1 << depth
    leaves = list(values)
    if len(leaves) > leaf_count:
        raise ValueError(
            f"{len(leaves)} values do not fit in a dense tree of {leaf_count} leaves"
        )
    storage = [empty_value] * leaf_count + leaves
    storage.extend([empty_value] * (leaf_count - len(leaves)))

    for current_depth in range(depth, 0, -1):
        parent_start = 1 << (current_depth - 1)
        child_start = 1 << current_depth
        for i in range(parent_start):
            left = storage[child_start + 2 * i]
            right = storage[child_start + 2 * i + 1]
            storage[parent_start + i] = hash_node(left, right)
    return storage


class EmptyTree:
    """A subtree whose leaves all hold the empty value."""

    def __init__(self, depth: int, empty_value: Any, hash_node: HashNode) -> None:
        if depth < 0:
            raise ValueError("tree depth must not be negative")
        values = [empty_value]
        for _ in range(depth):
            values.append(hash_node(values[-1], values[-1]))
        self.depth = depth
        self.hash_node = hash_node
        self._values = tuple(values)

    @classmethod
    def _sharing(cls, depth: int, values: tuple[Any, ...], hash_node: HashNode) -> EmptyTree:
        tree = cls.__new__(cls)
        tree.depth = depth
        tree.hash_node = hash_node
        tree._values = values
        return tree

    @property
    def empty_values(self) -> tuple[Any, ...]:
        """Roots of empty subtrees from the leaf level upwards."""
        return self._values

    def root(self) -> Any:
        return self._values[self.depth]

    def get_leaf(self, index: int = 0) -> Any:
        """Every leaf of an empty tree is the empty value."""
        return self._values[0]

    def proof_path(self, index: int) -> list[Branch]:
        return [
            _branch(get_turn_at_depth(index, level), self._values[level - 1])
            for level in range(self.depth, 0, -1)
        ]

    def update(self, index: int, value: Any, mutate: bool = False) -> SparseTree:
        return self.alloc_sparse().update(index, value, mutate)

    def alloc_sparse(self) -> SparseTree:
        """Expand one level into a sparse node over two empty children."""
        if self.depth == 0:
            return SparseTree.leaf(self.root(), self.hash_node)
        child = EmptyTree._sharing(self.depth - 1, self._values, self.hash_node)
        return SparseTree(child, child)

    def alloc_dense(self) -> DenseTree:
        """Materialise the whole subtree as dense storage."""
        storage = [self._values[0]]
        for level, value in enumerate(reversed(self._values[: self.depth + 1])):
            storage.extend([value] * (1 << level))
        return DenseTree(storage, self.depth, self.hash_node)


class SparseTree:
    """A pointer-based node with two children, or a leaf when it has none."""

    def __init__(self, left: Any, right: Any) -> None:
        if left.depth != right.depth:
            raise ValueError(
                f"children depths differ: {left.depth} and {right.depth}"
            )
        self.depth = left.depth + 1
        self.hash_node = left.hash_node
        self.children: tuple[Any, Any] | None = (left, right)
        self._root = self.hash_node(left.root(), right.root())

    @classmethod
    def leaf(cls, value: Any, hash_node: HashNode) -> SparseTree:
        """A depth-zero node holding a single leaf value."""
        tree = cls.__new__(cls)
        tree.depth = 0
        tree.hash_node = hash_node
        tree.children = None
        tree._root = value
        return tree

    def root(self) -> Any:
        return self._root

    def get_leaf(self, index: int) -> Any:
        if self.children is None:
            return self._root
        left, right = self.children
        next_index = clear_turn_at_depth(index, self.depth)
        if get_turn_at_depth(index, self.depth) is Turn.LEFT:
            return left.get_leaf(next_index)
        return right.get_leaf(next_index)

    def proof_path(self, index: int) -> list[Branch]:
        if self.children is None:
            return []
        left, right = self.children
        next_index = clear_turn_at_depth(index, self.depth)
        if get_turn_at_depth(index, self.depth) is Turn.LEFT:
            return [Left(right.root()), *left.proof_path(next_index)]
        return [Right(left.root()), *right.proof_path(next_index)]

    def update(self, index: int, value: Any, mutate: bool = False) -> SparseTree:
        if self.children is None:
            return SparseTree.leaf(value, self.hash_node)
        left, right = self.children
        next_index = clear_turn_at_depth(index, self.depth)
        if get_turn_at_depth(index, self.depth) is Turn.LEFT:
            return SparseTree(left.update(next_index, value, mutate), right)
        return SparseTree(left, right.update(next_index, value, mutate))


class DenseTree:
    """A subtree stored in a flat, 1-indexed array shared between versions.

    ``storage`` may be any mutable sequence, such as a list or a memory-mapped
    view; every subtree cut from it shares the same storage and lock.
    """

    def __init__(
        self,
        storage: MutableSequence[Any],
        depth: int,
        hash_node: HashNode,
        root_index: int = 1,
        lock: threading.RLock | None = None,
    ) -> None:
        if depth < 0:
            raise ValueError("tree depth must not be negative")
        self.storage = storage
        self.depth = depth
        self.hash_node = hash_node
        self.root_index = root_index
        self._lock = lock if lock is not None else threading.RLock()

    @classmethod
    def from_values(
        cls, values: Iterable[Any], empty_value: Any, depth: int, hash_node: HashNode
    ) -> DenseTree:
        """A dense tree whose first leaves are ``values``, the rest empty."""
        return cls(dense_values(values, empty_value, depth, hash_node), depth, hash_node)

    def _subtree(self, turn: Turn) -> DenseTree:
        offset = 0 if turn is Turn.LEFT else 1
        return DenseTree(
            self.storage,
            self.depth - 1,
            self.hash_node,
            2 * self.root_index + offset,
            self._lock,
        )

    def _leaf_slot(self, index: int) -> int:
        if not 0 <= index < 1 << self.depth:
            raise IndexError(f"leaf index {index} out of range for depth {self.depth}")
        return index + (self.root_index << self.depth)

    def root(self) -> Any:
        with self._lock:
            return self.storage[self.root_index]

    def get_leaf(self, index: int) -> Any:
        slot = self._leaf_slot(index)
        with self._lock:
            return self.storage[slot]

    def proof_path(self, index: int) -> list[Branch]:
        path: list[Branch] = []
        node = self.root_index
        with self._lock:
            for level in range(self.depth, 0, -1):
                left, right = 2 * node, 2 * node + 1
                if get_turn_at_depth(index, level) is Turn.LEFT:
                    path.append(Left(self.storage[right]))
                    node = left
                else:
                    path.append(Right(self.storage[left]))
                    node = right
                index = clear_turn_at_depth(index, level)
        return path

    def update(self, index: int, value: Any, mutate: bool = False) -> DenseTree | SparseTree:
        if mutate:
            self._update_in_place(index, value)
            return self
        self._leaf_slot(index)
        with self._lock:
            return self._derive(index, value)

    def _derive(self, index: int, value: Any) -> SparseTree:
        if self.depth == 0:
            return SparseTree.leaf(value, self.hash_node)
        next_index = clear_turn_at_depth(index, self.depth)
        left = self._subtree(Turn.LEFT)
        right = self._subtree(Turn.RIGHT)
        if get_turn_at_depth(index, self.depth) is Turn.LEFT:
            return SparseTree(left._derive(next_index, value), right)
        return SparseTree(left, right._derive(next_index, value))

    def _update_in_place(self, index: int, value: Any) -> None:
        slot = self._leaf_slot(index)
        with self._lock:
            storage = self.storage
            storage[slot] = value
            current = slot // 2
            while current > 0:
                storage[current] = self.hash_node(
                    storage[2 * current], storage[2 * current + 1]
                )
                current //= 2