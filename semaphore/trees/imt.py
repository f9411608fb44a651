"""Basic binary Merkle trees with every leaf and inner node stored."""

from __future__ import annotations

from itertools import islice
from typing import Any, Callable, Iterable

from semaphore.trees.proof import Left, Proof, Right

HashNode = Callable[[Any, Any], Any]


def _parent(index: int) -> int | None:
    """Index of the parent node, or None for the root."""
    if index <= 1:
        return None
    return index >> 1


def _left_child(index: int) -> int:
    """Index of the first (left) child."""
    return index << 1


def _node_depth(index: int) -> int:
    """Depth of a node index, the root being at depth zero."""
    if index <= 1:
        return 0
    return index.bit_length() - 1


class MerkleTree:
    """Merkle tree with all leaf and intermediate hashes stored.

    ``depth`` counts the layers below the root; the tree holds
    ``2 ** depth`` leaves. ``hash_node`` combines a left and a right hash.
    """

    def __init__(self, depth: int, initial_leaf: Any, hash_node: HashNode) -> None:
        if depth < 0:
            raise ValueError("tree depth must not be negative")
        self._depth = depth
        self._hash_node = hash_node

        empty = [initial_leaf]
        for _ in range(depth):
            empty.append(hash_node(empty[-1], empty[-1]))
        self._empty = tuple(empty)

        nodes = [initial_leaf]
        for level, value in enumerate(reversed(empty)):
            nodes.extend([value] * (1 << level))
        self._nodes = nodes

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def empty(self) -> tuple[Any, ...]:
        """Hashes of empty subtrees, from the leaf level upwards."""
        return self._empty

    def num_leaves(self) -> int:
        """Total leaf capacity of the tree."""
        return 1 << self._depth

    def root(self) -> Any:
        return self._nodes[1]

    def set(self, leaf: int, value: Any) -> None:
        """Set a single leaf and update the hashes above it."""
        self.set_range(leaf, (value,))

    def set_range(self, start: int, values: Iterable[Any]) -> None:
        """Set consecutive leaves from ``start``.

        Values beyond the last leaf are ignored.
        """
        if start < 0:
            raise IndexError("leaf index must not be negative")
        index = self.num_leaves() + start
        if index > len(self._nodes):
            raise IndexError(f"leaf index {start} out of range")
        new_values = list(islice(values, len(self._nodes) - index))
        if not new_values:
            return
        self._nodes[index : index + len(new_values)] = new_values
        self._update_nodes(index, index + len(new_values) - 1)

    def _update_nodes(self, start: int, end: int) -> None:
        assert _node_depth(start) == _node_depth(end)
        nodes = self._nodes
        while (parent_start := _parent(start)) is not None and (
            parent_end := _parent(end)
        ) is not None:
            for parent in range(parent_start, parent_end + 1):
                child = _left_child(parent)
                nodes[parent] = self._hash_node(nodes[child], nodes[child + 1])
            start, end = parent_start, parent_end

    def proof(self, leaf: int) -> Proof | None:
        """Merkle proof for a leaf, or None if the leaf is out of range."""
        if not 0 <= leaf < self.num_leaves():
            return None
        index = self.num_leaves() + leaf
        path = []
        while (parent := _parent(index)) is not None:
            if index & 1:
                path.append(Right(self._nodes[index - 1]))
            else:
                path.append(Left(self._nodes[index + 1]))
            index = parent
        return Proof(path)

    def verify(self, value: Any, proof: Proof) -> bool:
        """Check that ``proof`` leads from ``value`` to this tree's root."""
        return proof.root(value, self._hash_node) == self.root()

    def leaves(self) -> list[Any]:
        """Stored nodes from one position before the first leaf to the end."""
        return self._nodes[self.num_leaves() - 1 :]