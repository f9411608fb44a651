import pytest

from semaphore.trees.lazy_nodes import (
    DenseTree,
    EmptyTree,
    SparseTree,
    Turn,
    clear_turn_at_depth,
    dense_values,
    get_turn_at_depth,
)
from semaphore.trees.proof import Proof
from semaphore.util import keccak256


def add_hash(left, right):
    return left + 2 * right + 1


def keccak_node(left, right):
    return keccak256(left + right)


ZERO = bytes(32)


def word(n):
    return n.to_bytes(32, "big")


def test_turns_and_clearing():
    assert get_turn_at_depth(2, 2) is Turn.RIGHT
    assert get_turn_at_depth(2, 1) is Turn.LEFT
    for depth in range(1, 5):
        for index in range(1 << depth):
            cleared = clear_turn_at_depth(index, depth)
            assert cleared < 1 << (depth - 1)
            expected = Turn.RIGHT if index >= 1 << (depth - 1) else Turn.LEFT
            assert get_turn_at_depth(index, depth) is expected


def test_turn_at_depth_zero_is_an_error():
    with pytest.raises(ValueError):
        get_turn_at_depth(0, 0)
    with pytest.raises(ValueError):
        clear_turn_at_depth(0, 0)


def test_updates_in_sparse():
    tree_1 = EmptyTree(2, 0, add_hash)
    assert tree_1.root() == 4
    tree_2 = tree_1.update(0, 1, False)
    assert tree_1.root() == 4
    assert tree_2.root() == 5
    tree_3 = tree_2.update(2, 2, False)
    assert tree_1.root() == 4
    assert tree_2.root() == 5
    assert tree_3.root() == 9


def test_updates_in_dense():
    tree_1 = EmptyTree(2, 0, add_hash).alloc_dense()
    assert tree_1.root() == 4
    tree_2 = tree_1.update(0, 1, False)
    assert tree_1.root() == 4
    assert tree_2.root() == 5
    tree_3 = tree_2.update(2, 2, False)
    assert tree_1.root() == 4
    assert tree_2.root() == 5
    assert tree_3.root() == 9


def test_empty_keccak_root():
    tree = EmptyTree(2, ZERO, keccak_node)
    assert tree.root() == bytes.fromhex(
        "b4c11951957c6f8f642c4af61cd6b24640fec6dc7fc607ee8206a99e92410d30"
    )
    assert tree.alloc_dense().root() == tree.root()


def test_mutable_updates_in_dense():
    tree = EmptyTree(2, ZERO, keccak_node).alloc_dense()
    original = tree
    expected = [
        "c1ba1812ff680ce84c1d5b4f1087eeb08147a4d510f3496b2849df3a73f5af95",
        "893760ec5b5bee236f29e85aef64f17139c3c1b7ff24ce64eb6315fca0f2485b",
        "222ff5e0b5877792c2bc1670e2ccd0c2c97cd7bb1672a57d598db05092d3d72c",
        "a9bb8c3f1f12e9aa903a50c47f314b57610a3ab32f2d463293f58836def38d36",
    ]
    for index, root_hex in enumerate(expected):
        tree = tree.update(index, word(index + 1), True)
        assert original.root() == bytes.fromhex(root_hex)


def test_mutable_updates_with_dense_prefix():
    h1, h2, h3, h4 = (word(n) for n in range(1, 5))
    tree = SparseTree(
        EmptyTree(1, ZERO, keccak_node).alloc_dense(), EmptyTree(1, ZERO, keccak_node)
    )
    original = tree
    t1 = tree.update(0, h1, True)
    assert t1.root() == bytes.fromhex(
        "c1ba1812ff680ce84c1d5b4f1087eeb08147a4d510f3496b2849df3a73f5af95"
    )
    t2 = t1.update(1, h2, True)
    t3 = t2.update(2, h3, True)
    t4 = t3.update(3, h4, True)
    assert t4.root() == bytes.fromhex(
        "a9bb8c3f1f12e9aa903a50c47f314b57610a3ab32f2d463293f58836def38d36"
    )
    assert [original.get_leaf(i) for i in range(4)] == [h1, h2, ZERO, ZERO]
    assert [t4.get_leaf(i) for i in range(4)] == [h1, h2, h3, h4]


@pytest.mark.parametrize("kind", ["empty", "sparse", "dense", "mixed"])
def test_proof_paths_lead_to_root(kind):
    depth = 3
    if kind == "empty":
        tree = EmptyTree(depth, 0, add_hash)
    elif kind == "sparse":
        tree = EmptyTree(depth, 0, add_hash).update(3, 7, False).update(6, 9, False)
    elif kind == "dense":
        tree = DenseTree.from_values([5, 6, 7], 0, depth, add_hash).update(6, 9, False)
    else:
        tree = SparseTree(
            DenseTree.from_values([5, 6], 0, depth - 1, add_hash),
            EmptyTree(depth - 1, 0, add_hash),
        ).update(5, 11, False)
    for index in range(1 << depth):
        path = tree.proof_path(index)
        assert len(path) == depth
        proof = Proof(reversed(path))
        assert proof.leaf_index() == index
        assert proof.root(tree.get_leaf(index), add_hash) == tree.root()


def test_dense_values_matches_updates():
    storage = dense_values([1, 2, 3], 0, 2, add_hash)
    assert len(storage) == 8
    assert storage[4:] == [1, 2, 3, 0]
    built = EmptyTree(2, 0, add_hash).update(0, 1).update(1, 2).update(2, 3)
    assert storage[1] == built.root()
    assert DenseTree.from_values([1, 2, 3], 0, 2, add_hash).root() == built.root()


def test_dense_values_rejects_too_many_values():
    with pytest.raises(ValueError):
        dense_values([1, 2, 3, 4, 5], 0, 2, add_hash)


def test_sparse_children_must_have_equal_depth():
    with pytest.raises(ValueError):
        SparseTree(EmptyTree(1, 0, add_hash), EmptyTree(2, 0, add_hash))


def test_dense_leaf_index_out_of_range():
    tree = DenseTree.from_values([1], 0, 2, add_hash)
    with pytest.raises(IndexError):
        tree.get_leaf(4)
    with pytest.raises(IndexError):
        tree.update(4, 1, True)


def test_non_mutating_dense_update_keeps_original():
    tree = DenseTree.from_values([1, 2], 0, 2, add_hash)
    before = tree.root()
    derived = tree.update(3, 8, False)
    assert tree.root() == before
    assert tree.get_leaf(3) == 0
    assert derived.get_leaf(3) == 8
    assert [derived.get_leaf(i) for i in range(3)] == [1, 2, 0]


def test_alloc_sparse_and_empty_leaves():
    leaf = EmptyTree(0, 5, add_hash).alloc_sparse()
    assert leaf.children is None
    assert leaf.root() == 5
    empty = EmptyTree(3, 0, add_hash)
    assert empty.alloc_sparse().root() == empty.root()
    assert [empty.get_leaf(i) for i in range(8)] == [0] * 8