# semaphore

Building blocks for Semaphore-style anonymous signalling:

- `semaphore.field.hash_to_field` hashes arbitrary bytes into the BN254
  scalar field (`semaphore.field.MODULUS`). It computes Keccak-256 and
  shifts the result right by one byte.
- `semaphore.util` holds `keccak256` and the hex helpers `bytes_to_hex`,
  `bytes_from_hex`, `serialize_bytes` and `deserialize_bytes`. Malformed
  input raises `semaphore.util.HexError`.
- `semaphore.hashes.Hash` is a 32-byte hash value. It reads hex with or
  without a `0x` prefix and writes `0x`-prefixed lower-case hex.
- `semaphore.protocol.Proof` is a Groth16 proof (two G1 points and a G2
  point of 256-bit integers) with JSON conversion; `path_index` and
  `merkle_proof_siblings` turn a Merkle proof into circuit inputs.
- `semaphore.packed_proof.PackedProof` is the same proof as a single
  256-byte ABI-encoded blob.
- `semaphore.trees` holds Merkle proof paths (`trees.proof`), a fully
  stored tree (`trees.imt.MerkleTree`) and the node types of a lazy,
  persistent tree (`trees.lazy_nodes`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Hashing to the field

```python
from semaphore.field import hash_to_field

signal_hash = hash_to_field(b"signal")
external_nullifier_hash = hash_to_field(b"appId")
```

## Hashes and proofs

```python
from semaphore.hashes import Hash
from semaphore.packed_proof import PackedProof

h = Hash.from_str("0X1C4823575d154474EE3e5ac838d002456a815181437afd14f126da58a9912bbe")
print(h.to_json())   # "0x1c48...2bbe"

packed = PackedProof.from_str("0x" + "00" * 256)
proof = packed.to_proof()
print(proof.to_json())   # [["0x0", "0x0"], [["0x0", "0x0"], ["0x0", "0x0"]], ["0x0", "0x0"]]
assert PackedProof.from_proof(proof) == packed
```

`HexError` covers a wrong length, an odd number of digits and characters
that are not hex digits.

## Merkle trees

Every tree takes the node hash function as an argument:

```python
from semaphore.trees.imt import MerkleTree
from semaphore.util import keccak256

def hash_node(left: bytes, right: bytes) -> bytes:
    return keccak256(left + right)

tree = MerkleTree(10, bytes(32), hash_node)
tree.set(0, b"\x01" * 32)
proof = tree.proof(0)
assert tree.verify(b"\x01" * 32, proof)
```

`MerkleTree.proof` returns `None` for a leaf outside the tree. A
`semaphore.trees.proof.Proof` is a path of `Left` and `Right` branches,
bottom to top; `leaf_index()` recovers the leaf position and
`root(value, hash_node)` recomputes the root.

## Lazy tree nodes

`semaphore.trees.lazy_nodes` provides `EmptyTree`, `SparseTree` and
`DenseTree`. Each has `root()`, `get_leaf(index)`, `proof_path(index)`
(top to bottom) and `update(index, value, mutate)`. Without `mutate`,
`update` returns a new node and leaves the old one unchanged; with
`mutate=True`, a `DenseTree` rewrites its shared storage in place and
returns itself.

```python
from semaphore.trees.lazy_nodes import DenseTree, EmptyTree
from semaphore.trees.proof import Proof

empty = bytes(32)
dense = DenseTree.from_values([b"\x01" * 32], empty, 4, hash_node)
updated = dense.update(3, b"\x02" * 32)       # dense is unchanged
proof = Proof(reversed(updated.proof_path(3)))
assert proof.leaf_index() == 3
assert proof.root(b"\x02" * 32, hash_node) == updated.root()

big = EmptyTree(30, empty, hash_node).update(1_000_000, b"\x03" * 32)
```

## What this package does not do

- It does not derive identities (trapdoor and nullifier) from secrets.
- It does not generate or verify Groth16 proofs; `protocol.Proof` and
  `PackedProof` only hold and encode them.
- It has no ready-made lazy Merkle tree wrapper over the node types, and
  no file-backed or memory-mapped storage: `DenseTree` storage lives in
  memory (any mutable sequence you pass it).