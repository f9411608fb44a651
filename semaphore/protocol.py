"""Groth16 proof container and helpers turning Merkle proofs into circuit inputs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from semaphore.field import Field
from semaphore.trees.proof import Proof as MerkleProof
from semaphore.trees.proof import Right

_UINT_LIMIT = 1 << 256
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

G1 = tuple[int, int]
G2 = tuple[tuple[int, int], tuple[int, int]]


def _check_uint(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an unsigned 256-bit integer, got {value!r}")
    if not 0 <= value < _UINT_LIMIT:
        raise ValueError(f"{value} does not fit in 256 unsigned bits")
    return value


def _uint_to_json(value: int) -> str:
    return hex(value)


def _uint_from_json(value: Any) -> int:
    if not isinstance(value, str):
        raise ValueError(f"expected a 0x-prefixed hex string, got {value!r}")
    if not value.startswith("0x"):
        raise ValueError(f"missing 0x prefix in {value!r}")
    digits = value[2:]
    if not digits:
        raise ValueError("hex string has no digits")
    if len(digits) > 64:
        raise ValueError(f"hex string {value!r} is longer than 256 bits")
    if not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"invalid hex string {value!r}")
    return int(digits, 16)


def _pair(value: Any, convert) -> tuple[Any, Any]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"expected a pair, got {value!r}")
    return convert(value[0]), convert(value[1])


@dataclass(frozen=True)
class Proof:
    """A Groth16 proof as two G1 points and one G2 point of 256-bit integers."""

    a: G1
    b: G2
    c: G1

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", _pair(self.a, _check_uint))
        object.__setattr__(
            self, "b", _pair(self.b, lambda point: _pair(point, _check_uint))
        )
        object.__setattr__(self, "c", _pair(self.c, _check_uint))

    def to_json_value(self) -> list:
        """Nested lists of minimal 0x-prefixed hex strings."""
        return [
            [_uint_to_json(v) for v in self.a],
            [[_uint_to_json(v) for v in point] for point in self.b],
            [_uint_to_json(v) for v in self.c],
        ]

    @classmethod
    def from_json_value(cls, value: Any) -> Proof:
        """Build a proof from nested lists of 0x-prefixed hex strings."""
        if not isinstance(value, (list, tuple)) or len(value) != 3:
            raise ValueError("a proof is a list of three elements")
        a, b, c = value
        return cls(
            _pair(a, _uint_from_json),
            _pair(b, lambda point: _pair(point, _uint_from_json)),
            _pair(c, _uint_from_json),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_json_value())

    @classmethod
    def from_json(cls, text: str) -> Proof:
        return cls.from_json_value(json.loads(text))


def path_index(merkle_proof: MerkleProof) -> list[Field]:
    """Path indices of a Merkle proof: 0 for a left turn, 1 for a right turn."""
    return [1 if isinstance(branch, Right) else 0 for branch in merkle_proof]


def merkle_proof_siblings(merkle_proof: MerkleProof) -> list[Field]:
    """Sibling hashes of a Merkle proof, bottom to top."""
    return [branch.into_inner() for branch in merkle_proof]