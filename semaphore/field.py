"""Elements of the BN254 scalar field and hashing into it."""

from __future__ import annotations

from typing import TypeAlias

from semaphore.util import keccak256

Field: TypeAlias = int

MODULUS: Field = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)


def hash_to_field(data: bytes) -> Field:
    """Hash arbitrary data to a field element.

    The Keccak-256 digest is shifted right by one byte so that it always
    fits in the field.
    """
    return int.from_bytes(keccak256(data), "big") >> 8