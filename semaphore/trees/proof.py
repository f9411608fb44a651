"""Merkle proof paths and their branches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Iterator


@dataclass(frozen=True)
class Branch:
    """Element of a Merkle proof holding the sibling hash."""

    value: Any
    _TAG: ClassVar[str] = "Branch"

    def into_inner(self) -> Any:
        """Return the sibling hash."""
        return self.value

    def __repr__(self) -> str:
        return f"{self._TAG}({self.value!r})"


@dataclass(frozen=True, repr=False)
class Left(Branch):
    """Left branch taken; the value is the right sibling hash."""

    _TAG: ClassVar[str] = "Left"


@dataclass(frozen=True, repr=False)
class Right(Branch):
    """Right branch taken; the value is the left sibling hash."""

    _TAG: ClassVar[str] = "Right"


@dataclass(frozen=True)
class Proof:
    """Merkle proof path, bottom to top."""

    branches: tuple[Branch, ...] = ()

    def __init__(self, branches: Iterable[Branch] = ()) -> None:
        object.__setattr__(self, "branches", tuple(branches))

    def __iter__(self) -> Iterator[Branch]:
        return iter(self.branches)

    def __len__(self) -> int:
        return len(self.branches)

    def leaf_index(self) -> int:
        """Compute the leaf index this proof is for."""
        index = 0
        for branch in reversed(self.branches):
            index = (index << 1) | (1 if isinstance(branch, Right) else 0)
        return index

    def root(self, value: Any, hash_node: Callable[[Any, Any], Any]) -> Any:
        """Compute the Merkle root given a leaf hash."""
        current = value
        for branch in self.branches:
            if isinstance(branch, Right):
                current = hash_node(branch.value, current)
            else:
                current = hash_node(current, branch.value)
        return current

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize as a list of externally tagged branches."""
        return [{branch._TAG: branch.value} for branch in self.branches]