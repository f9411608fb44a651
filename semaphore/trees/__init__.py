"""Merkle trees: proof paths, a fully stored tree and lazy tree nodes."""

__version__ = "0.1.0"