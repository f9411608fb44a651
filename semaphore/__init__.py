"""Semaphore field hashing, hash and proof encodings, and Merkle trees."""

__version__ = "0.1.0"