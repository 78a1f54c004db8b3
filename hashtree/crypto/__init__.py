"""
Core cryptographic utilities.

Wraps caller-supplied hash primitives as pure digest functions.
"""
from .hashing import (
    DigestFunction,
    DigestLike,
    resolve_digest,
    sha256,
    hash_concat,
    to_hex,
)

__all__ = [
    "DigestFunction",
    "DigestLike",
    "resolve_digest",
    "sha256",
    "hash_concat",
    "to_hex",
]
