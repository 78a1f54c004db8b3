"""
Hashing Utilities
Digest-function wrapper used by the Merkle tree, plus small byte helpers.

This module provides:
- DigestFunction: pure bytes -> bytes view over a caller-supplied hash
- resolve_digest: normalise an algorithm name, hash object or callable
- sha256 / hash_concat: default digest and parent hashing
- Hex encoding with 0x prefix

Hash Object Lifecycle:
    Some hash primitives are stateful (write, read, reset). DigestFunction
    hides that lifecycle: every call completes one full write/read/reset
    cycle before returning, so the tree only ever sees a function.
    A DigestFunction is NOT safe for concurrent use.
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable, Union

from hashtree.schemas.errors import InvalidDigestFunctionException


# Probe input used when validating a digest function
_PROBE: bytes = b"hashtree-digest-probe"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


class DigestFunction:
    """
    Deterministic digest function over byte sequences.

    Wraps one of:
    - a plain callable ``bytes -> bytes``
    - a hash object with ``update()``, ``digest()`` and ``reset()``
      (written to, read, then reset after every use)
    - a hashlib-style object with ``update()``, ``digest()`` and ``copy()``
      (a pristine prototype is copied for every call)

    Example:
        >>> digest = DigestFunction(hashlib.sha256(), name="sha256")
        >>> digest(b"abc") == sha256(b"abc")
        True
    """

    def __init__(self, primitive: Any, name: str | None = None) -> None:
        self._primitive = primitive
        self.name = name or getattr(primitive, "name", None) or type(primitive).__name__

        if hasattr(primitive, "update") and hasattr(primitive, "digest"):
            if callable(getattr(primitive, "reset", None)):
                self._compute = self._write_read_reset
            elif callable(getattr(primitive, "copy", None)):
                self._prototype = primitive.copy()
                self._compute = self._copy_write_read
            else:
                raise InvalidDigestFunctionException(
                    "Hash object must provide reset() or copy()",
                    name=self.name,
                )
        elif callable(primitive):
            self._compute = primitive
        else:
            raise InvalidDigestFunctionException(
                f"Unsupported digest primitive of type {type(primitive).__name__}",
                name=self.name,
            )

    def _write_read_reset(self, data: bytes) -> bytes:
        hasher = self._primitive
        hasher.update(data)
        try:
            return bytes(hasher.digest())
        finally:
            hasher.reset()

    def _copy_write_read(self, data: bytes) -> bytes:
        hasher = self._prototype.copy()
        hasher.update(data)
        return bytes(hasher.digest())

    def __call__(self, data: bytes) -> bytes:
        return self._compute(data)

    def __repr__(self) -> str:
        return f"DigestFunction(name={self.name!r})"


DigestLike = Union[str, DigestFunction, Callable[[bytes], bytes], Any]


def resolve_digest(digest: DigestLike) -> DigestFunction:
    """
    Normalise a caller-supplied digest into a validated DigestFunction.

    Args:
        digest: hashlib algorithm name, hash object, callable,
                or an existing DigestFunction

    Returns:
        DigestFunction that passed a determinism probe

    Raises:
        InvalidDigestFunctionException: If the algorithm is unknown, the
            primitive is unsupported, or the probe yields empty,
            non-bytes or non-deterministic output
    """
    if isinstance(digest, DigestFunction):
        fn = digest
    elif isinstance(digest, str):
        try:
            prototype = hashlib.new(digest)
        except (ValueError, TypeError) as e:
            raise InvalidDigestFunctionException(
                f"Unknown hash algorithm: {digest}",
                name=digest,
            ) from e
        fn = DigestFunction(prototype, name=digest)
    else:
        fn = DigestFunction(digest)

    first = fn(_PROBE)
    if not isinstance(first, (bytes, bytearray)):
        raise InvalidDigestFunctionException(
            f"Digest function returned {type(first).__name__}, expected bytes",
            name=fn.name,
        )
    if len(first) == 0:
        raise InvalidDigestFunctionException(
            "Digest function returned an empty digest",
            name=fn.name,
        )
    if fn(_PROBE) != first:
        raise InvalidDigestFunctionException(
            "Digest function is not deterministic",
            name=fn.name,
        )
    return fn


def hash_concat(digest: Callable[[bytes], bytes], left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = H(left || right), no delimiter.

    Args:
        digest: Digest function
        left: Left child digest
        right: Right child digest

    Returns:
        Digest of the concatenation
    """
    return digest(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


__all__ = [
    "DigestFunction",
    "DigestLike",
    "resolve_digest",
    "sha256",
    "hash_concat",
    "to_hex",
]
