"""
Proof Selectors

A proof is requested either by leaf position or by raw block value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ByIndex:
    """Select the leaf at a position in the (padded) leaf list."""
    index: int


@dataclass(frozen=True)
class ByValue:
    """Select the leaf holding a raw block; the last equal block wins."""
    block: bytes


ProofSelector = Union[ByIndex, ByValue]


def as_selector(value: Any) -> ProofSelector:
    """
    Coerce a raw int / bytes into a selector.

    Raises:
        TypeError: For anything that is not a selector, int or bytes-like
    """
    if isinstance(value, (ByIndex, ByValue)):
        return value
    # bool is an int subclass but never a meaningful position
    if isinstance(value, bool):
        raise TypeError("Proof selector must be an int index or bytes, got bool")
    if isinstance(value, int):
        return ByIndex(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ByValue(bytes(value))
    raise TypeError(
        f"Proof selector must be an int index or bytes, got {type(value).__name__}"
    )


__all__ = ["ByIndex", "ByValue", "ProofSelector", "as_selector"]
