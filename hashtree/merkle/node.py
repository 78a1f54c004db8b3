"""
Merkle Tree Nodes

Nodes live in a flat arena owned by the tree. Internal nodes refer to their
children by arena index; a self-paired node stores the same index twice, and
a duplicated leaf is the same arena entry listed twice in the leaf list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hashtree.crypto.hashing import to_hex


@dataclass(eq=False)
class Node:
    """
    A leaf or internal node.

    Attributes:
        digest: H(raw) for a leaf, H(left.digest || right.digest) otherwise
        raw: The raw block (leaves only)
        left: Arena index of the left child (internal nodes only)
        right: Arena index of the right child (internal nodes only)
    """
    digest: bytes
    raw: Optional[bytes] = None
    left: Optional[int] = None
    right: Optional[int] = None

    @classmethod
    def leaf(cls, raw: bytes, digest: bytes) -> "Node":
        return cls(digest=digest, raw=raw)

    @classmethod
    def internal(cls, left: int, right: int, digest: bytes) -> "Node":
        return cls(digest=digest, left=left, right=right)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node(leaf, digest={to_hex(self.digest)})"
        return f"Node(left={self.left}, right={self.right}, digest={to_hex(self.digest)})"


# Ordered arena indices of the nodes at one depth
Level = list[int]


__all__ = ["Node", "Level"]
