"""
Tree fixtures: reference digests, sample blocks and generated trees.
"""

import hashlib

from hashtree.merkle import MerkleTree


def H(data: bytes) -> bytes:
    """Reference SHA-256 used to hand-compute expected digests."""
    return hashlib.sha256(data).digest()


def make_blocks(count: int) -> list[bytes]:
    return [f"block{i}".encode() for i in range(count)]


def make_tree(blocks: list[bytes], digest="sha256") -> MerkleTree:
    tree = MerkleTree(digest, blocks)
    tree.generate()
    return tree


class ResettableSha256:
    """
    Stateful hash object with write/read/reset semantics.

    Counts resets so tests can check the wrapper finishes every cycle.
    """

    name = "resettable-sha256"

    def __init__(self) -> None:
        self._state = hashlib.sha256()
        self.resets = 0

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def digest(self) -> bytes:
        return self._state.digest()

    def reset(self) -> None:
        self._state = hashlib.sha256()
        self.resets += 1
