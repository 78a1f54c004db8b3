"""
Detached Merkle Proofs
Inclusion proofs that can be checked without the tree.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- verify_merkle_proof: Recompute the root from leaf + siblings
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Parent hashing matches tree construction: parent = H(left || right).
A self-paired node is its own sibling.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hashtree.crypto.hashing import DigestLike, hash_concat, resolve_digest

if TYPE_CHECKING:
    from hashtree.merkle.tree import MerkleTree


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a generated tree.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based position of the leaf in the padded leaf list
        siblings: Sibling digests from bottom to top of tree
        root: The root digest this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def verify_merkle_proof(proof: MerkleProof, digest: DigestLike) -> bool:
    """
    Verify a Merkle proof.

    Recomputes the root from the leaf and siblings, checking
    against the claimed root in the proof.

    Algorithm:
    1. Start with the leaf digest
    2. For each sibling (bottom-up):
       - If current index is even: digest = H(current || sibling)
       - If current index is odd: digest = H(sibling || current)
       - Move up: index = index // 2
    3. Check computed root equals claimed root

    Args:
        proof: MerkleProof to verify
        digest: Digest function the tree was built with

    Returns:
        True if proof is valid, False otherwise
    """
    fn = resolve_digest(digest)
    current_hash = proof.leaf
    current_index = proof.index

    for sibling in proof.siblings:
        if current_index % 2 == 0:
            current_hash = hash_concat(fn, current_hash, sibling)
        else:
            current_hash = hash_concat(fn, sibling, current_hash)
        current_index = current_index // 2

    # Leftover index bits mean the proof is too short for its position
    if current_index != 0:
        return False

    return current_hash == proof.root


class MerkleProver:
    """
    Convenience class for extracting proofs from a generated tree.

    Example:
        >>> tree = MerkleTree("sha256", [b"a", b"b", b"c"])
        >>> tree.generate()
        >>> proof = MerkleProver.prove(tree, 1)
        >>> MerkleVerifier.verify(proof, "sha256")
        True
    """

    @staticmethod
    def prove(tree: "MerkleTree", selector: Any) -> MerkleProof:
        """
        Extract the inclusion proof for a leaf index or raw block.

        Raises:
            TreeNotGeneratedException: If the tree has no levels
            ProofLookupException: If the selector matches no leaf
        """
        return tree.inclusion_proof(selector)

    @staticmethod
    def compute_root(tree: "MerkleTree") -> bytes | None:
        """Root digest of the tree, or None before generation."""
        return tree.root_digest()


class MerkleVerifier:
    """Convenience class for verifying detached Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof, digest: DigestLike) -> bool:
        return verify_merkle_proof(proof, digest)

    @staticmethod
    def verify_block_in_root(
        block: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
        digest: DigestLike,
    ) -> bool:
        """
        Verify a raw block is included in a root using raw components.

        The block is hashed with the digest function to produce the leaf.

        Args:
            block: The raw block to verify
            index: The claimed leaf position
            siblings: List of sibling digests (bottom-up)
            root: The claimed root digest
            digest: Digest function the tree was built with

        Returns:
            True if the proof is valid, False otherwise
        """
        fn = resolve_digest(digest)
        proof = MerkleProof(
            leaf=fn(block),
            index=index,
            siblings=siblings,
            root=root,
        )
        return verify_merkle_proof(proof, fn)


__all__ = [
    "MerkleProof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
