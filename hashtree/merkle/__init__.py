"""
Merkle Tree and Inclusion Proofs

This package provides:
- MerkleTree: block ingestion, generation, root, structural and path checks
- ByIndex / ByValue: proof selectors
- ProofReport / ProofFailure: optional reasons behind a failed proof
- MerkleProof / verify_merkle_proof: detached inclusion proofs
- tree_height: level slot count for a block count

Usage:
    from hashtree.merkle import MerkleTree, ByIndex, ByValue

    tree = MerkleTree("sha256", [b"a", b"b", b"c"])
    tree.generate()

    assert tree.verify_tree()
    assert tree.verify_proof(ByIndex(0))
    assert not tree.verify_proof(ByValue(b"z"))
"""
from .node import Node, Level
from .height import (
    is_power_of_two,
    bit_length_log2,
    next_power_of_two,
    tree_height,
)
from .selectors import ByIndex, ByValue, ProofSelector, as_selector
from .diagnostics import NodePosition, ProofFailure, ProofReport
from .merkle_proofs import (
    MerkleProof,
    verify_merkle_proof,
    MerkleProver,
    MerkleVerifier,
)
from .tree import MerkleTree


__all__ = [
    # Core types
    "MerkleTree",
    "Node",
    "Level",
    # Selectors
    "ByIndex",
    "ByValue",
    "ProofSelector",
    "as_selector",
    # Diagnostics
    "NodePosition",
    "ProofFailure",
    "ProofReport",
    # Detached proofs
    "MerkleProof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
    # Height
    "is_power_of_two",
    "bit_length_log2",
    "next_power_of_two",
    "tree_height",
]
