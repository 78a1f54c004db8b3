"""
hashtree - binary hash trees over raw byte blocks with inclusion proofs.
"""
from hashtree.merkle import ByIndex, ByValue, MerkleTree
from hashtree.schemas.errors import EmptyTreeException, HashTreeException

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "ByIndex",
    "ByValue",
    "EmptyTreeException",
    "HashTreeException",
]
