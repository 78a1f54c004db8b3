"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by the crypto and merkle modules.
"""

from .errors import (
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    EmptyTreeException,
    TreeNotGeneratedException,
    InvalidDigestFunctionException,
    ProofLookupException,
)

__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "EmptyTreeException",
    "TreeNotGeneratedException",
    "InvalidDigestFunctionException",
    "ProofLookupException",
]
