"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for hash tree construction and proofs.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Only construction failures are raised. Verification failures are reported
as booleans (see hashtree.merkle.diagnostics for the optional reasons).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Construction Errors
    EMPTY_TREE = "EMPTY_TREE"
    TREE_NOT_GENERATED = "TREE_NOT_GENERATED"
    INVALID_DIGEST_FUNCTION = "INVALID_DIGEST_FUNCTION"

    # Proof Lookup Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Lets callers pass errors around without exceptions, e.g. when
    collecting failures from many trees.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_TREE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    This exception carries structured error information and can be
    converted to/from HashTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyTreeException(HashTreeException):
    """Exception raised when a tree is generated with no blocks."""

    def __init__(
        self,
        message: str = "Cannot generate tree, there are no blocks",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
        )


class TreeNotGeneratedException(HashTreeException):
    """Exception raised when an operation needs levels that were never built."""

    def __init__(
        self,
        message: str = "Tree has not been generated",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_NOT_GENERATED,
            details=details,
        )


class InvalidDigestFunctionException(HashTreeException):
    """Exception raised when a digest function is rejected."""

    def __init__(
        self,
        message: str,
        name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if name:
            full_details["digest"] = name
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST_FUNCTION,
            details=full_details,
        )


class ProofLookupException(HashTreeException):
    """Exception raised when a proof selector matches no leaf."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
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
