"""
Verification Diagnostics

Optional reasons behind a failed proof. verify_proof() keeps returning a
plain bool; explain_proof() returns a ProofReport with the reason.
"""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProofFailure(str, Enum):
    """Why an inclusion proof did not verify."""
    NOT_GENERATED = "NOT_GENERATED"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    BLOCK_NOT_FOUND = "BLOCK_NOT_FOUND"
    MISMATCH_AT_LEVEL = "MISMATCH_AT_LEVEL"


class ProofReport(BaseModel):
    """Outcome of a path verification."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool = Field(..., description="Whether the leaf-to-root path verified")
    leaf_index: Optional[int] = Field(
        default=None,
        description="Leaf position the selector resolved to",
    )
    reason: Optional[ProofFailure] = Field(
        default=None,
        description="Failure reason, None when valid",
    )
    level: Optional[int] = Field(
        default=None,
        description="Depth of the parent whose digest did not match",
    )

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls, leaf_index: int) -> "ProofReport":
        return cls(valid=True, leaf_index=leaf_index)

    @classmethod
    def failed(
        cls,
        reason: ProofFailure,
        leaf_index: Optional[int] = None,
        level: Optional[int] = None,
    ) -> "ProofReport":
        return cls(valid=False, reason=reason, leaf_index=leaf_index, level=level)


class NodePosition(NamedTuple):
    """Position of a node as (depth, index within its level)."""
    depth: int
    index: int


__all__ = ["ProofFailure", "ProofReport", "NodePosition"]
