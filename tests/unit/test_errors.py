"""
Error Taxonomy Unit Tests
Tests for hashtree/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from hashtree.schemas.errors import (
    EmptyTreeException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    InvalidDigestFunctionException,
    ProofLookupException,
    TreeNotGeneratedException,
)


class TestExceptions:
    """Tests for exception codes and details."""

    def test_empty_tree_defaults(self):
        exc = EmptyTreeException()

        assert exc.code == ErrorCodes.EMPTY_TREE
        assert "no blocks" in exc.message

    def test_not_generated_code(self):
        assert TreeNotGeneratedException().code == ErrorCodes.TREE_NOT_GENERATED

    def test_invalid_digest_details(self):
        exc = InvalidDigestFunctionException("bad", name="md0")

        assert exc.details == {"digest": "md0"}

    def test_lookup_details(self):
        exc = ProofLookupException("missing", leaf_index=0)

        assert exc.details == {"leaf_index": 0}
        assert ProofLookupException("missing").details == {}

    def test_subclasses_share_base(self):
        for exc in (
            EmptyTreeException(),
            TreeNotGeneratedException(),
            InvalidDigestFunctionException("bad"),
            ProofLookupException("missing"),
        ):
            assert isinstance(exc, HashTreeException)

    def test_repr(self):
        assert repr(EmptyTreeException("x")) == "EmptyTreeException(code='EMPTY_TREE', message='x')"


class TestErrorModel:
    """Tests for conversion between exceptions and HashTreeError."""

    def test_exception_to_model(self):
        model = ProofLookupException("missing", leaf_index=7).to_error_model()

        assert model.code == ErrorCodes.LEAF_NOT_FOUND
        assert model.details == {"leaf_index": 7}

    def test_model_to_exception(self):
        model = HashTreeError(code=ErrorCodes.EMPTY_TREE, message="empty")

        exc = model.to_exception()

        assert isinstance(exc, HashTreeException)
        assert exc.code == ErrorCodes.EMPTY_TREE
        assert exc.message == "empty"

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            HashTreeError(code="X", message="y", unexpected=True)

    def test_model_rejects_retryable_flag(self):
        with pytest.raises(ValidationError):
            HashTreeError(code="X", message="y", retryable=True)
