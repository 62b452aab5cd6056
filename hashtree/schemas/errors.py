"""
Schemas & Errors
File: errors.py

Purpose: Error taxonomy for the hash-tree subsystem.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction & query errors
    EMPTY_INPUT = "EMPTY_INPUT"
    EMPTY_TREE = "EMPTY_TREE"
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"

    # Digest function errors
    DIGEST_WIDTH_MISMATCH = "DIGEST_WIDTH_MISMATCH"
    UNSUPPORTED_DIGEST = "UNSUPPORTED_DIGEST"

    # Encoding & configuration errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Callers that surface failures to another layer (logs, an RPC response)
    convert exceptions into this model instead of passing exceptions around.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raisable exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class IndexOutOfBoundsError(HashTreeError):
    """Error model for proof requests outside the tree's leaf range."""

    code: str = Field(default=ErrorCodes.INDEX_OUT_OF_BOUNDS)
    index: int | None = Field(
        default=None,
        description="Leaf index that was requested",
    )
    leaf_count: int | None = Field(
        default=None,
        description="Number of leaves in the tree",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash-tree errors.

    Carries structured error information and can be converted to a
    HashTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(HashTreeException, ValueError):
    """Raised when a tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from zero items",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class EmptyTreeException(HashTreeException, ValueError):
    """Raised when the root hash of an empty tree is requested."""

    def __init__(
        self,
        message: str = "Empty tree has no root hash",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class IndexOutOfBoundsException(HashTreeException, IndexError):
    """Raised when a proof is requested for a leaf index the tree lacks."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_BOUNDS,
            details=full_details,
            retryable=False,
        )
        self.index = index
        self.leaf_count = leaf_count

    def to_error_model(self) -> IndexOutOfBoundsError:
        return IndexOutOfBoundsError(
            message=self.message,
            details=self.details,
            index=self.index,
            leaf_count=self.leaf_count,
        )


class DigestWidthException(HashTreeException):
    """Raised when a digest function returns something other than 32 bytes."""

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected is not None:
            full_details["expected"] = expected
        if actual is not None:
            full_details["actual"] = actual
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_WIDTH_MISMATCH,
            details=full_details,
            retryable=False,
        )


class UnsupportedDigestException(HashTreeException, ValueError):
    """Raised when a digest algorithm name is not registered."""

    def __init__(
        self,
        algorithm: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["algorithm"] = algorithm
        super().__init__(
            message=f"Unsupported digest algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_DIGEST,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Raised when a record cannot be canonically encoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(HashTreeException):
    """Raised when a configuration source is malformed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
