"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for commitment trees.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"

    # Proofs
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Serialization & Validation
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class CommitreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across a boundary (CLI output, JSON reports)
    without exceptions, enabling structured handling and serialization.
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

    def to_exception(self) -> "CommitreeException":
        """Convert this error model to a raised exception."""
        return CommitreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class ProofError(CommitreeError):
    """Error model for proof generation and verification failures."""

    code: str = Field(default=ErrorCodes.LEAF_NOT_FOUND)
    leaf: str | None = Field(
        default=None,
        description="Hex of the leaf hash the proof was requested for",
    )
    root: str | None = Field(
        default=None,
        description="Hex of the root the proof was checked against",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CommitreeException(Exception):
    """
    Base exception for all commitment tree errors.

    Carries structured error information and can be converted
    to/from CommitreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "COMMITREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CommitreeError:
        """Convert this exception to a CommitreeError model."""
        return CommitreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(CommitreeException):
    """Raised when a tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty item collection",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class LeafNotFoundException(CommitreeException):
    """Raised when a proof is requested for a hash absent from the leaf level."""

    def __init__(
        self,
        message: str,
        leaf_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if leaf_hex:
            full_details["leaf"] = leaf_hex
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(CommitreeException):
    """Exception raised when canonical serialization fails."""

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


class ConfigurationException(CommitreeException):
    """Exception raised for invalid configuration values."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
