"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export canonical serialization and the error taxonomy.

ProofDocument lives in commitree.schemas.proof and is imported from there
directly, since it depends on the hashing and Merkle modules.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    CommitreeError,
    CommitreeException,
    ConfigurationException,
    EmptyInputException,
    ErrorCodes,
    LeafNotFoundException,
    ProofError,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "CommitreeError",
    "CommitreeException",
    "ConfigurationException",
    "EmptyInputException",
    "ErrorCodes",
    "LeafNotFoundException",
    "ProofError",
]
