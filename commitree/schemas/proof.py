"""
Schemas & Canonicalization
File: proof.py

Purpose: Portable, hex-encoded form of a single inclusion proof.
Used for display and for handing a proof to a verifier that only
holds the root.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commitree.crypto.hashing import DIGEST_SIZE, from_hex, to_hex
from commitree.merkle.merkle_tree import InclusionProof, verify_inclusion

SCHEMA_VERSION: str = "v1"
PROOF_SCHEME: str = "sorted-pair-merkle-v1"


def _check_digest_hex(value: str) -> str:
    raw = from_hex(value)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(
            f"Expected a {DIGEST_SIZE}-byte digest, got {len(raw)} bytes"
        )
    return value.lower()


class ProofDocument(BaseModel):
    """
    Inclusion proof with every hash as a 0x-prefixed hex string.

    The scheme tag records that sibling pairs are sorted before hashing;
    ordered (left/right) verifiers cannot check these proofs.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: Literal["v1"] = Field(default=SCHEMA_VERSION)
    hash_alg: Literal["sha-256"] = Field(default="sha-256")
    scheme: Literal["sorted-pair-merkle-v1"] = Field(default=PROOF_SCHEME)

    leaf: str = Field(..., description="Leaf hash being proven")
    index: int = Field(..., ge=0, description="Position of the leaf in the leaf level")
    siblings: list[str] = Field(
        default_factory=list,
        description="Proof path from the leaf level up to just below the root",
    )
    root: str = Field(..., description="Root the proof was generated against")

    @field_validator("leaf", "root")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        return _check_digest_hex(v)

    @field_validator("siblings")
    @classmethod
    def validate_siblings(cls, v: list[str]) -> list[str]:
        return [_check_digest_hex(s) for s in v]

    @classmethod
    def from_proof(cls, proof: InclusionProof) -> "ProofDocument":
        return cls(
            leaf=to_hex(proof.leaf),
            index=proof.index,
            siblings=[to_hex(s) for s in proof.siblings],
            root=to_hex(proof.root),
        )

    def to_proof(self) -> InclusionProof:
        return InclusionProof(
            leaf=from_hex(self.leaf),
            index=self.index,
            siblings=[from_hex(s) for s in self.siblings],
            root=from_hex(self.root),
        )

    def path(self) -> list[bytes]:
        """Proof path as raw bytes, ready for MerkleTree.validate_proof()."""
        return [from_hex(s) for s in self.siblings]

    def verify(self) -> bool:
        """Check the proof against the root it carries."""
        return verify_inclusion(from_hex(self.leaf), self.path(), from_hex(self.root))

    @property
    def height(self) -> int:
        return len(self.siblings)
