"""
commitree - sorted-pair Merkle commitments.

Commit to an ordered list of items with a single 32-byte root and prove
that an item's hash is included without revealing the other items.

Usage:
    from commitree import MerkleTree

    tree = MerkleTree.build(["One Ring to rule them all,", "One Ring to find them,"])
    leaf = MerkleTree.hash("One Ring to find them,")
    proof = tree.proof_of_inclusion(leaf)
    assert tree.validate_proof(leaf, proof)
"""

from .crypto import from_hex, hash_canonical, sha256, to_hex
from .merkle import (
    InclusionProof,
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    merkle_parent,
    verify_inclusion,
)
from .schemas import (
    CommitreeException,
    EmptyInputException,
    LeafNotFoundException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "InclusionProof",
    "MerkleProver",
    "MerkleVerifier",
    "merkle_parent",
    "verify_inclusion",
    "sha256",
    "hash_canonical",
    "to_hex",
    "from_hex",
    "CommitreeException",
    "EmptyInputException",
    "LeafNotFoundException",
]
