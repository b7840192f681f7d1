"""
Merkle Tree and Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Level stack with build, insert, proofs and membership
- InclusionProof: Dataclass bundling a leaf, its proof path and root
- merkle_parent / build_parent_level / build_merkle_levels: Assembly steps
- verify_inclusion: Stateless proof check against an explicit root

Canonical Commitment Rules:
1. Leaf hashing: sha256(item_bytes), or sha256(dumps_canonical(obj)) for objects
2. Parent hashing: sha256(min(a, b) + max(a, b))
3. Padding: Duplicate last node if odd number at any level
4. Empty input: rejected with EmptyInputException
5. Single leaf: root = leaf

Usage:
    from commitree.merkle import MerkleTree

    tree = MerkleTree.build([b"a", b"b", b"c"])
    leaf = MerkleTree.hash(b"b")
    proof = tree.proof_of_inclusion(leaf)
    assert tree.validate_proof(leaf, proof)
"""
from .merkle_tree import (
    InclusionProof,
    MerkleTree,
    Position,
    merkle_parent,
    build_parent_level,
    build_merkle_levels,
    build_merkle_root,
    fold_proof,
    verify_inclusion,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "InclusionProof",
    "Position",
    # Core functions
    "merkle_parent",
    "build_parent_level",
    "build_merkle_levels",
    "build_merkle_root",
    "fold_proof",
    "verify_inclusion",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
