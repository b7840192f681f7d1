"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around the tree functions for one-shot use.

This module provides:
- MerkleProver: Generate proofs from items, leaves or objects without
  keeping a MerkleTree around
- MerkleVerifier: Verify proofs against a root

These are convenience wrappers around merkle_tree.py.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from commitree.crypto.hashing import ByteItem, hash_canonical, hash_item
from commitree.merkle.merkle_tree import (
    InclusionProof,
    MerkleTree,
    build_merkle_root,
    verify_inclusion,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> items = [b"a", b"b", b"c"]
        >>> proof = MerkleProver.prove_item(items, b"b")
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], leaf: bytes) -> InclusionProof:
        """
        Generate a proof for `leaf` among pre-hashed leaves.

        Raises:
            EmptyInputException: If leaves is empty
            LeafNotFoundException: If leaf is not among the leaves
        """
        return MerkleTree.from_leaves(leaves).prove(leaf)

    @staticmethod
    def prove_item(items: Sequence[ByteItem], item: ByteItem) -> InclusionProof:
        """Generate a proof for a raw item; the item is hashed first."""
        return MerkleTree.build(items).prove(hash_item(item))

    @staticmethod
    def prove_object(objects: Sequence[Any], obj: Any) -> InclusionProof:
        """Generate a proof for an object, canonically hashed."""
        return MerkleTree.from_objects(objects).prove(hash_canonical(obj))

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_objects(objects: Sequence[Any]) -> bytes:
        return build_merkle_root([hash_canonical(obj) for obj in objects])


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Provides static methods for proof verification.
    """

    @staticmethod
    def verify(proof: InclusionProof) -> bool:
        """Verify a proof against the root it carries."""
        return proof.verify()

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Iterable[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify a leaf is included in a Merkle root using raw components.

        Args:
            leaf: The leaf hash to verify
            siblings: Proof path (bottom-up)
            root: The claimed Merkle root

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_inclusion(leaf, siblings, root)

    @staticmethod
    def verify_item_in_root(
        item: ByteItem,
        siblings: Iterable[bytes],
        root: bytes,
    ) -> bool:
        """Verify a raw item (hashed first) is included in a Merkle root."""
        return verify_inclusion(hash_item(item), siblings, root)

    @staticmethod
    def verify_object_in_root(
        obj: Any,
        siblings: Iterable[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify an object is included in a Merkle root.

        The object is canonically hashed to produce the leaf hash.
        """
        return verify_inclusion(hash_canonical(obj), siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
