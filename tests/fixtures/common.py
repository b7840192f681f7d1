"""
Common test fixtures shared by all test modules.

Provides item lists and factory functions for trees and proofs:
- Verse item lists used across the tree, proof and CLI tests
- make_items / make_tree / make_proof factories
"""

from typing import Optional

from commitree.merkle import InclusionProof, MerkleTree


# =============================================================================
# Item Lists
# =============================================================================

RING_VERSE: list[str] = [
    "One Ring to rule them all,",
    "One Ring to find them,",
    "One Ring to bring them all",
    "and in the darkness bind them.",
    "In the Land of Mordor where the Shadows lie.",
]

GANDALF_LINES: list[str] = [
    "and so do all who live to see such times. ",
    "But that is not for them to decide. ",
    "All we have to decide ",
    "is what to do with the time ",
    "that is given us.",
]

# GANDALF_LINES with the third item replaced
CORRUPTED_GANDALF_LINES: list[str] = [
    "and so do all who live to see such times. ",
    "But that is not for them to decide. ",
    "LONG LIVE SAURON ",
    "is what to do with the time ",
    "that is given us.",
]


# =============================================================================
# Factories
# =============================================================================

def make_items(count: int, prefix: str = "leaf") -> list[bytes]:
    """Distinct byte items: b"leaf0", b"leaf1", ..."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_tree(items: Optional[list] = None) -> MerkleTree:
    """Build a tree, from RING_VERSE by default."""
    return MerkleTree.build(list(items) if items is not None else RING_VERSE)


def make_proof(items: Optional[list] = None, index: int = 2) -> InclusionProof:
    """Inclusion proof for the item at `index`."""
    items = list(items) if items is not None else GANDALF_LINES
    tree = MerkleTree.build(items)
    return tree.prove(tree.leaves[index])
