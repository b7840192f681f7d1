"""
Merkle Tree Implementation
Sorted-pair Merkle commitment: construction, insert, proof generation and validation.

This module provides:
- Parent combination over canonically ordered child pairs
- Level-by-level tree assembly with duplicate-last padding
- Full-rebuild insert
- Proof of inclusion (sibling path) and proof validation

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(item_bytes)
   - str items are encoded with the tree's text encoding (UTF-8 by default)
2. Parent hashing: parent = sha256(min(a, b) + max(a, b))
   - Children are ordered byte-wise before concatenation, so
     merkle_parent(a, b) == merkle_parent(b, a)
3. Padding rule: duplicate last node if a level has odd length
4. Empty input is rejected (EmptyInputException); there is no empty-tree root
5. Single leaf: root = leaf, proof path is empty

Compatibility Notes:
- Pairing is unordered, so proofs carry no left/right flags and are NOT
  interchangeable with ordered (left || right) Merkle verifiers.
- insert() rebuilds every level from the extended leaf list; the root after
  an insert is identical to building from scratch with the extra item.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from commitree.crypto.hashing import (
    DEFAULT_TEXT_ENCODING,
    ByteItem,
    hash_canonical,
    hash_item,
    sha256,
    to_hex,
)
from commitree.schemas.errors import EmptyInputException, LeafNotFoundException


logger = logging.getLogger(__name__)

# (level, index, hash) as returned by the position lookups
Position = tuple[int, int, bytes]


@dataclass(frozen=True)
class InclusionProof:
    """
    A proof that a leaf hash is committed under a root.

    Attributes:
        leaf: The leaf hash being proven
        index: 0-based position of the leaf in the leaf level
        siblings: Proof path, one hash per level from the leaves up to
                  just below the root
        root: The root this proof was generated against

    The index is informational: pairing is order-independent, so the
    fold never consults it.
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def verify(self) -> bool:
        """Check this proof against its own root."""
        return verify_inclusion(self.leaf, self.siblings, self.root)


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The children are sorted byte-wise first, so argument order does not
    matter: sha256(min(left, right) + max(left, right)).

    Args:
        left: First child hash
        right: Second child hash

    Returns:
        Parent hash (32 bytes)
    """
    first, second = sorted((bytes(left), bytes(right)))
    return sha256(first + second)


def _require_item_sequence(items: Any) -> None:
    # a lone str or bytes is itself a Sequence and would be split per element
    if isinstance(items, (str, bytes, bytearray, memoryview)):
        raise TypeError(
            f"items must be a sequence of items, not a single {type(items).__name__} item"
        )


def build_parent_level(level: Sequence[bytes]) -> Optional[list[bytes]]:
    """
    Build the level above `level`.

    Returns None when `level` holds a single hash (it is the root).
    An odd-length level is padded by duplicating its last hash, so the
    last element pairs with itself.

    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]
    """
    if len(level) == 1:
        return None

    current = list(level)
    if len(current) % 2 == 1:
        current.append(current[-1])

    return [
        merkle_parent(current[i], current[i + 1])
        for i in range(0, len(current), 2)
    ]


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Assemble the full level stack from leaf hashes.

    levels[0] is a copy of `leaves` in input order; the last level holds
    exactly one hash, the root. For every level of length L > 1 the next
    level has length ceil(L / 2).

    Raises:
        EmptyInputException: If `leaves` is empty
    """
    if len(leaves) == 0:
        raise EmptyInputException()

    levels: list[list[bytes]] = [list(leaves)]
    parent = build_parent_level(levels[-1])
    while parent is not None:
        levels.append(parent)
        parent = build_parent_level(parent)

    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Compute only the root for a sequence of leaf hashes."""
    return build_merkle_levels(leaves)[-1][0]


def fold_proof(leaf: bytes, proof: Iterable[bytes]) -> bytes:
    """
    Fold a leaf hash with a proof path, bottom-up.

    acc = leaf; for each step: acc = merkle_parent(acc, step)
    """
    acc = bytes(leaf)
    for step in proof:
        acc = merkle_parent(acc, step)
    return acc


def verify_inclusion(leaf: bytes, proof: Iterable[bytes], root: bytes) -> bool:
    """
    Verify that `leaf` is committed under `root` using only the proof path.

    Returns:
        True if folding the proof reproduces `root` byte for byte,
        False otherwise. Never raises for mismatched hashes.
    """
    return fold_proof(leaf, proof) == bytes(root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels in a tree with `num_leaves` leaves.

    A single leaf has depth 1, two leaves depth 2, five leaves depth 4
    ([5, 3, 2, 1]). Returns 0 for an empty leaf count.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


class MerkleTree:
    """
    Balanced binary commitment tree over an explicit, in-memory item list.

    The tree owns its level stack: levels[0] holds the leaf hashes in
    input order and the last level holds the root. It is immutable
    except through insert(), which replaces the whole stack.

    Not synchronized: concurrent reads are safe only while no insert()
    is running.

    Example:
        >>> tree = MerkleTree.build(["In a hole in the ground ", "there lived a hobbit."])
        >>> tree.root().hex()
        'e7dbb63c6671bdf7581e418da8feee175e86adc84adc8e123a30407dd8e730f3'
    """

    def __init__(
        self,
        leaves: Sequence[bytes],
        encoding: str = DEFAULT_TEXT_ENCODING,
    ) -> None:
        self._encoding = encoding
        self._levels = build_merkle_levels(leaves)
        logger.debug(
            f"Built Merkle tree: {len(self._levels[0])} leaves, {len(self._levels)} levels"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        items: Sequence[ByteItem],
        encoding: str = DEFAULT_TEXT_ENCODING,
    ) -> "MerkleTree":
        """
        Build a tree from byte-representable items.

        Each item is hashed in order to form the leaf level.

        Raises:
            EmptyInputException: If `items` is empty
            TypeError: If `items` is a single str/bytes value, or an item
                is not byte-representable
        """
        _require_item_sequence(items)
        if len(items) == 0:
            raise EmptyInputException()
        return cls([hash_item(item, encoding) for item in items], encoding=encoding)

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[bytes],
        encoding: str = DEFAULT_TEXT_ENCODING,
    ) -> "MerkleTree":
        """Build a tree from already-hashed leaves."""
        _require_item_sequence(leaves)
        return cls([bytes(leaf) for leaf in leaves], encoding=encoding)

    @classmethod
    def from_objects(cls, objects: Sequence[Any]) -> "MerkleTree":
        """
        Build a tree from structured objects.

        Each object is hashed through canonical JSON (hash_canonical).
        """
        return cls([hash_canonical(obj) for obj in objects])

    @staticmethod
    def hash(data: ByteItem) -> bytes:
        """Hash bytes (or UTF-8 text) with the tree's digest function."""
        return hash_item(data)

    def insert(self, item: ByteItem) -> None:
        """
        Append an item as the last leaf and rebuild every level.

        Afterwards root() equals MerkleTree.build(old_items + [item]).root().
        """
        self.insert_leaf(hash_item(item, self._encoding))

    def insert_leaf(self, leaf: bytes) -> None:
        """Append an already-hashed leaf and rebuild every level."""
        leaves = self._levels[0] + [bytes(leaf)]
        self._levels = build_merkle_levels(leaves)
        logger.debug(
            f"Inserted leaf {to_hex(leaf)}: {len(leaves)} leaves, {len(self._levels)} levels"
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def root(self) -> bytes:
        """Return the single hash of the top level."""
        return self._levels[-1][0]

    @property
    def levels(self) -> list[list[bytes]]:
        """Copy of the level stack, leaves first."""
        return [list(level) for level in self._levels]

    @property
    def leaves(self) -> list[bytes]:
        return list(self._levels[0])

    @property
    def height(self) -> int:
        """Index of the root level; equals the length of every proof path."""
        return len(self._levels) - 1

    @property
    def encoding(self) -> str:
        return self._encoding

    def level_sizes(self) -> list[int]:
        return [len(level) for level in self._levels]

    def __len__(self) -> int:
        return len(self._levels[0])

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self)}, height={self.height}, "
            f"root={to_hex(self.root())})"
        )

    # ------------------------------------------------------------------
    # Position lookups
    # ------------------------------------------------------------------

    def _node(self, level: int, index: int) -> Optional[bytes]:
        if level < 0 or level >= len(self._levels):
            return None
        nodes = self._levels[level]
        if index < 0 or index >= len(nodes):
            return None
        return nodes[index]

    def get_parent(self, level: int, index: int) -> Optional[Position]:
        """
        Return (level + 1, index // 2, hash) of the parent, or None at the root.
        """
        parent_level = level + 1
        parent_index = index // 2
        parent = self._node(parent_level, parent_index)
        if parent is None:
            return None
        return parent_level, parent_index, parent

    def get_sibling(self, level: int, index: int) -> Optional[Position]:
        """
        Return (level, sibling_index, hash) of the sibling, or None.

        None means `index` is the last slot of an odd-length level, whose
        sibling is its own padded duplicate.
        """
        sibling_index = index - 1 if index % 2 == 1 else index + 1
        sibling = self._node(level, sibling_index)
        if sibling is None:
            return None
        return level, sibling_index, sibling

    # ------------------------------------------------------------------
    # Membership and proofs
    # ------------------------------------------------------------------

    def contains_hash(self, leaf: bytes) -> bool:
        """Linear scan of the leaf level."""
        return leaf in self._levels[0]

    def index_of(self, leaf: bytes) -> int:
        """
        Position of the first leaf equal to `leaf`.

        Raises:
            LeafNotFoundException: If no leaf matches
        """
        try:
            return self._levels[0].index(leaf)
        except ValueError:
            logger.debug(f"Leaf {to_hex(bytes(leaf))} not in tree of {len(self)} leaves")
            raise LeafNotFoundException(
                message="Leaf hash not found in tree",
                leaf_hex=to_hex(bytes(leaf)),
            ) from None

    def proof_of_inclusion(self, leaf: bytes) -> list[bytes]:
        """
        Collect the sibling path from `leaf` up to just below the root.

        At each level the sibling hash is recorded; when the node is the
        padded last slot of an odd-length level its own hash is recorded
        instead. The path length equals `height`.

        Raises:
            LeafNotFoundException: If `leaf` is not in the leaf level
        """
        index = self.index_of(leaf)

        current: Position = (0, index, self._levels[0][index])
        proof: list[bytes] = []

        parent = self.get_parent(current[0], current[1])
        while parent is not None:
            sibling = self.get_sibling(current[0], current[1])
            proof.append(sibling[2] if sibling is not None else current[2])
            current = parent
            parent = self.get_parent(current[0], current[1])

        return proof

    def prove(self, leaf: bytes) -> InclusionProof:
        """Proof of inclusion bundled with the leaf index and current root."""
        index = self.index_of(leaf)
        return InclusionProof(
            leaf=self._levels[0][index],
            index=index,
            siblings=self.proof_of_inclusion(leaf),
            root=self.root(),
        )

    def validate_proof(self, leaf: bytes, proof: Iterable[bytes]) -> bool:
        """Fold `leaf` with `proof` and compare against this tree's root."""
        return verify_inclusion(leaf, proof, self.root())


__all__ = [
    "Position",
    "InclusionProof",
    "MerkleTree",
    "merkle_parent",
    "build_parent_level",
    "build_merkle_levels",
    "build_merkle_root",
    "fold_proof",
    "verify_inclusion",
    "compute_tree_depth",
]
