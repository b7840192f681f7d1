"""
Hashing Utilities
Digest oracle, item coercion and hex codecs for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes (the digest oracle behind every tree)
- Item coercion: byte-representable items to raw bytes
- Canonical hashing for structured objects (via dumps_canonical)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Strings are encoded with an explicit text encoding, never the locale default
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any, Union

from commitree.schemas.canonical import dumps_canonical


# Size of every digest produced by the oracle
DIGEST_SIZE: int = 32

DEFAULT_TEXT_ENCODING: str = "utf-8"

ByteItem = Union[bytes, bytearray, memoryview, str]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_bytes(data: bytes) -> bytes:
    """Alias for sha256()."""
    return sha256(data)


def item_to_bytes(item: ByteItem, encoding: str = DEFAULT_TEXT_ENCODING) -> bytes:
    """
    Convert a byte-representable item to raw bytes.

    bytes-like objects are used as-is; str is encoded with `encoding`.

    Raises:
        TypeError: If the item is not byte-representable
    """
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode(encoding)
    raise TypeError(
        f"Item of type {type(item).__name__} is not byte-representable; "
        "use hash_canonical() for structured objects"
    )


def hash_item(item: ByteItem, encoding: str = DEFAULT_TEXT_ENCODING) -> bytes:
    """Hash a byte-representable item into a leaf hash."""
    return sha256(item_to_bytes(item, encoding))


def hash_canonical(obj: Any) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    This is the standard way to compute a leaf hash for structured data.
    The object is first serialized to canonical JSON (deterministic),
    then the UTF-8 encoded bytes are hashed with SHA-256.

    Rule: leaf = sha256(dumps_canonical(obj).encode("utf-8"))

    Args:
        obj: Any object that can be canonically serialized
             (Pydantic model, dict, list, primitives)

    Returns:
        32-byte SHA-256 digest of the canonical JSON

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    canonical_json = dumps_canonical(obj)
    return sha256(canonical_json.encode("utf-8"))


def to_hex(data: bytes, prefix: bool = True) -> str:
    """
    Convert bytes to hexadecimal string, with 0x prefix by default.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return ("0x" if prefix else "") + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "DEFAULT_TEXT_ENCODING",
    "ByteItem",
    "sha256",
    "hash_bytes",
    "item_to_bytes",
    "hash_item",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
