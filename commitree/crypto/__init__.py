"""
Core cryptographic utilities.

SHA-256 digest oracle, leaf hashing and hex codecs.
"""
from .hashing import (
    DIGEST_SIZE,
    DEFAULT_TEXT_ENCODING,
    ByteItem,
    sha256,
    hash_bytes,
    item_to_bytes,
    hash_item,
    hash_canonical,
    to_hex,
    from_hex,
)

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
