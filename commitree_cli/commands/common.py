"""
Shared helpers for CLI commands: exit codes, item loading, hash formatting.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from commitree.config import RuntimeConfig, get_default_config
from commitree.merkle import MerkleTree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> RuntimeConfig:
    """Config attached by main(), or the process default."""
    return getattr(args, "cli_config", None) or get_default_config()


def load_items(args: Namespace, config: RuntimeConfig) -> list[str]:
    """
    Collect items from positional arguments, then from --file lines.

    Blank lines in the file are skipped; other lines are kept verbatim
    without their line terminator.
    """
    items: list[str] = list(getattr(args, "items", None) or [])
    file_path = getattr(args, "file", None)
    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Item file not found: {path}")
        text = path.read_text(encoding=config.tree.text_encoding)
        file_items = [line for line in text.splitlines() if line.strip()]
        logger.debug(f"Read {len(file_items)} items from {path}")
        items.extend(file_items)
    return items


def build_tree(items: list[str], config: RuntimeConfig) -> MerkleTree:
    logger.info(f"Building tree from {len(items)} items")
    return MerkleTree.build(items, encoding=config.tree.text_encoding)


def format_hash(digest: bytes, config: RuntimeConfig) -> str:
    return ("0x" if config.output.hex_prefix else "") + digest.hex()


def wants_json(args: Namespace, config: RuntimeConfig) -> bool:
    return bool(getattr(args, "json", False)) or config.output.format == "json"
