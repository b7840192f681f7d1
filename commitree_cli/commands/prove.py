"""
CLI Prove Command

Build a tree from items and emit a proof of inclusion for one target item.

Usage:
    commitree prove ITEM... --target "All we have to decide " [--out proof.json] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from commitree.crypto.hashing import hash_item
from commitree.schemas.errors import EmptyInputException, LeafNotFoundException
from commitree.schemas.proof import ProofDocument

from .common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_tree,
    format_hash,
    get_config,
    load_items,
    wants_json,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code
    """
    config = get_config(args)
    items = load_items(args, config)

    try:
        tree = build_tree(items, config)
    except EmptyInputException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = hash_item(args.target, config.tree.text_encoding)
    try:
        proof = tree.prove(leaf)
    except LeafNotFoundException as e:
        print(f"Error: {e.message}: {e.details.get('leaf', '')}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = ProofDocument.from_proof(proof)
    payload = document.model_dump_json(indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote proof to {out_path}")

    if wants_json(args, config):
        print(payload)
        return EXIT_SUCCESS

    print(f"leaf: {format_hash(proof.leaf, config)}")
    print(f"index: {proof.index}")
    print(f"root: {format_hash(proof.root, config)}")
    print(f"path ({len(proof.siblings)}):")
    for level, sibling in enumerate(proof.siblings):
        print(f"  [{level}] {format_hash(sibling, config)}")
    if args.out:
        print(f"written: {args.out}")
    return EXIT_SUCCESS
