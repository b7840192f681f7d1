"""
CLI Verify Command

Check a proof document either against its own root or against a tree
rebuilt from items.

Usage:
    commitree verify proof.json                 # stateless, uses the document's root
    commitree verify proof.json ITEM... [--file items.txt] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from commitree.crypto.hashing import from_hex
from commitree.schemas.errors import EmptyInputException, ErrorCodes, ProofError
from commitree.schemas.proof import ProofDocument

from .common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
    format_hash,
    get_config,
    load_items,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf: str = ""
    root: str = ""
    mode: str = "document"  # "document" or "tree"
    valid: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        summary = asdict(self)
        if summary["error"] is None:
            del summary["error"]
        return summary


def load_proof_document(path: Path) -> ProofDocument:
    """
    Load and validate a proof document.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the document is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    return ProofDocument.model_validate_json(path.read_text(encoding="utf-8"))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 invalid, 1 error)
    """
    config = get_config(args)
    proof_path = Path(args.proof_path)

    try:
        document = load_proof_document(proof_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValidationError as e:
        error = ProofError(
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            message="invalid proof document",
            details={
                "error_count": e.error_count(),
                "fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()],
            },
        )
        if wants_json(args, config):
            print(error.model_dump_json(indent=2))
        print(f"Error: invalid proof document: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = from_hex(document.leaf)
    items = load_items(args, config)

    if items:
        try:
            tree = build_tree(items, config)
        except EmptyInputException as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        root = tree.root()
        valid = tree.validate_proof(leaf, document.path())
        mode = "tree"
        if root != from_hex(document.root):
            logger.warning("Proof document root differs from the rebuilt tree root")
    else:
        root = from_hex(document.root)
        valid = document.verify()
        mode = "document"

    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf=format_hash(leaf, config),
        root=format_hash(root, config),
        mode=mode,
        valid=valid,
    )
    if not valid:
        summary.error = ProofError(
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            message="Proof path does not fold to the expected root",
            leaf=summary.leaf,
            root=summary.root,
        ).model_dump()

    if wants_json(args, config):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"proof: {summary.proof_path}")
        print(f"leaf: {summary.leaf}")
        print(f"root ({summary.mode}): {summary.root}")
        print(f"valid: {str(summary.valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
