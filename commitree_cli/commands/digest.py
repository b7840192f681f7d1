"""
CLI Hash Command

Print the leaf hash of each argument, as a tree would compute it.

Usage:
    commitree hash "In a hole in the ground there lived a hobbit."
"""

from __future__ import annotations

import json
from argparse import Namespace

from commitree.crypto.hashing import hash_item

from .common import EXIT_SUCCESS, format_hash, get_config, wants_json


def hash_cmd(args: Namespace) -> int:
    """Execute the hash command."""
    config = get_config(args)
    digests = [
        (text, format_hash(hash_item(text, config.tree.text_encoding), config))
        for text in args.texts
    ]

    if wants_json(args, config):
        print(json.dumps([{"input": t, "hash": h} for t, h in digests], indent=2))
    else:
        for _, digest in digests:
            print(digest)
    return EXIT_SUCCESS
