"""
CLI Root Command

Build a tree from items, optionally insert more, and print the root.

Usage:
    commitree root "In a hole in the ground" "there lived a hobbit." --insert "Gandalf the Grey"
    commitree root --file items.txt --levels --json
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from commitree.schemas.errors import EmptyInputException

from .common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_tree,
    format_hash,
    get_config,
    load_items,
    wants_json,
)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

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

    roots = [format_hash(tree.root(), config)]
    for item in args.insert or []:
        tree.insert(item)
        roots.append(format_hash(tree.root(), config))

    if wants_json(args, config):
        summary = {
            "root": roots[-1],
            "leaf_count": len(tree),
            "height": tree.height,
        }
        if len(roots) > 1:
            summary["root_history"] = roots
        if args.levels:
            summary["level_sizes"] = tree.level_sizes()
        print(json.dumps(summary, indent=2))
        return EXIT_SUCCESS

    if len(roots) > 1:
        print(f"initial root: {roots[0]}")
        for i, item_root in enumerate(roots[1:], start=1):
            print(f"after insert {i}: {item_root}")
    print(f"root: {roots[-1]}")
    print(f"leaves: {len(tree)}")
    if args.levels:
        sizes = ", ".join(str(n) for n in tree.level_sizes())
        print(f"level sizes: [{sizes}]")
    return EXIT_SUCCESS
