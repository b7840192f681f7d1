"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m commitree_cli hash TEXT...
    python -m commitree_cli root ITEM... [--file PATH] [--insert ITEM]... [--levels] [--json]
    python -m commitree_cli prove ITEM... --target TEXT [--file PATH] [--out PATH] [--json]
    python -m commitree_cli verify PROOF_PATH [ITEM...] [--file PATH] [--json]
    python -m commitree_cli config --init | --show

Environment Variables:
    COMMITREE_TEXT_ENCODING     Encoding for text items (default: utf-8)
    COMMITREE_OUTPUT_FORMAT     Output format: human, json
    COMMITREE_HEX_PREFIX        Print hashes with 0x prefix (default: true)
    COMMITREE_LOG_LEVEL         Log level (default: INFO)
    COMMITREE_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from commitree import __version__
from commitree.config import RuntimeConfig, get_default_config_template
from commitree.schemas.errors import CommitreeException
from commitree_cli.commands import digest, prove, root, verify
from commitree_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


DEFAULT_CONFIG_NAME = "commitree.yaml"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a YAML file and/or environment.

    Environment variables override file settings. Without an explicit
    path, ./commitree.yaml and ~/.config/commitree/config.yaml are tried.
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    default_paths = [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.home() / ".config" / "commitree" / "config.yaml",
    ]
    for default_path in default_paths:
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()


def _add_item_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items",
        nargs="*",
        help="Items to commit to, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional items from a file, one per line",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="commitree",
        description="Sorted-pair Merkle commitments - compute roots, produce and check inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Print the leaf hash of each argument",
    )
    hash_parser.add_argument("texts", nargs="+", help="Text to hash")
    hash_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    hash_parser.set_defaults(func=digest.hash_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Build a tree and print its root",
        description="Build a tree from items, optionally insert more items, and print the root.",
    )
    _add_item_arguments(root_parser)
    root_parser.add_argument(
        "--insert",
        action="append",
        default=None,
        metavar="ITEM",
        help="Insert an item after building (repeatable)",
    )
    root_parser.add_argument(
        "--levels",
        action="store_true",
        default=False,
        help="Also print the size of every level",
    )
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce a proof of inclusion for one item",
    )
    _add_item_arguments(prove_parser)
    prove_parser.add_argument(
        "--target", "-t",
        type=str,
        required=True,
        help="Item to prove (hashed the same way as the tree's items)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path",
    )
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a proof document",
        description=(
            "Check a proof document against its own root, or against the "
            "root of a tree rebuilt from the given items."
        ),
    )
    verify_parser.add_argument("proof_path", type=str, help="Path to a proof document (JSON)")
    _add_item_arguments(verify_parser)
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Write or print commitree settings",
        description="Write a starter commitree.yaml, or print the settings in effect (file + COMMITREE_* env).",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Write a starter YAML file to --path",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Print the effective settings as JSON",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: {config_path} exists; refusing to overwrite", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Wrote {config_path}")
        print("Every setting can also be overridden with a COMMITREE_* variable.")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: commitree config [--init [--path FILE] | --show]", file=sys.stderr)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, CommitreeException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    try:
        setup_logging(level=log_level, log_file=config.logging.file)
    except OSError as e:
        print(f"Error opening log file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, CommitreeException, TypeError, ValueError) as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
