"""
CLI command modules.
"""

from commitree_cli.commands import digest, prove, root, verify

__all__ = ["digest", "prove", "root", "verify"]
