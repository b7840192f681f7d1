"""
commitree CLI

Command-line interface for sorted-pair Merkle commitments.

Usage:
    python -m commitree_cli root ITEM...
    python -m commitree_cli prove ITEM... --target ITEM --out proof.json
    python -m commitree_cli verify proof.json
"""
