"""
Test fixtures package for commitree tests.

Usage:
    from fixtures import make_tree, GANDALF_LINES

    def test_something():
        tree = make_tree(GANDALF_LINES)
"""

from .common import (
    RING_VERSE,
    GANDALF_LINES,
    CORRUPTED_GANDALF_LINES,
    make_items,
    make_tree,
    make_proof,
)

__all__ = [
    "RING_VERSE",
    "GANDALF_LINES",
    "CORRUPTED_GANDALF_LINES",
    "make_items",
    "make_tree",
    "make_proof",
]
