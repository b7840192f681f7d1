"""
Pytest configuration and shared fixtures for commitree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

RING_VERSE = _common.RING_VERSE
GANDALF_LINES = _common.GANDALF_LINES
CORRUPTED_GANDALF_LINES = _common.CORRUPTED_GANDALF_LINES
make_items = _common.make_items
make_tree = _common.make_tree
make_proof = _common.make_proof


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def ring_tree():
    """Five-item tree over RING_VERSE."""
    return make_tree(RING_VERSE)


@pytest.fixture
def gandalf_tree():
    """Five-item tree over GANDALF_LINES."""
    return make_tree(GANDALF_LINES)


@pytest.fixture
def gandalf_proof():
    """InclusionProof for the third Gandalf line."""
    return make_proof(GANDALF_LINES, index=2)


@pytest.fixture(autouse=True)
def clean_commitree_env(monkeypatch):
    """Keep COMMITREE_* variables from the shell out of every test."""
    import os
    for key in list(os.environ):
        if key.startswith("COMMITREE_"):
            monkeypatch.delenv(key, raising=False)
    yield


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
