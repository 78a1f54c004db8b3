"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
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

from fixtures.trees import make_tree  # noqa: E402
from hashtree.config.runtime import set_default_config  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abc_blocks():
    """The three-block example used throughout the tests."""
    return [b"a", b"b", b"c"]


@pytest.fixture
def abc_tree(abc_blocks):
    """Generated SHA-256 tree over a, b, c."""
    return make_tree(abc_blocks)


@pytest.fixture(autouse=True)
def reset_default_config():
    """Keep the module-level default config from leaking between tests."""
    set_default_config(None)
    yield
    set_default_config(None)
