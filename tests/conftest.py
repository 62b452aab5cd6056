"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Resets the global runtime config around every test
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

from fixtures.common import (  # noqa: E402
    ABCDE,
    make_items,
    make_records,
    scenario_digests,
)
from hashtree.config.runtime import RuntimeConfig, set_default_config  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def default_runtime_config(monkeypatch):
    """Pin the default config to SHA-256 regardless of the caller's env."""
    for var in ("HASHTREE_DIGEST_ALGORITHM", "HASHTREE_LOG_LEVEL", "HASHTREE_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    set_default_config(RuntimeConfig())
    yield
    set_default_config(None)


@pytest.fixture
def abcde_items():
    """The five single-letter items used by the worked examples."""
    return list(ABCDE)


@pytest.fixture
def abcde_digests():
    """Hand-computed digests for the ABCDE example tree."""
    return scenario_digests()


@pytest.fixture
def items():
    """Seven distinct byte items (odd count exercises the carry rule)."""
    return make_items(7)


@pytest.fixture
def records():
    """A few structured records for canonical-encoding tests."""
    return make_records(3)
