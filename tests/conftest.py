"""Pytest configuration and shared fixtures.

Following Linus's principle: "Simplicity is the ultimate sophistication."
Provides minimal, focused test fixtures and configuration.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from int_vector import IntVector, VectorConfig, reset_config  # noqa: E402

ENV_VARS = (
    "INT_VECTOR_MAX_CAPACITY",
    "INT_VECTOR_MEMORY_HEADROOM_MB",
    "INT_VECTOR_CHECK_SYSTEM_MEMORY",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from default configuration."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def small_config():
    """Config with a tiny capacity ceiling and no psutil checks."""
    return VectorConfig(max_capacity=8, memory_headroom_mb=0, check_system_memory=False)


@pytest.fixture
def sample_vector():
    """The reference sequence 3, 1, 4, 1."""
    return IntVector.from_iterable([3, 1, 4, 1])
