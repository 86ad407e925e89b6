import os
import random
import string
import sys

import pytest
import structlog

# Make the repository root importable so the example and benchmark programs
# can be imported without installing them.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

ALPHANUMERIC = string.ascii_letters + string.digits


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a program entry point applied."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def rng():
    """Deterministic random source for test data."""
    return random.Random(1234)


@pytest.fixture
def make_keys(rng):
    """Factory for unique random 32-character alphanumeric keys."""

    def _make(n: int) -> list[str]:
        keys = set()
        while len(keys) < n:
            keys.add("".join(rng.choices(ALPHANUMERIC, k=32)))
        return sorted(keys)

    return _make
