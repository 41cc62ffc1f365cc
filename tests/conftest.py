# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "apps", "solver", "tools" and types_keypad can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SAMPLE_CODES = ["029A", "980A", "179A", "456A", "379A"]


@pytest.fixture
def sample_codes():
    return list(SAMPLE_CODES)


@pytest.fixture(scope="session")
def keypads():
    from solver.keypad_core import build_keypads

    return build_keypads()
