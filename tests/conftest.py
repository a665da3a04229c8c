"""
Pytest configuration for the test suite.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repository root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from primitives.field import get_field  # noqa: E402

CIRCUITS_DIR = root_dir / "circuits"


@pytest.fixture
def gf101():
    return get_field(101)


@pytest.fixture
def gf17():
    return get_field(17)


@pytest.fixture
def circuits_dir() -> Path:
    return CIRCUITS_DIR
