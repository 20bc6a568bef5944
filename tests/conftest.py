"""
Shared test fixtures for the barograph test suite.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest


# === Path Setup ===

# Add tests directory to path (for helpers module)
TESTS_PATH = Path(__file__).parent
sys.path.insert(0, str(TESTS_PATH))

# Add src to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))


from barograph import library
from barograph.config import Configuration
from barograph.keys import KeyFile
from barograph.printer import Colors

from helpers import make_result


# Output assertions compare plain text
Colors.disable()


# === Isolation ===

@pytest.fixture(autouse=True)
def key_path(tmp_path):
    """Point the key file at a temp dir so tests never touch ~/.barograph."""
    path = tmp_path / ".barograph" / "keys.yaml"
    with patch.object(KeyFile, "DEFAULT_PATH", path):
        yield path


@pytest.fixture(autouse=True)
def clean_library(monkeypatch):
    """No cached measure function and no BAROGRAPH_MEASURE between tests."""
    monkeypatch.delenv(library.ENV_VAR, raising=False)
    library.reset()
    yield
    library.reset()


# === Data Fixtures ===

@pytest.fixture
def config():
    """Default configuration."""
    return Configuration()


@pytest.fixture
def result():
    """A successful result with one source and three forecast entries."""
    return make_result(query="Paris, France", forecast_count=3)


@pytest.fixture
def write_keys(key_path):
    """Write YAML text to the key file."""
    def _write(text):
        key_path.parent.mkdir(parents=True, exist_ok=True)
        key_path.write_text(text)
        return key_path
    return _write
