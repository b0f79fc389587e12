"""Shared fixtures."""
import shutil
from pathlib import Path

import pytest

from taxzone.logging_config import reset_logging

CITIES_DIR = Path(__file__).parent.parent / "cities"


@pytest.fixture(autouse=True)
def _reset_logging():
    """The CLI configures logging once per process; undo it between tests."""
    yield
    reset_logging()


@pytest.fixture
def city_file(tmp_path):
    """A writable copy of the Gothenburg data file."""
    path = tmp_path / "gothenburg.yaml"
    shutil.copy(CITIES_DIR / "gothenburg.yaml", path)
    return path
