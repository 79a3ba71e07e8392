import sys
import os
from tempfile import TemporaryDirectory
import pytest
# Ensure the project root is on sys.path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with TemporaryDirectory() as dir_path:
        yield dir_path


@pytest.fixture
def src_path():
    """Return a function mapping a fixture name to its path under tests/src."""
    def _path(name):
        return os.path.join(SRC_DIR, name)
    return _path


@pytest.fixture(autouse=True)
def clear_sw_environment(monkeypatch):
    """SW_* overrides from the calling shell must not leak into the CLI tests."""
    for name in ('SW_TARGET', 'SW_INPUT_FILE', 'SW_OUTPUT_DIR', 'SW_VERBOSE'):
        monkeypatch.delenv(name, raising=False)
