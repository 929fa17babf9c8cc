"""Root test configuration: session-level cleanup of runtime artifacts"""

import logging
import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["dist"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove generated output directories created during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(autouse=True)
def clear_lunor_env(monkeypatch):
    """Keep LUNOR_* variables from the host environment out of every test."""
    for name in ("OUTPUT_DIR", "OUTPUT_EXT", "SOURCE_EXTENSIONS", "INDENT_WIDTH", "RUNTIME_MODULE",
                 "ROUTER_MODULE", "AUTH_TOKEN_EXPRESSION", "WRITE_SIDECAR", "LOG_LEVEL"):
        monkeypatch.delenv(f"LUNOR_{name}", raising=False)


@pytest.fixture(autouse=True)
def reset_verbose(monkeypatch):
    """Undo a --verbose flag left over from an earlier CLI invocation."""
    monkeypatch.setattr("lunor.log._verbose", False)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Restore root handlers replaced by configure_logging inside a CliRunner invocation."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
