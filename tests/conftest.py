"""Shared test fixtures for simplog test suite."""

import pytest

from simplog import manager as _manager_mod
from simplog import init_logger


FIXED_TIMESTAMP = "[2026-01-15 09:30:00]"


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Run every test in its own directory with a fresh singleton.

    The default log file is relative ("default.log"), so anything a test
    forgets to redirect lands in tmp_path instead of the repo.
    """
    monkeypatch.chdir(tmp_path)
    old = _manager_mod._manager
    _manager_mod._manager = None
    yield
    _manager_mod._manager = old


# ---------------------------------------------------------------------------
# Logger fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin the record timestamp to FIXED_TIMESTAMP."""
    monkeypatch.setattr(_manager_mod, "get_date_string",
                        lambda: FIXED_TIMESTAMP)
    return FIXED_TIMESTAMP


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "test.log"


@pytest.fixture
def log(log_path):
    """The singleton LogManager writing to log_path, colors off."""
    return init_logger(log_file=str(log_path), color=False)


@pytest.fixture
def read_log(log_path):
    """Return the log file contents ('' if it does not exist)."""
    def _read():
        if not log_path.exists():
            return ""
        return log_path.read_text(encoding="utf-8")
    return _read
