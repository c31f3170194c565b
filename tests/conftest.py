"""Shared test fixtures for the chanlog test suite."""

import os
from unittest.mock import patch

import pytest

from chanlog.lib.log_lib import (
    Environment, LogHistory, LogRuntime, RateLimiter,
)
from chanlog.lib.log_lib import manager as _manager_mod


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: spawns subprocesses or is otherwise slow")


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_runtime():
    """Reset the LogRuntime singleton between tests."""
    old = _manager_mod._runtime
    _manager_mod._runtime = None
    yield
    _manager_mod._runtime = old


@pytest.fixture(autouse=True)
def _clean_env():
    """Keep CHANLOG_* variables from the developer's shell out of tests."""
    cleaned = {k: v for k, v in os.environ.items() if not k.startswith("CHANLOG_")}
    with patch.dict(os.environ, cleaned, clear=True):
        yield


@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.chanlog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


# ---------------------------------------------------------------------------
# Time and runtime
# ---------------------------------------------------------------------------
class FakeClock:
    """Clock returning a settable time in seconds."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def history(clock):
    """A LogHistory sink on the fake clock."""
    return LogHistory(clock=clock)


@pytest.fixture
def runtime(clock, history):
    """An isolated editor runtime with no settings (fail open)."""
    return LogRuntime(
        settings=None,
        environment=Environment.EDITOR,
        sink=history,
        limiter=RateLimiter(clock=clock),
    )
