"""Tests for log_lib.asserts — Assertion handles and validators."""

from unittest.mock import MagicMock, patch

import pytest

from chanlog.lib.log_lib import Environment, LogLevel, Logger, LogRuntime


@pytest.fixture
def log(runtime):
    return Logger("Game", runtime=runtime)


class TestAssertThat:
    """Construction-time evaluation and logging."""

    def test_failure_logs_one_error(self, log, history):
        result = log.assert_that(False, "m")
        assert result.passed is False
        assert len(history) == 1
        entry = history.entries[0]
        assert entry.level is LogLevel.ERROR
        assert entry.message == "Game:: ASSERTION FAILED: m"

    def test_success_logs_nothing(self, log, history):
        result = log.assert_that(True, "m")
        assert result.passed is True
        assert bool(result) is True
        assert history.entries == []

    def test_failure_respects_gates(self, log, history):
        """A disabled logger still returns a failed handle, silently."""
        log.toggle_enabled(False)
        result = log.assert_that(False, "quiet")
        assert result.passed is False
        assert history.entries == []

    def test_message_kept(self, log):
        assert log.assert_that(False, "why").message == "why"


class TestOnFailure:
    """Callback chaining."""

    def test_callback_once_on_failure(self, log, history):
        cb = MagicMock()
        log.assert_that(False, "m").on_failure(cb)
        cb.assert_called_once_with()
        assert len(history) == 1

    def test_callback_never_on_success(self, log):
        cb = MagicMock()
        log.assert_that(True, "m").on_failure(cb)
        cb.assert_not_called()

    def test_chain_returns_same_handle(self, log):
        handle = log.assert_that(False, "m")
        with patch("sys.gettrace", return_value=None):
            assert handle.on_failure(None) is handle
            assert handle.break_debugger() is handle
            assert handle.pause_editor() is handle

    def test_repeated_calls_recheck_stored_result(self, log, history):
        """Chaining re-reads the stored boolean and never re-logs."""
        cb = MagicMock()
        handle = log.assert_that(False, "m")
        handle.on_failure(cb).on_failure(cb)
        assert cb.call_count == 2
        assert len(history) == 1


class TestBreakDebugger:
    """Debugger break only with a tracer attached."""

    def test_no_break_without_debugger(self, log):
        with patch("sys.gettrace", return_value=None), \
                patch("builtins.breakpoint") as bp:
            log.assert_that(False, "m").break_debugger()
        bp.assert_not_called()

    def test_break_with_debugger(self, log):
        with patch("sys.gettrace", return_value=lambda *a: None), \
                patch("builtins.breakpoint") as bp:
            log.assert_that(False, "m").break_debugger()
        bp.assert_called_once_with()

    def test_no_break_on_success(self, log):
        with patch("sys.gettrace", return_value=lambda *a: None), \
                patch("builtins.breakpoint") as bp:
            log.assert_that(True, "m").break_debugger()
        bp.assert_not_called()


class TestPauseEditor:
    """Host pause on failure, editor environment only."""

    def test_pauses_in_editor(self, log, runtime):
        hook = MagicMock()
        runtime.pause_hook = hook
        log.assert_that(False, "m").pause_editor()
        assert runtime.paused is True
        hook.assert_called_once_with()

    def test_no_pause_on_success(self, log, runtime):
        log.assert_that(True, "m").pause_editor()
        assert runtime.paused is False

    def test_no_pause_in_build(self, history):
        rt = LogRuntime(environment=Environment.BUILD, sink=history)
        Logger(runtime=rt).assert_that(False, "m").pause_editor()
        assert rt.paused is False


class TestValidators:
    """validate_not_null / validate_range."""

    def test_not_null_fails_on_none(self, log, history):
        result = log.validate_not_null(None, "player")
        assert result.passed is False
        assert history.entries[0].message.endswith("player cannot be null")

    def test_not_null_passes_on_falsy_value(self, log, history):
        """Only None counts as null; 0 and "" are real values."""
        assert log.validate_not_null(0, "count").passed is True
        assert history.entries == []

    def test_range_inside(self, log, history):
        assert log.validate_range(50, 0, 100, "health").passed is True
        assert log.validate_range(0, 0, 100, "health").passed is True
        assert log.validate_range(100, 0, 100, "health").passed is True
        assert history.entries == []

    def test_range_outside_message(self, log, history):
        result = log.validate_range(150, 0, 100, "health")
        assert result.passed is False
        assert history.entries[0].message.endswith(
            "health must be between 0 and 100, but was 150")

    def test_inverted_range_is_reported_not_raised(self, log, history):
        result = log.validate_range(5, 10, 0, "speed")
        assert result.passed is False
        assert "speed range is invalid: min 10 is greater than max 0" in \
            history.entries[0].message

    def test_incomparable_value_is_reported_not_raised(self, log, history):
        result = log.validate_range(None, 0, 10, "hp")
        assert result.passed is False
        assert history.entries[0].message.endswith(
            "hp must be between 0 and 10, but was None")
