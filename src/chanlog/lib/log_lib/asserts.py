"""
Assertion — result of Logger.assert_that() with chainable follow-ups.

The condition is evaluated once, when the assertion is made. A failure is
logged at ERROR level immediately. The chain methods only look at the
stored result, so calling them repeatedly is safe:

    log.assert_that(player is not None, "player missing") \\
       .on_failure(respawn) \\
       .break_debugger() \\
       .pause_editor()

Nothing here raises on failure; a failed check is information, not a
fault in the caller.
"""

import sys
from typing import Callable, Optional

from .levels import LogLevel


FAILURE_PREFIX = "ASSERTION FAILED: "


class Assertion:
    """Outcome of a single checked condition."""

    def __init__(self, logger, passed: bool, message: str):
        self._logger = logger
        self._passed = passed
        self._message = message
        if not passed:
            logger.emit(f"{FAILURE_PREFIX}{message}", LogLevel.ERROR)

    def __repr__(self):
        return f"Assertion(passed={self._passed}, message={self._message!r})"

    def __bool__(self):
        return self._passed

    @property
    def passed(self) -> bool:
        return self._passed

    @property
    def message(self) -> str:
        return self._message

    def on_failure(self, callback: Optional[Callable[[], None]]) -> "Assertion":
        """Invoke ``callback`` now if the assertion failed."""
        if not self._passed and callback is not None:
            callback()
        return self

    def break_debugger(self) -> "Assertion":
        """Drop into the debugger if one is attached and the check failed.

        A debugger counts as attached when a trace function is installed
        (pdb, IDE debuggers). Without one this is a no-op, so shipped code
        never stops at a prompt.
        """
        if not self._passed and sys.gettrace() is not None:
            breakpoint()
        return self

    def pause_editor(self) -> "Assertion":
        """Pause the host if the check failed. Editor environment only."""
        if not self._passed:
            runtime = self._logger.runtime
            if runtime.is_editor:
                runtime.pause()
        return self
