"""
Log level constants.

Levels are ordered by severity so sinks and history filters can compare
them directly:

    INFO < WARNING < ERROR < FATAL

ERROR and FATAL are both treated as "errors" by the history filters.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3

    @property
    def label(self) -> str:
        """Upper-case tag used in rendered lines, e.g. ``WARNING``."""
        return self.name

    @property
    def is_error(self) -> bool:
        return self >= LogLevel.ERROR


def parse_level(value) -> LogLevel:
    """Accept a LogLevel, its name (any case) or its integer value."""
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, str):
        try:
            return LogLevel[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None
    return LogLevel(value)
