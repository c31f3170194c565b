"""
Sinks — where formatted log lines end up.

A sink is any object with::

    write(message: str, level: LogLevel, color: RGB, target: Any) -> None

Sinks must not raise; a failing sink would crash the caller of a log
call. ``target`` is an optional reference to the object a message is
about; sinks render or store it as they see fit.

Provided sinks:
    StreamSink   print to a text stream (default stderr), ANSI colour
    LogHistory   bounded in-memory history with filtering and text export
    FanoutSink   forward each write to several sinks
"""

import re
import sys
import time
import traceback
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Deque, List, Optional, TextIO, Tuple

from .levels import LogLevel


RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)

DEFAULT_MAX_ENTRIES = 1000
TRACE_DEPTH = 16

# Lines produced by a prefixed logger: "Prefix:: ..." or "[ctx] ... ::"
_PREFIXED_RE = re.compile(r"\[.*?\].*?::")


def ansi_color(text: str, color: RGB) -> str:
    """Wrap text in a 24-bit ANSI foreground colour sequence."""
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m{text}\x1b[0m"


class StreamSink:
    """Print ``[LEVEL] message`` lines to a text stream.

    The stream is looked up at write time when none is given, so pytest's
    capsys and redirected stderr keep working.
    """

    def __init__(self, file: TextIO = None, color: bool = True):
        self._file = file
        self.color = color

    @property
    def file(self) -> TextIO:
        return self._file if self._file is not None else sys.stderr

    def write(self, message: str, level: LogLevel, color: RGB = WHITE,
              target: Any = None) -> None:
        text = ansi_color(message, color) if self.color and color else message
        line = f"[{level.label}] {text}"
        if target is not None:
            line += f" ({target})"
        print(line, file=self.file)


@dataclass
class LogEntry:
    """One retained log line."""
    message: str
    level: LogLevel
    timestamp: float
    color: RGB = WHITE
    target: Any = None
    stack_trace: str = ""

    @property
    def is_prefixed(self) -> bool:
        """True for lines that came through a prefixed logger."""
        return ":: " in self.message or bool(_PREFIXED_RE.search(self.message))


def format_elapsed(seconds: float) -> str:
    """Render seconds as hh:mm:ss.fff."""
    millis = int(round(max(seconds, 0.0) * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


class LogHistory:
    """Bounded history of emitted lines, newest last.

    ERROR and FATAL lines written through write() keep the call stack
    that produced them (up to TRACE_DEPTH frames) for the export.

    Usage::

        history = LogHistory(max_entries=500)
        runtime = init_runtime(sink=FanoutSink(StreamSink(), history))
        ...
        errors = history.filtered(show_info=False, show_warnings=False)
        history.export_text("session.txt")
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES,
                 clock: Callable[[], float] = None,
                 capture_traces: bool = True):
        self.clock = clock if clock is not None else time.monotonic
        self.capture_traces = capture_traces
        self.started = self.clock()
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)

    def write(self, message: str, level: LogLevel, color: RGB = WHITE,
              target: Any = None) -> None:
        self.record(LogEntry(message=message, level=level,
                             timestamp=self.clock() - self.started,
                             color=color, target=target,
                             stack_trace=self._trace(level)))

    def _trace(self, level: LogLevel) -> str:
        """Call stack above write() for ERROR and FATAL lines."""
        if not (self.capture_traces and level.is_error):
            return ""
        frames = traceback.format_stack(limit=TRACE_DEPTH + 2)[:-2]
        return "".join(frames).rstrip()

    def record(self, entry: LogEntry) -> None:
        """Append an entry built elsewhere (e.g. with a stack trace)."""
        self._entries.append(entry)

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def count(self, level: LogLevel) -> int:
        return sum(1 for e in self._entries if e.level is level)

    def filtered(self, show_info: bool = True, show_warnings: bool = True,
                 show_errors: bool = True, prefixed_only: bool = False,
                 search: str = "") -> List[LogEntry]:
        """Entries passing the level, prefix and search filters.

        ERROR and FATAL both count as errors. Search is a case-insensitive
        substring match on the message.
        """
        needle = search.lower() if search else ""
        result = []
        for entry in self._entries:
            if entry.level is LogLevel.INFO and not show_info:
                continue
            if entry.level is LogLevel.WARNING and not show_warnings:
                continue
            if entry.level.is_error and not show_errors:
                continue
            if prefixed_only and not entry.is_prefixed:
                continue
            if needle and needle not in entry.message.lower():
                continue
            result.append(entry)
        return result

    def export_text(self, path, now: Optional[datetime] = None,
                    **filters) -> Path:
        """Dump filtered entries to a human-readable text file.

        Args:
            path: Destination file.
            now: Export time shown in the header (default: datetime.now()).
            **filters: Passed through to filtered().

        Returns:
            The path written.
        """
        now = now or datetime.now()
        lines = [
            "chanlog - Log Export",
            f"Exported: {now:%Y-%m-%d %H:%M:%S}",
            f"Total Logs: {len(self._entries)}",
            "=" * 80,
            "",
        ]
        for entry in self.filtered(**filters):
            lines.append(
                f"[{format_elapsed(entry.timestamp)}] [{entry.level.label}] {entry.message}"
            )
            if entry.stack_trace:
                lines.append(f"Stack Trace:\n{entry.stack_trace}")
            lines.append("-" * 80)

        target = Path(path)
        target.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return target


class FanoutSink:
    """Forward every write to each wrapped sink, in order."""

    def __init__(self, *sinks):
        self.sinks = list(sinks)

    def write(self, message: str, level: LogLevel, color: RGB = WHITE,
              target: Any = None) -> None:
        for sink in self.sinks:
            sink.write(message, level, color, target)
