"""
Per-key rate limiting for repeated log messages.

Each key remembers when it last emitted and how many calls were dropped
since. The rule for ``should_emit(key, interval)``:

    first sight of key             ->  emit
    now - last_emit >= interval    ->  emit, reset suppressed count
    otherwise                      ->  drop, suppressed count += 1

An interval <= 0 never suppresses. Keys are independent, so unrelated
throttled messages never interfere with each other.

Not thread-safe. Callers logging from several threads must serialize
access themselves.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional


DEFAULT_MAX_KEYS = 4096


@dataclass
class RateLimitEntry:
    """Bookkeeping for one throttled key."""
    last_emit_time: float
    suppressed_count: int = 0


class RateLimiter:
    """Decides whether a keyed message may be emitted now.

    Args:
        clock: Monotonic time source in seconds (default: time.monotonic).
        max_keys: Cap on tracked keys. When a new key would exceed it, the
            least recently observed key is evicted. None disables the cap.
    """

    def __init__(self, clock: Callable[[], float] = None,
                 max_keys: Optional[int] = DEFAULT_MAX_KEYS):
        self.clock = clock if clock is not None else time.monotonic
        self.max_keys = max_keys
        self._entries: "OrderedDict[str, RateLimitEntry]" = OrderedDict()

    def should_emit(self, key: str, min_interval: float) -> bool:
        """Return True if ``key`` may emit now, updating bookkeeping."""
        now = self.clock()
        entry = self._entries.get(key)
        if entry is None:
            self._remember(key, RateLimitEntry(last_emit_time=now))
            return True

        self._entries.move_to_end(key)
        if min_interval <= 0 or now - entry.last_emit_time >= min_interval:
            entry.last_emit_time = now
            entry.suppressed_count = 0
            return True

        entry.suppressed_count += 1
        return False

    def suppressed_count(self, key: str) -> int:
        """Calls dropped for ``key`` since its last emission (0 if unseen)."""
        entry = self._entries.get(key)
        return entry.suppressed_count if entry is not None else 0

    def clear(self) -> None:
        """Forget every tracked key."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _remember(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry
        if self.max_keys is not None:
            while len(self._entries) > self.max_keys:
                self._entries.popitem(last=False)
