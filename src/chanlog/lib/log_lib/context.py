"""
Nested context labels prefixed onto log messages.

    with stack.scope("Boot"):
        with stack.scope("Audio"):
            stack.current_prefix()    # "[Boot > Audio] "

The stack is shared by every logger attached to the same runtime. It does
no locking; concurrent pushers need external serialization.
"""

from contextlib import contextmanager
from typing import Iterator, List


class ContextStack:
    """LIFO stack of context names rendered outermost to innermost."""

    def __init__(self):
        self._names: List[str] = []

    def enter(self, name: str) -> None:
        self._names.append(str(name))

    def exit(self) -> None:
        """Pop the innermost name. Popping an empty stack does nothing."""
        if self._names:
            self._names.pop()

    @contextmanager
    def scope(self, name: str) -> Iterator["ContextStack"]:
        """Enter ``name`` for the duration of a with-block.

        The matching exit runs exactly once, on normal exit, early return
        or exception.
        """
        self.enter(name)
        try:
            yield self
        finally:
            self.exit()

    def current_prefix(self) -> str:
        if not self._names:
            return ""
        return f"[{' > '.join(self._names)}] "

    def clear(self) -> None:
        self._names.clear()

    @property
    def depth(self) -> int:
        return len(self._names)

    @property
    def names(self) -> List[str]:
        """Snapshot of the stack, outermost first."""
        return list(self._names)
