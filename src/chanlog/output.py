"""Output formatting utilities for the chanlog CLI.

Consistent status-line formatting across all commands. Errors go
through the default LogRuntime, so they share its sink and colouring.
"""

import sys

from chanlog.lib.log_lib import Logger


_cli_logger = Logger("chanlog")


def print_step(n, total, msg):
    """Print a formatted step header."""
    print(f"\n== Step {n}/{total}: {msg} ==")


def print_ok(msg):
    """Print a success message."""
    print(f"  [OK] {msg}")


def print_skip(msg):
    """Print a skip message."""
    print(f"  [SKIP] {msg}")


def print_error(msg):
    """Print an error message to stderr.

    Routes through the default runtime at ERROR level. Falls back to a
    plain stderr print when the runtime is switched off, since a CLI
    error must always be visible.
    """
    if not _cli_logger.error(f"ERROR: {msg}"):
        print(f"  ERROR: {msg}", file=sys.stderr)
