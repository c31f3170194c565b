"""Main CLI entry point for chanlog.

Implements a two-pass argument parser:
  1. First pass: extract global flags (--config, --env, --no-color)
  2. Second pass: dispatch to subcommand

Global flags can appear before OR after the subcommand:
  chanlog --env build channels      # works
  chanlog channels --env build      # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys

from chanlog._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags (can precede or follow the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Settings file (default: nearest .chanlog.json, "
                         "then ~/.chanlog/config.json)"},
    "--env": {"choices": ["editor", "build"], "default": None,
              "help": "Environment to evaluate channel scopes against "
                      "(default: $CHANLOG_ENV or editor)"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable colored output"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        global_parser.add_argument(flag, **kwargs)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in chanlog.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from chanlog.commands import channel, channels, demo, reset
    return [channels, channel, reset, demo]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="chanlog",
        description="chanlog — channel settings and demo for the chanlog logger",
        epilog=(
            "Run 'chanlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--config, --env, --no-color) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"chanlog {BASE_VERSION} ({VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        parser.add_argument(flag, **kwargs)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


def _init_runtime(global_args):
    """Load settings and set up the default LogRuntime from global flags."""
    from chanlog.config import load_settings
    from chanlog.lib.log_lib import Environment, StreamSink, init_runtime

    settings = load_settings(global_args.config)
    environment = Environment(global_args.env) if global_args.env else None
    return init_runtime(
        settings=settings,
        environment=environment,
        sink=StreamSink(color=not global_args.no_color),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for chanlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)
    _init_runtime(global_args)

    # Pass 2: parse subcommand args
    commands = _discover_commands()
    parser = _build_parser(commands)

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
