"""chanlog reset — restore default channel settings.

Every channel becomes enabled with scope ``both``, except the
performance channel, which defaults to editor-only. Rate-limiting
settings are left as they are.
"""

from chanlog.config import save_settings
from chanlog.lib.log_lib import get_runtime
from chanlog.output import print_ok


def register(subparsers, parents):
    """Register the 'reset' subcommand."""
    p = subparsers.add_parser(
        "reset",
        parents=parents,
        help="Reset channel settings to defaults and save",
    )
    p.set_defaults(func=run)


def run(args):
    registry = get_runtime().registry
    registry.reset_to_defaults()
    path = save_settings(registry.settings, getattr(args, "config", None))
    print_ok(f"Channel settings reset ({path})")
    return 0
