"""chanlog channels — list every channel and whether it is active.

Shows, per channel, the configured on/off state and scope, and whether a
logger on that channel would emit in the current environment. Channels
without an entry are marked ``both*``: unconfigured, so they fail open.
"""

from chanlog.lib.log_lib import format_channel_list, get_runtime


def register(subparsers, parents):
    """Register the 'channels' subcommand."""
    p = subparsers.add_parser(
        "channels",
        parents=parents,
        help="List channels and their state",
    )
    p.set_defaults(func=run)


def run(args):
    print(format_channel_list(get_runtime().registry))
    return 0
