"""chanlog channel — enable, disable or re-scope channels.

Each positional argument is a channel spec ``CHANNEL[:STATE[:SCOPE]]``::

    chanlog channel audio:off
    chanlog channel performance:on:editor network::build

All specs are validated before anything is changed; the settings file is
written once at the end.
"""

import argparse

from chanlog.config import save_settings
from chanlog.lib.log_lib import Channel, get_runtime, parse_channel_spec
from chanlog.output import print_error, print_ok, print_skip


def register(subparsers, parents):
    """Register the 'channel' subcommand."""
    p = subparsers.add_parser(
        "channel",
        parents=parents,
        help="Change channel state/scope and save the settings file",
        description=(
            "Apply one or more channel specs and save the settings file.\n"
            "\n"
            "Spec syntax: CHANNEL[:STATE[:SCOPE]]\n"
            "  STATE: on/off (empty keeps the current state)\n"
            "  SCOPE: editor, build or both"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("specs", nargs="+", metavar="SPEC",
                   help="Channel spec, e.g. audio:off or performance:on:editor")
    p.set_defaults(func=run)


def run(args):
    try:
        specs = [parse_channel_spec(s) for s in args.specs]
    except ValueError as e:
        print_error(str(e))
        return 1

    registry = get_runtime().registry
    changed = False
    for spec in specs:
        if spec.channel is Channel.DEFAULT:
            print_skip("default channel is always on")
            continue
        if spec.enabled is not None:
            registry.set_enabled(spec.channel, spec.enabled)
        if spec.scope is not None:
            registry.set_scope(spec.channel, spec.scope)
        config = registry.get_config(spec.channel)
        if config is None:
            continue
        state = "on" if config.enabled else "off"
        print_ok(f"{spec.channel.value}: {state}, scope {config.scope.value}")
        changed = True

    if changed:
        path = save_settings(registry.settings, getattr(args, "config", None))
        print_ok(f"Saved {path}")
    return 0
