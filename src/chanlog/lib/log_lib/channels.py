"""
Channel definitions and spec parsing.

Channels are named message categories that can be switched on and off
independently. ``Channel.DEFAULT`` is the sentinel every logger starts on;
it is always enabled and cannot be configured away.

Each configured channel carries a scope deciding in which environment it
is active:

    EDITOR_ONLY   interactive editor / development host only
    BUILD_ONLY    packaged builds only
    BOTH          everywhere

Channel spec syntax (compact, positional), used on the command line:
    CHANNEL[:STATE[:SCOPE]]

    Examples:
        audio                   # enable, keep scope
        audio:off               # disable
        performance:on:editor   # enable, editor-only
        network::build          # keep state, build-only
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Channel(Enum):
    DEFAULT = "default"
    AUDIO = "audio"
    NETWORK = "network"
    PHYSICS = "physics"
    AI = "ai"
    UI = "ui"
    GAMEPLAY = "gameplay"
    PERFORMANCE = "performance"
    ANIMATION = "animation"
    INPUT = "input"
    RENDERING = "rendering"
    SYSTEM = "system"


class Scope(Enum):
    EDITOR_ONLY = "editor"
    BUILD_ONLY = "build"
    BOTH = "both"


class Environment(Enum):
    """Where the process is running. Supplied by the host."""
    EDITOR = "editor"
    BUILD = "build"


# Channel descriptions for the `channels` listing
CHANNEL_DESCRIPTIONS = {
    Channel.DEFAULT:     'Uncategorized output (always on)',
    Channel.AUDIO:       'Sound playback and mixing',
    Channel.NETWORK:     'Connections, packets and sessions',
    Channel.PHYSICS:     'Collisions and simulation steps',
    Channel.AI:          'Agent decisions and pathing',
    Channel.UI:          'Menus, widgets and input focus',
    Channel.GAMEPLAY:    'Rules, scoring and game state',
    Channel.PERFORMANCE: 'Frame timing and profiling',
    Channel.ANIMATION:   'Animation state and blending',
    Channel.INPUT:       'Devices and bindings',
    Channel.RENDERING:   'Cameras, materials and draw calls',
    Channel.SYSTEM:      'Startup, shutdown and platform',
}

# Noisy diagnostic channels that default to EDITOR_ONLY on reset
EDITOR_ONLY_DEFAULTS = {
    Channel.PERFORMANCE,
}

ENV_VAR = "CHANLOG_ENV"

_SCOPE_ALIASES = {
    'editor': Scope.EDITOR_ONLY,
    'editor_only': Scope.EDITOR_ONLY,
    'editoronly': Scope.EDITOR_ONLY,
    'build': Scope.BUILD_ONLY,
    'build_only': Scope.BUILD_ONLY,
    'buildonly': Scope.BUILD_ONLY,
    'both': Scope.BOTH,
}

_STATE_ALIASES = {
    'on': True, 'true': True, 'yes': True, '1': True, 'enabled': True,
    'off': False, 'false': False, 'no': False, '0': False, 'disabled': False,
}


@dataclass
class ChannelConfig:
    """Configuration for a single channel.

    A channel with no ChannelConfig behaves as enabled with scope BOTH.
    """
    channel: Channel
    scope: Scope = Scope.BOTH
    enabled: bool = True


@dataclass
class ChannelSpec:
    """A parsed CHANNEL[:STATE[:SCOPE]] spec. None means "leave as is"."""
    channel: Channel
    enabled: Optional[bool] = True
    scope: Optional[Scope] = None


def parse_channel(name: str) -> Channel:
    """Look up a channel by name (case-insensitive)."""
    if isinstance(name, Channel):
        return name
    try:
        return Channel(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown channel: {name!r}") from None


def parse_scope(name: str) -> Scope:
    """Look up a scope by name or alias (``editor``, ``BuildOnly``, ...)."""
    if isinstance(name, Scope):
        return name
    key = name.strip().lower().replace('-', '_')
    if key in _SCOPE_ALIASES:
        return _SCOPE_ALIASES[key]
    raise ValueError(f"Unknown scope: {name!r}")


def parse_state(value) -> bool:
    """Read an on/off state from a bool or an alias like ``off``/``yes``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _STATE_ALIASES:
        return _STATE_ALIASES[value.strip().lower()]
    raise ValueError(f"Unknown channel state: {value!r}")


def parse_channel_spec(spec: str) -> ChannelSpec:
    """Parse a channel spec string into a ChannelSpec.

    Empty slots use :: (empty between colons). A bare channel name means
    "enable it".

    Args:
        spec: Channel spec string like "audio:off" or "performance::editor"

    Returns:
        ChannelSpec with parsed values

    Raises:
        ValueError: unknown channel, state or scope, or too many parts
    """
    parts = spec.split(':')
    if len(parts) > 3:
        raise ValueError(f"Too many parts in channel spec: {spec!r}")

    channel = parse_channel(parts[0])
    enabled: Optional[bool] = True
    scope = None

    if len(parts) > 1:
        enabled = parse_state(parts[1]) if parts[1].strip() else None
    if len(parts) > 2 and parts[2]:
        scope = parse_scope(parts[2])

    return ChannelSpec(channel=channel, enabled=enabled, scope=scope)


def detect_environment(environ=None) -> Environment:
    """Read the host environment from CHANLOG_ENV (default: EDITOR).

    Unrecognized values fall back to EDITOR so a typo never hides output
    that would otherwise show during development.
    """
    environ = os.environ if environ is None else environ
    value = (environ.get(ENV_VAR) or '').strip().lower()
    if value in ('build', 'release', 'player'):
        return Environment.BUILD
    return Environment.EDITOR
