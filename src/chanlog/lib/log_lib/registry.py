"""
ChannelRegistry — per-channel enable/scope policy.

Decision for ``is_enabled(channel)``, first match wins:

    1. Channel.DEFAULT                 ->  enabled
    2. no settings object at all       ->  enabled (fail open)
    3. channel has no entry            ->  enabled (fail open)
    4. entry disabled                  ->  disabled
    5. scope BOTH or scope matches the current environment -> enabled

Missing configuration never silences output; it only ever degrades to
"show everything".
"""

from typing import Optional

from .channels import (
    Channel, ChannelConfig, Environment, Scope, CHANNEL_DESCRIPTIONS,
    detect_environment,
)
from .settings import LoggerSettings


_SCOPE_FOR_ENVIRONMENT = {
    Environment.EDITOR: Scope.EDITOR_ONLY,
    Environment.BUILD: Scope.BUILD_ONLY,
}


class ChannelRegistry:
    """Channel policy over an optional LoggerSettings source.

    Args:
        settings: Configuration source; None means none exists.
        environment: Host environment (default: from CHANLOG_ENV).
    """

    def __init__(self, settings: Optional[LoggerSettings] = None,
                 environment: Optional[Environment] = None):
        self.settings = settings
        self.environment = environment if environment is not None else detect_environment()

    def is_enabled(self, channel: Channel) -> bool:
        if channel is Channel.DEFAULT:
            return True
        if self.settings is None:
            return True
        config = self.settings.get(channel)
        if config is None:
            return True
        if not config.enabled:
            return False
        return (config.scope is Scope.BOTH
                or config.scope is _SCOPE_FOR_ENVIRONMENT[self.environment])

    def get_config(self, channel: Channel) -> Optional[ChannelConfig]:
        if self.settings is None:
            return None
        return self.settings.get(channel)

    def set_enabled(self, channel: Channel, enabled: bool) -> None:
        self._ensure_settings().upsert(channel).enabled = bool(enabled)

    def set_scope(self, channel: Channel, scope: Scope) -> None:
        self._ensure_settings().upsert(channel).scope = scope

    def reset_to_defaults(self) -> None:
        """Every channel enabled with scope BOTH, PERFORMANCE editor-only."""
        self._ensure_settings().initialize_defaults()

    def _ensure_settings(self) -> LoggerSettings:
        if self.settings is None:
            self.settings = LoggerSettings()
        return self.settings


def format_channel_list(registry: ChannelRegistry) -> str:
    """Format all channels with their state for display.

    Returns:
        Formatted string, one channel per line:
        name, on/off, scope, whether active here, description.
    """
    env = registry.environment.value
    lines = [f"Channels (environment: {env}):"]
    max_name = max(len(ch.value) for ch in Channel)
    for channel in Channel:
        config = registry.get_config(channel)
        if channel is Channel.DEFAULT:
            state, scope = "on", "always"
        elif config is None:
            state, scope = "on", "both*"
        else:
            state = "on" if config.enabled else "off"
            scope = config.scope.value
        active = "active" if registry.is_enabled(channel) else "-"
        desc = CHANNEL_DESCRIPTIONS.get(channel, '')
        lines.append(
            f"  {channel.value:<{max_name}}  {state:<3}  {scope:<6}  {active:<6}  {desc}"
        )
    if registry.settings is None:
        lines.append("  (no settings file: all channels fail open)")
    return "\n".join(lines)
