"""
LoggerSettings — the configuration source consulted by ChannelRegistry.

Holds the per-channel configuration list and the rate-limiting defaults.
Converts to and from the plain-dict form stored in JSON settings files:

    {
      "version": 1,
      "channels": {
        "audio":       {"enabled": true, "scope": "both"},
        "performance": {"enabled": true, "scope": "editor"}
      },
      "rate_limiting": {"enabled": true, "default_interval": 0.1}
    }

Entries naming an unknown channel, scope or state are skipped when loading.
States may be JSON booleans or the aliases accepted on the command line
("off", "yes", ...).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .channels import (
    Channel, ChannelConfig, Scope, EDITOR_ONLY_DEFAULTS,
    parse_channel, parse_scope, parse_state,
)


SETTINGS_VERSION = 1
DEFAULT_RATE_LIMIT_SECONDS = 0.1


@dataclass
class LoggerSettings:
    channel_configs: List[ChannelConfig] = field(default_factory=list)
    rate_limiting: bool = True
    default_rate_limit: float = DEFAULT_RATE_LIMIT_SECONDS

    def get(self, channel: Channel) -> Optional[ChannelConfig]:
        """Return the entry for ``channel``, or None if unconfigured."""
        for cfg in self.channel_configs:
            if cfg.channel == channel:
                return cfg
        return None

    def upsert(self, channel: Channel) -> ChannelConfig:
        """Return the entry for ``channel``, creating a default one if absent."""
        cfg = self.get(channel)
        if cfg is None:
            cfg = ChannelConfig(channel=channel)
            self.channel_configs.append(cfg)
        return cfg

    def initialize_defaults(self) -> None:
        """Replace all entries with one default entry per real channel."""
        self.channel_configs.clear()
        for channel in Channel:
            if channel is Channel.DEFAULT:
                continue
            scope = Scope.EDITOR_ONLY if channel in EDITOR_ONLY_DEFAULTS else Scope.BOTH
            self.channel_configs.append(ChannelConfig(channel, scope, True))

    @classmethod
    def defaults(cls) -> "LoggerSettings":
        settings = cls()
        settings.initialize_defaults()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": SETTINGS_VERSION,
            "channels": {
                cfg.channel.value: {"enabled": cfg.enabled, "scope": cfg.scope.value}
                for cfg in self.channel_configs
            },
            "rate_limiting": {
                "enabled": self.rate_limiting,
                "default_interval": self.default_rate_limit,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggerSettings":
        settings = cls()
        channels = data.get("channels") or {}
        if isinstance(channels, dict):
            for name, entry in channels.items():
                try:
                    channel = parse_channel(name)
                    entry = entry if isinstance(entry, dict) else {}
                    scope = parse_scope(entry.get("scope", Scope.BOTH.value))
                    enabled = parse_state(entry.get("enabled", True))
                except (ValueError, AttributeError):
                    continue
                if channel is Channel.DEFAULT:
                    continue
                settings.channel_configs.append(
                    ChannelConfig(channel, scope, enabled)
                )

        rate = data.get("rate_limiting") or {}
        if isinstance(rate, dict):
            try:
                settings.rate_limiting = parse_state(rate.get("enabled", True))
            except ValueError:
                settings.rate_limiting = True
            try:
                settings.default_rate_limit = float(
                    rate.get("default_interval", DEFAULT_RATE_LIMIT_SECONDS))
            except (TypeError, ValueError):
                settings.default_rate_limit = DEFAULT_RATE_LIMIT_SECONDS
        return settings
