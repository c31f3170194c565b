"""
log_lib — channel-gated, rate-limited logging core.

A reusable logging library providing:
- Channels with per-channel enable flag and editor/build scope
- Fail-open channel policy when configuration is missing
- Per-message rate limiting with suppressed-count reporting
- Nested context labels prefixed onto messages
- Fluent assertions that log on failure
- Pluggable sinks, including a bounded history with text export

Public API:
    LogRuntime        — shared registry, limiter, context stack and sink
    init_runtime      — singleton initialization
    get_runtime       — access singleton
    Logger            — per-subsystem logging handle
    Assertion         — result of Logger.assert_that()
    LogLevel          — INFO / WARNING / ERROR / FATAL
    Channel, Scope, Environment, ChannelConfig
    ChannelRegistry   — channel policy
    LoggerSettings    — configuration source
    RateLimiter       — per-key throttling
    ContextStack      — nested context prefix
    StreamSink, LogHistory, FanoutSink, LogEntry
    parse_channel_spec, format_channel_list
"""

from .asserts import Assertion
from .channels import (
    Channel, ChannelConfig, ChannelSpec, Environment, Scope,
    CHANNEL_DESCRIPTIONS, EDITOR_ONLY_DEFAULTS,
    detect_environment, parse_channel, parse_channel_spec, parse_scope, parse_state,
)
from .context import ContextStack
from .levels import LogLevel, parse_level
from .manager import LogRuntime, Logger, init_runtime, get_runtime
from .ratelimit import RateLimiter
from .registry import ChannelRegistry, format_channel_list
from .settings import LoggerSettings
from .sinks import FanoutSink, LogEntry, LogHistory, StreamSink, WHITE

__all__ = [
    'LogRuntime', 'Logger', 'init_runtime', 'get_runtime',
    'Assertion', 'LogLevel', 'parse_level',
    'Channel', 'ChannelConfig', 'ChannelSpec', 'Environment', 'Scope',
    'CHANNEL_DESCRIPTIONS', 'EDITOR_ONLY_DEFAULTS',
    'detect_environment', 'parse_channel', 'parse_channel_spec', 'parse_scope', 'parse_state',
    'ChannelRegistry', 'format_channel_list', 'LoggerSettings',
    'RateLimiter', 'ContextStack',
    'StreamSink', 'LogHistory', 'FanoutSink', 'LogEntry', 'WHITE',
]
