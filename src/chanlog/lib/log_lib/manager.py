"""
LogRuntime and Logger — the emission path.

A LogRuntime bundles everything loggers share: the channel registry, the
rate limiter, the context stack, the sink and a runtime-wide on/off
switch. Loggers are cheap per-subsystem handles carrying a prefix, a
colour and a channel.

Gate sequence for every emission, short-circuiting left to right:

    runtime.enabled
      -> logger.enabled
        -> registry.is_enabled(logger.channel)
          -> limiter.should_emit(key, interval)     (throttled calls only)
            -> "<prefix>:: <context><message>"  ->  sink.write()

A call rejected at any gate has no side effect, except that the rate
limiter counts calls it suppresses itself.

Usage::

    runtime = init_runtime(settings=load_settings())
    audio = Logger("Audio", color=(80, 200, 255), channel=Channel.AUDIO)
    with audio.context("Boot"):
        audio.info("mixer ready")           # Audio:: [Boot] mixer ready
    audio.log_throttled("buffer underrun", 1.0, LogLevel.WARNING)
"""

import itertools
import os
from typing import Any, Callable, Optional, Union

from .asserts import Assertion
from .channels import Channel, Environment
from .context import ContextStack
from .levels import LogLevel
from .ratelimit import RateLimiter
from .registry import ChannelRegistry
from .settings import DEFAULT_RATE_LIMIT_SECONDS, LoggerSettings
from .sinks import RGB, WHITE, StreamSink


USE_LOGS_ENV_VAR = "CHANLOG_USE_LOGS"


class LogRuntime:
    """Shared state for a group of loggers (normally one per process).

    Args:
        settings: Channel/rate-limit configuration; None fails open.
        environment: Host environment (default: from CHANLOG_ENV).
        sink: Destination for formatted lines (default: StreamSink()).
        limiter: RateLimiter instance (default: a fresh one).
        context: ContextStack instance (default: a fresh one).
        enabled: Runtime-wide gate checked before anything else.
        pause_hook: Called when an assertion asks to pause the host.
    """

    def __init__(
        self,
        settings: Optional[LoggerSettings] = None,
        environment: Optional[Environment] = None,
        sink=None,
        limiter: Optional[RateLimiter] = None,
        context: Optional[ContextStack] = None,
        enabled: bool = True,
        pause_hook: Optional[Callable[[], None]] = None,
    ):
        self.registry = ChannelRegistry(settings, environment)
        self.sink = sink if sink is not None else StreamSink()
        self.limiter = limiter if limiter is not None else RateLimiter()
        self.context = context if context is not None else ContextStack()
        self.enabled = enabled
        self.pause_hook = pause_hook
        self.paused = False

    @property
    def settings(self) -> Optional[LoggerSettings]:
        return self.registry.settings

    @property
    def environment(self) -> Environment:
        return self.registry.environment

    @property
    def is_editor(self) -> bool:
        return self.registry.environment is Environment.EDITOR

    def pause(self) -> None:
        """Ask the host to pause (editor play mode, game loop, ...)."""
        self.paused = True
        if self.pause_hook is not None:
            self.pause_hook()

    def reset(self) -> None:
        """Drop rate-limit and context state; keep settings and sink."""
        self.limiter.clear()
        self.context.clear()
        self.paused = False


# =============================================================================
# Module-level singleton
# =============================================================================

_runtime: Optional[LogRuntime] = None


def use_logs_from_env(environ=None) -> bool:
    """False when CHANLOG_USE_LOGS is 0/false/off/no, else True."""
    environ = os.environ if environ is None else environ
    value = (environ.get(USE_LOGS_ENV_VAR) or '').strip().lower()
    return value not in ('0', 'false', 'off', 'no')


def init_runtime(settings: Optional[LoggerSettings] = None,
                 environment: Optional[Environment] = None,
                 sink=None, enabled: Optional[bool] = None,
                 **kwargs: Any) -> LogRuntime:
    """Initialize the module-level LogRuntime singleton.

    Call once at program startup, after loading settings.

    Args:
        settings: Loaded LoggerSettings, or None to fail open.
        environment: Host environment override.
        sink: Output sink (default: StreamSink to stderr).
        enabled: Runtime gate; None reads CHANLOG_USE_LOGS.
        **kwargs: Passed through to LogRuntime (limiter, context, pause_hook).

    Returns:
        The initialized LogRuntime instance
    """
    global _runtime
    if enabled is None:
        enabled = use_logs_from_env()
    _runtime = LogRuntime(settings=settings, environment=environment,
                          sink=sink, enabled=enabled, **kwargs)
    return _runtime


def get_runtime() -> LogRuntime:
    """Get the module-level LogRuntime, creating a default if needed."""
    global _runtime
    if _runtime is None:
        _runtime = LogRuntime(enabled=use_logs_from_env())
    return _runtime


# =============================================================================
# Logger
# =============================================================================

_identities = itertools.count(1)

Condition = Union[bool, Callable[[], bool]]
Message = Union[str, Callable[[], str]]


class Logger:
    """Per-subsystem logging handle.

    Args:
        prefix: Shown as "<prefix>:: " before each message (omitted if empty).
        color: RGB colour hint passed to the sink.
        enabled: Instance-local switch, independent of channel policy.
        channel: Channel consulted in the runtime's registry.
        runtime: LogRuntime to use; None resolves get_runtime() per call,
            so loggers created at import time follow a later init_runtime().
    """

    def __init__(self, prefix: str = "", color: RGB = WHITE,
                 enabled: bool = True, channel: Channel = Channel.DEFAULT,
                 runtime: Optional[LogRuntime] = None):
        self._prefix = prefix
        self._color = color
        self._enabled = enabled
        self._channel = channel
        self._runtime = runtime
        self.identity = f"{prefix or 'logger'}#{next(_identities)}"

    def __repr__(self):
        return (f"Logger(prefix={self._prefix!r}, channel={self._channel.name}, "
                f"enabled={self._enabled})")

    @property
    def runtime(self) -> LogRuntime:
        return self._runtime if self._runtime is not None else get_runtime()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def color(self) -> RGB:
        return self._color

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def channel(self) -> Channel:
        return self._channel

    def toggle_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_prefix(self, prefix: str) -> None:
        self._prefix = prefix

    def set_color(self, color: RGB) -> None:
        self._color = color

    # -- gating ---------------------------------------------------------------

    def is_active(self) -> bool:
        """True if a plain emit() right now would pass every gate."""
        return self._passes_gates(self.runtime)

    def _passes_gates(self, runtime: LogRuntime) -> bool:
        if not runtime.enabled:
            return False
        if not self._enabled:
            return False
        return runtime.registry.is_enabled(self._channel)

    def _format(self, runtime: LogRuntime, message: str) -> str:
        text = runtime.context.current_prefix() + str(message)
        if self._prefix:
            text = f"{self._prefix}:: {text}"
        return text

    # -- emission -------------------------------------------------------------

    def emit(self, message: str, level: LogLevel = LogLevel.INFO,
             target: Any = None) -> bool:
        """Emit ``message`` if every gate passes.

        Returns:
            True if the message reached the sink
        """
        runtime = self.runtime
        if not self._passes_gates(runtime):
            return False
        return self._write(runtime, message, level, target)

    def info(self, message: str, target: Any = None) -> bool:
        return self.emit(message, LogLevel.INFO, target)

    def warning(self, message: str, target: Any = None) -> bool:
        return self.emit(message, LogLevel.WARNING, target)

    def error(self, message: str, target: Any = None) -> bool:
        return self.emit(message, LogLevel.ERROR, target)

    def fatal(self, message: str, target: Any = None) -> bool:
        return self.emit(message, LogLevel.FATAL, target)

    def log_if(self, condition: Condition, message: Message,
               level: LogLevel = LogLevel.INFO, target: Any = None) -> bool:
        """Emit only when ``condition`` holds.

        ``condition`` and ``message`` may be plain values or zero-argument
        callables. A callable message is only built after the condition
        passed, so expensive formatting is skipped when nothing is logged.
        """
        passed = condition() if callable(condition) else condition
        if not passed:
            return False
        text = message() if callable(message) else message
        return self.emit(text, level, target)

    def log_throttled(self, message: str, min_interval: Optional[float] = None,
                      level: LogLevel = LogLevel.INFO, target: Any = None,
                      key: Optional[str] = None) -> bool:
        """Emit at most once per ``min_interval`` seconds per message.

        The throttle key is this logger's identity plus the message text,
        so two loggers never throttle each other. Pass ``key`` to group
        messages whose text varies (e.g. embeds a frame counter).

        ``min_interval=None`` uses the settings' default interval. When the
        settings switch rate limiting off the limiter is bypassed.

        An accepted message reports how many copies were dropped since the
        previous one: "<message> (suppressed <N>x)".
        """
        runtime = self.runtime
        if not self._passes_gates(runtime):
            return False

        settings = runtime.settings
        if settings is not None and not settings.rate_limiting:
            return self._write(runtime, message, level, target)
        if min_interval is None:
            min_interval = (settings.default_rate_limit if settings is not None
                            else DEFAULT_RATE_LIMIT_SECONDS)

        throttle_key = f"{self.identity}:{key if key is not None else message}"
        suppressed = runtime.limiter.suppressed_count(throttle_key)
        if not runtime.limiter.should_emit(throttle_key, min_interval):
            return False
        if suppressed > 0:
            message = f"{message} (suppressed {suppressed}x)"
        return self._write(runtime, message, level, target)

    def _write(self, runtime: LogRuntime, message: str, level: LogLevel,
               target: Any) -> bool:
        runtime.sink.write(self._format(runtime, message), level,
                           self._color, target)
        return True

    # -- context and assertions -----------------------------------------------

    def context(self, name: str):
        """Context manager adding ``name`` to the shared context prefix."""
        return self.runtime.context.scope(name)

    def assert_that(self, condition: bool, message: str) -> Assertion:
        """Check ``condition`` now; on failure log an error immediately.

        Returns an Assertion handle for chained follow-up actions::

            log.assert_that(hp >= 0, "hp went negative").on_failure(reset)
        """
        return Assertion(self, bool(condition), message)

    def validate_not_null(self, value: Any, name: str) -> Assertion:
        return self.assert_that(value is not None, f"{name} cannot be null")

    def validate_range(self, value, minimum, maximum, name: str) -> Assertion:
        """Assert ``minimum <= value <= maximum``.

        An inverted range (minimum > maximum) or a value that cannot be
        compared with the bounds is reported as a failed assertion rather
        than raised.
        """
        message = f"{name} must be between {minimum} and {maximum}, but was {value}"
        try:
            if minimum > maximum:
                return self.assert_that(
                    False,
                    f"{name} range is invalid: min {minimum} is greater than max {maximum}",
                )
            in_range = minimum <= value <= maximum
        except TypeError:
            in_range = False
        return self.assert_that(in_range, message)
