"""chanlog — channel-filtered, rate-limited logging for interactive hosts.

Loggers decorate messages with a prefix, colour hint and scoped context,
gate them through per-channel settings and a per-message rate limiter,
and hand the result to a pluggable sink.
"""

from chanlog._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
