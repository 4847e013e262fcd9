"""
Deprecation logging with call-stack context.

Each entry records the formatted message and a backtrace. Entries go to a
custom sink when one is configured, otherwise they are appended to the
deprecation log file:

    [2026-10-19 14:03:11] DEPRECATION: Since acme/cache 2.1: get() is deprecated
    Backtrace:
    #0 Cache.get() called at [/app/cache.py:42]
    #1 main() called at [/app/run.py:7]

Logging never raises. If the file cannot be written, a one-line summary is
emitted on the "flaphl_deprecation" logger instead.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from .backtrace import get_deprecation_backtrace
from .config import DeprecationConfig, get_default_config
from .message import build_deprecation_message

try:
    import fcntl
except ImportError:  # Windows: no advisory locking
    fcntl = None  # type: ignore[assignment]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger(__name__)
# Fallback channel for entries that could not be written to the log file
_fallback_logger = logging.getLogger("flaphl_deprecation")


def format_log_entry(message: str, backtrace: str, when: datetime | None = None) -> str:
    """Format a log file entry."""
    timestamp = (when or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"[{timestamp}] DEPRECATION: {message}\nBacktrace:\n{backtrace}\n\n"


def _lock(fd: int) -> bool:
    """Try to take an exclusive lock without blocking."""
    if fcntl is None:
        return False
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        return True
    except OSError:
        return False


def _append(path: str, entry: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        # Write anyway when the lock is unavailable rather than wait on it
        locked = _lock(f.fileno())
        try:
            f.write(entry)
            f.flush()
        finally:
            if locked:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class DeprecationLogger:
    """
    Writes deprecation entries through a DeprecationConfig.

    Example:
        >>> config = DeprecationConfig(log_file="/tmp/app-deprecations.log")
        >>> logger = DeprecationLogger(config)
        >>> logger.log("acme/cache", "2.1", "%s() is deprecated", "Cache.get")
    """

    def __init__(self, config: DeprecationConfig | None = None) -> None:
        """
        Initialize the logger.

        Args:
            config: Config to use (defaults to the process-wide default config)
        """
        self._config = config

    @property
    def config(self) -> DeprecationConfig:
        """Config in effect; the default config is looked up on each access."""
        return self._config if self._config is not None else get_default_config()

    def log(self, package: str, version: str, message: str, *args: Any) -> None:
        """
        Log a deprecation notice with a backtrace.

        Args:
            package: Package name
            version: Version the deprecation was introduced in
            message: Message template using %-style placeholders
            *args: Values substituted into the template
        """
        config = self.config
        text = build_deprecation_message(package, version, message, args)
        backtrace = get_deprecation_backtrace(config.backtrace_limit)

        sink = config.logger
        if sink is not None:
            try:
                sink(text, backtrace)
            except Exception as e:
                _logger.warning(
                    "custom deprecation logger failed",
                    extra={"notice": text, "exception": e},
                )
            return

        path = config.resolve_log_file()
        try:
            _append(path, format_log_entry(text, backtrace))
        except (OSError, ValueError) as e:
            _fallback_logger.error("DEPRECATION: %s", text)
            _logger.debug(
                "cannot write deprecation log", extra={"path": path, "exception": e}
            )
            return

        _logger.debug("deprecation logged", extra={"path": path})


def log_deprecation(package: str, version: str, message: str, *args: Any) -> None:
    """
    Log a deprecation notice with a backtrace using the default config.

    Args:
        package: Package name
        version: Version the deprecation was introduced in
        message: Message template using %-style placeholders
        *args: Values substituted into the template
    """
    DeprecationLogger().log(package, version, message, *args)
