"""
Configuration for deprecation logging.

A DeprecationConfig holds the log file override, the custom logger sink and
the backtrace depth. Applications can own and inject their own instance; the
module-level helpers operate on a shared default instance for drop-in use.

Log file resolution order:
    1. Path set explicitly on the config
    2. FLAPHL_DEPRECATION_LOG environment variable
    3. <system temp dir>/flaphl_deprecation.log

YAML configuration example:
    deprecation:
      log_file: /var/log/myapp/deprecations.log
      backtrace_limit: 15
"""

from __future__ import annotations

import os
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigError
from .notice import DeprecationHandler, configure_deprecation_handler
from .notice import get_deprecation_handler as _active_handler

LOG_FILE_ENV_VAR = "FLAPHL_DEPRECATION_LOG"
DEFAULT_LOG_FILENAME = "flaphl_deprecation.log"
DEFAULT_BACKTRACE_LIMIT = 10

# Optional section name when the settings live in a larger YAML document
CONFIG_SECTION = "deprecation"

LoggerCallback = Callable[[str, str], None]


def _validate_logger(callback: Any) -> LoggerCallback | None:
    if callback is not None and not callable(callback):
        raise ConfigError(
            "Deprecation logger must be callable", type=type(callback).__name__
        )
    return callback


def _validate_log_file(path: Any) -> str | None:
    if path is None:
        return None
    if not isinstance(path, (str, os.PathLike)):
        raise ConfigError("log_file must be a path string", type=type(path).__name__)
    path = os.fspath(path)
    if not isinstance(path, str):
        raise ConfigError("log_file must be a path string", type="bytes")
    return path


def _validate_limit(limit: Any) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ConfigError("backtrace_limit must be a positive integer", value=limit)
    return limit


class DeprecationConfig:
    """
    Thread-safe holder for deprecation logging settings.

    Slots are swapped under a lock so reconfiguration from one thread never
    tears a read in another. Reads take the same lock briefly; nothing
    blocks beyond that critical section.

    Example:
        >>> config = DeprecationConfig(log_file="/tmp/app-deprecations.log")
        >>> config.resolve_log_file()
        '/tmp/app-deprecations.log'
        >>> config.set_log_file(None)
        >>> config.resolve_log_file().endswith("flaphl_deprecation.log")
        True
    """

    def __init__(
        self,
        log_file: str | os.PathLike[str] | None = None,
        logger: LoggerCallback | None = None,
        backtrace_limit: int = DEFAULT_BACKTRACE_LIMIT,
    ) -> None:
        """
        Initialize the config.

        Args:
            log_file: Explicit log file path (None to use env/default)
            logger: Custom sink called as logger(message, backtrace)
            backtrace_limit: Maximum frames captured per log entry

        Raises:
            ConfigError: If log_file is not a path, logger is not callable
                or the limit is invalid
        """
        self._lock = threading.RLock()
        self._log_file = _validate_log_file(log_file)
        self._logger = _validate_logger(logger)
        self._backtrace_limit = _validate_limit(backtrace_limit)

    @property
    def log_file(self) -> str | None:
        """Explicitly configured log file path, if any."""
        with self._lock:
            return self._log_file

    @property
    def logger(self) -> LoggerCallback | None:
        """Custom logger sink, if any."""
        with self._lock:
            return self._logger

    @property
    def backtrace_limit(self) -> int:
        """Maximum number of frames captured per log entry."""
        with self._lock:
            return self._backtrace_limit

    @property
    def handler(self) -> DeprecationHandler | None:
        """Currently installed notice handler (process-wide)."""
        return _active_handler()

    def set_log_file(self, path: str | os.PathLike[str] | None) -> None:
        """
        Set the log file path, or clear it with None to fall back.

        Raises:
            ConfigError: If path is neither None, a string nor a path object
        """
        path = _validate_log_file(path)
        with self._lock:
            self._log_file = path

    def set_logger(self, callback: LoggerCallback | None) -> None:
        """
        Install or clear the custom logger sink.

        Raises:
            ConfigError: If callback is neither None nor callable
        """
        callback = _validate_logger(callback)
        with self._lock:
            self._logger = callback

    def set_backtrace_limit(self, limit: int) -> None:
        """
        Set the maximum backtrace depth for log entries.

        Raises:
            ConfigError: If limit is not a positive integer
        """
        limit = _validate_limit(limit)
        with self._lock:
            self._backtrace_limit = limit

    def set_handler(
        self, handler: DeprecationHandler | None
    ) -> DeprecationHandler | None:
        """
        Install a notice handler; see configure_deprecation_handler().

        The warnings channel is process-wide, so this affects every config.

        Returns:
            The handler that was active before (None for the default)
        """
        return configure_deprecation_handler(handler)

    def resolve_log_file(self) -> str:
        """
        Resolve the log file path.

        Returns:
            Explicit path if set, else FLAPHL_DEPRECATION_LOG if set,
            else a file in the system temp directory
        """
        explicit = self.log_file
        if explicit:
            return explicit

        from_env = os.environ.get(LOG_FILE_ENV_VAR)
        if from_env:
            return from_env

        return os.path.join(tempfile.gettempdir(), DEFAULT_LOG_FILENAME)

    @classmethod
    def from_env(cls) -> DeprecationConfig:
        """Create a config with the log file taken from FLAPHL_DEPRECATION_LOG."""
        return cls(log_file=os.environ.get(LOG_FILE_ENV_VAR) or None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeprecationConfig:
        """
        Create a config from a mapping.

        Accepts the settings at top level or under a "deprecation" section.

        Raises:
            ConfigError: If a value has the wrong type
        """
        section = data.get(CONFIG_SECTION, data)
        if not isinstance(section, dict):
            raise ConfigError(
                "Deprecation config section must be a mapping", section=CONFIG_SECTION
            )

        log_file = section.get("log_file")
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigError("log_file must be a string", value=log_file)

        limit = section.get("backtrace_limit", DEFAULT_BACKTRACE_LIMIT)
        return cls(log_file=log_file or None, backtrace_limit=limit)

    @classmethod
    def from_yaml(cls, fname: str | Path) -> DeprecationConfig:
        """
        Load a config from a YAML file.

        Args:
            fname: Path to the YAML file

        Raises:
            ConfigError: If the file is missing, unreadable, not valid YAML,
                or contains invalid values
        """
        path = Path(fname)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError("Config file not found", path=str(path)) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path=str(path)) from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config document must be a mapping", path=str(path))
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"DeprecationConfig(log_file={self.log_file!r}, "
            f"logger={self.logger!r}, backtrace_limit={self.backtrace_limit})"
        )


_default_config = DeprecationConfig()


def get_default_config() -> DeprecationConfig:
    """Get the process-wide default config used by the module-level helpers."""
    return _default_config


def get_deprecation_log_file() -> str:
    """Resolve the log file path of the default config."""
    return _default_config.resolve_log_file()


def configure_deprecation_log_file(path: str | os.PathLike[str] | None) -> None:
    """Set the default log file path, or None to fall back to env/temp dir."""
    _default_config.set_log_file(path)


def configure_deprecation_logger(callback: LoggerCallback | None) -> None:
    """
    Install a custom logger on the default config.

    The callback receives (message, backtrace) and replaces file logging
    entirely. Pass None to restore file logging.
    """
    _default_config.set_logger(callback)
