"""
Exception hierarchy and warning category for the deprecation toolkit.

Runtime failures inside the toolkit (formatting, log writes) are recovered
locally and never surface here. These exceptions cover caller mistakes only,
such as an unreadable configuration file or a non-callable sink.
"""

from typing import Any


class DeprecationError(Exception):
    """
    Base exception for all deprecation toolkit errors.

    Example:
        try:
            config = DeprecationConfig.from_yaml("etc/deprecation.yaml")
        except DeprecationError as e:
            logger.error(f"Deprecation setup failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(DeprecationError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found
        - Invalid YAML syntax
        - Invalid log file or backtrace limit value
        - Custom logger that is not callable
    """

    pass


class FlaphlDeprecationWarning(DeprecationWarning):
    """Warning category carried by notices from trigger_deprecation()."""

    pass
