"""
Deprecation message construction.

Messages are prefixed with the package and version that introduced the
deprecation and may use printf-style placeholders:

    >>> build_deprecation_message("flaphl/x", "2.1", "Method %s() is deprecated", ["foo"])
    'Since flaphl/x 2.1: Method foo() is deprecated'
"""

import os
from collections.abc import Sequence
from typing import Any

DEBUG_ENV_VAR = "FLAPHL_DEBUG"

FORMATTING_ERROR_SUFFIX = " [Formatting Error]"


def is_debug_enabled() -> bool:
    """Check the debug flag; read on every call so tests and apps can toggle it."""
    return bool(os.environ.get(DEBUG_ENV_VAR))


def _prefix(package: str, version: str) -> str:
    if package and version:
        return f"Since {package} {version}: "
    if package:
        return f"Since {package}: "
    if version:
        return f"Since version {version}: "
    return ""


def build_deprecation_message(
    package: str, version: str, message: str, args: Sequence[Any] = ()
) -> str:
    """
    Build a deprecation message.

    Never raises. A template that does not match its arguments is returned
    verbatim with a diagnostic suffix, detailed only when FLAPHL_DEBUG is set.

    Args:
        package: Package name (may be empty)
        version: Version the deprecation was introduced in (may be empty)
        message: Message template using %-style placeholders
        args: Values substituted into the template; when empty the
            template is used as-is

    Returns:
        The formatted deprecation message
    """
    if not args:
        return _prefix(package, version) + message

    try:
        body = message % tuple(args)
    except Exception as e:
        if is_debug_enabled():
            body = f"{message} [Warning: Failed to format message - {e}]"
        else:
            body = message + FORMATTING_ERROR_SUFFIX

    return _prefix(package, version) + body
