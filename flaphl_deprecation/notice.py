"""
Runtime deprecation notices.

Notices travel through the standard ``warnings`` module as
FlaphlDeprecationWarning, so they respect warning filters, show up in
pytest's warning summary and can be captured with warnings.catch_warnings().
A handler installed with configure_deprecation_handler() receives them
instead of the default display.

Example:
    from flaphl_deprecation import deprecated, trigger_deprecation

    def old_function():
        trigger_deprecation("acme/cache", "2.1", "old_function() is deprecated")
        ...

    @deprecated("acme/cache", "2.1", replacement="Cache.get")
    def fetch(key):
        ...
"""

from __future__ import annotations

import logging
import threading
import warnings
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from .exceptions import ConfigError, FlaphlDeprecationWarning
from .message import build_deprecation_message
from .metadata import Deprecated

F = TypeVar("F", bound=Callable[..., object])

# handler(message, filename, lineno)
DeprecationHandler = Callable[[str, str, int], None]

_logger = logging.getLogger(__name__)
_handler_lock = threading.Lock()

# Entry warnings.filterwarnings("always", category=...) puts in warnings.filters
_ALWAYS_FILTER = ("always", None, FlaphlDeprecationWarning, None, 0)


class _NoticeDispatcher:
    """
    showwarning() replacement routing deprecation notices to a handler.

    Every other warning category is passed on to the showwarning() that was
    active before the first handler was installed. owns_filter records
    whether the "always" filter was added by the install, so uninstalling
    removes only what was added.
    """

    def __init__(
        self,
        handler: DeprecationHandler,
        fallback: Callable[..., Any],
        owns_filter: bool = False,
    ):
        self.handler = handler
        self.fallback = fallback
        self.owns_filter = owns_filter

    def __call__(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: Any = None,
        line: str | None = None,
    ) -> None:
        if issubclass(category, FlaphlDeprecationWarning):
            self.handler(str(message), filename, lineno)
        else:
            self.fallback(message, category, filename, lineno, file, line)


def get_deprecation_handler() -> DeprecationHandler | None:
    """Get the currently installed handler, or None if the default is active."""
    current = warnings.showwarning
    if isinstance(current, _NoticeDispatcher):
        return current.handler
    return None


def configure_deprecation_handler(
    handler: DeprecationHandler | None,
) -> DeprecationHandler | None:
    """
    Install a handler for deprecation notices.

    The handler is called as handler(message, filename, lineno) for every
    notice raised by trigger_deprecation(); other warnings keep their normal
    display. Installing a handler also makes notices always shown, so
    repeated notices from the same line all reach it.

    Args:
        handler: Handler to install, or None to restore the default display

    Returns:
        The previously installed handler (None if the default was active).
        Passing it back to this function restores the previous behavior.

    Raises:
        ConfigError: If handler is neither None nor callable

    Example:
        >>> previous = configure_deprecation_handler(
        ...     lambda msg, file, line: print(f"{file}:{line}: {msg}")
        ... )
        >>> # ... later
        >>> configure_deprecation_handler(previous)
    """
    if handler is not None and not callable(handler):
        raise ConfigError(
            "Deprecation handler must be callable", type=type(handler).__name__
        )

    with _handler_lock:
        current = warnings.showwarning
        if isinstance(current, _NoticeDispatcher):
            previous: DeprecationHandler | None = current.handler
            base = current.fallback
            owns_filter = current.owns_filter
        else:
            previous = None
            base = current
            owns_filter = False

        if handler is None:
            warnings.showwarning = base
            if owns_filter and _ALWAYS_FILTER in warnings.filters:
                warnings.filters.remove(_ALWAYS_FILTER)
        else:
            if _ALWAYS_FILTER not in warnings.filters:
                warnings.filterwarnings("always", category=FlaphlDeprecationWarning)
                owns_filter = True
            warnings.showwarning = _NoticeDispatcher(handler, base, owns_filter)

    return previous


def trigger_deprecation(
    package: str, version: str, message: str, *args: Any, stacklevel: int = 2
) -> None:
    """
    Trigger a deprecation notice.

    Best effort: if the notice cannot be delivered (a filter turns it into
    an error, or the installed handler fails) the failure is logged at
    debug level and the caller carries on.

    Args:
        package: Package name
        version: Version the deprecation was introduced in
        message: Message template using %-style placeholders
        *args: Values substituted into the template
        stacklevel: Frame the notice is attributed to; 2 is the caller
    """
    text = build_deprecation_message(package, version, message, args)
    try:
        warnings.warn(text, FlaphlDeprecationWarning, stacklevel=stacklevel)
    except Exception as e:
        _logger.debug(
            "deprecation notice not delivered",
            extra={"notice": text, "exception": e},
        )


def deprecated(
    package: str, version: str, replacement: str | None = None, **metadata: Any
) -> Callable[[F], F]:
    """
    Mark a function or method as deprecated.

    Emits a deprecation notice, attributed to the caller, each time the
    decorated function is called, and attaches a Deprecated record to it.

    Args:
        package: Package the deprecation belongs to (e.g., "acme/cache")
        version: Version in which the function was deprecated (e.g., "0.2.0")
        replacement: Optional name of the replacement function/method
        **metadata: Extra Deprecated fields (id, removal_version, severity...).
            An explicit deprecated_in or alternative here takes precedence
            over version and replacement on the attached record.

    Returns:
        Decorator function that wraps the original function

    Example:
        @deprecated("acme/cache", "0.2.0", replacement="new_function")
        def old_function():
            '''This function is deprecated.'''
            return "old"
    """
    fields: dict[str, Any] = {"deprecated_in": version, "alternative": replacement}
    fields.update(metadata)
    record = Deprecated(**fields)

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> object:
            msg = f"{func.__qualname__}() is deprecated"
            if replacement:
                msg += f", use {replacement} instead"
            # Frames: warnings.warn <- trigger_deprecation <- wrapper <- caller
            trigger_deprecation(package, version, msg, stacklevel=3)
            return func(*args, **kwargs)

        return record(wrapper)  # type: ignore[return-value]

    return decorator
