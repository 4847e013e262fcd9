from importlib.metadata import PackageNotFoundError, version

from .backtrace import INTERNAL_FUNCTIONS, get_deprecation_backtrace
from .config import (
    DEFAULT_LOG_FILENAME,
    LOG_FILE_ENV_VAR,
    DeprecationConfig,
    configure_deprecation_log_file,
    configure_deprecation_logger,
    get_default_config,
    get_deprecation_log_file,
)
from .enums import Lifecycle, Severity
from .exceptions import ConfigError, DeprecationError, FlaphlDeprecationWarning
from .logger import DeprecationLogger, log_deprecation
from .message import DEBUG_ENV_VAR, build_deprecation_message, is_debug_enabled
from .metadata import Deprecated, get_deprecations, is_deprecated, mark_deprecated
from .notice import (
    configure_deprecation_handler,
    deprecated,
    get_deprecation_handler,
    trigger_deprecation,
)
from .report import DeprecationRecord, collect_deprecations, dump_deprecations

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("flaphl-deprecation")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Enums
    "Severity",
    "Lifecycle",
    # Metadata
    "Deprecated",
    "get_deprecations",
    "is_deprecated",
    "mark_deprecated",
    # Notices
    "trigger_deprecation",
    "configure_deprecation_handler",
    "get_deprecation_handler",
    "deprecated",
    # Logging
    "DeprecationLogger",
    "log_deprecation",
    "build_deprecation_message",
    "is_debug_enabled",
    "get_deprecation_backtrace",
    "INTERNAL_FUNCTIONS",
    # Configuration
    "DeprecationConfig",
    "get_default_config",
    "get_deprecation_log_file",
    "configure_deprecation_log_file",
    "configure_deprecation_logger",
    "LOG_FILE_ENV_VAR",
    "DEBUG_ENV_VAR",
    "DEFAULT_LOG_FILENAME",
    # Reports
    "DeprecationRecord",
    "collect_deprecations",
    "dump_deprecations",
    # Exceptions
    "DeprecationError",
    "ConfigError",
    "FlaphlDeprecationWarning",
]
