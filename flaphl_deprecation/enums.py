"""
Severity and lifecycle classifications for deprecated functionality.

Both enums are immutable. Strict lookup goes through the enum constructor
(``Severity(2)`` raises ``ValueError`` on an unknown value); lenient lookup
goes through ``try_from()``, which returns None so callers parsing external
input can branch instead of catching.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any


class Severity(IntEnum):
    """
    Impact level of a deprecation, ordered by urgency.

    - NOTICE: Informational deprecation, no immediate action required
    - WARNING: Deprecation that should be addressed soon
    - ERROR: Critical deprecation requiring immediate attention
    """

    NOTICE = 1
    WARNING = 2
    ERROR = 3

    def label(self) -> str:
        """Get a human-readable label for the severity level."""
        return self.name.capitalize()

    @classmethod
    def try_from(cls, value: Any) -> Severity | None:
        """
        Resolve a raw value or member name to a Severity.

        Args:
            value: Integer value (1-3) or case-insensitive name ("warning")

        Returns:
            Matching Severity, or None if nothing matches
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            key = value.strip()
            if key.isdecimal():
                return cls.try_from(int(key))
            return cls.__members__.get(key.upper())
        return None


class Lifecycle(Enum):
    """
    Stage of a deprecated element on its way to removal.

    - DEPRECATED: Functionality is deprecated but still available
    - SCHEDULED_FOR_REMOVAL: Removal date/version has been announced
    - REMOVED: Functionality has been removed from the codebase
    """

    DEPRECATED = "deprecated"
    SCHEDULED_FOR_REMOVAL = "scheduled_for_removal"
    REMOVED = "removed"

    def is_removal_imminent(self) -> bool:
        """Check if removal is imminent or has occurred."""
        return self in (Lifecycle.SCHEDULED_FOR_REMOVAL, Lifecycle.REMOVED)

    @classmethod
    def try_from(cls, value: Any) -> Lifecycle | None:
        """
        Resolve a raw string value to a Lifecycle.

        Args:
            value: Raw value such as "scheduled_for_removal"

        Returns:
            Matching Lifecycle, or None if nothing matches
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None
