"""
Declarative deprecation metadata.

A ``Deprecated`` record carries structured information about a deprecated
code element. It has no runtime behavior: attaching one never wraps or
changes the element, it only makes the record discoverable through
``get_deprecations()`` for documentation generators, linters and reports.

Example:
    from flaphl_deprecation import Deprecated, Severity, mark_deprecated

    @Deprecated(
        id="CACHE-001",
        deprecated_in="2.1",
        alternative="Use Cache.get() instead",
        removal_version="3.0",
        severity=Severity.WARNING,
    )
    def old_cache_method():
        ...

    class Cache:
        TTL = 60

    mark_deprecated(Cache, "TTL", Deprecated(id="CACHE-002"))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from .enums import Lifecycle, Severity

T = TypeVar("T")

# Attribute names used to store records on the marked element / its owner
METADATA_ATTR = "__deprecations__"
MEMBERS_ATTR = "__deprecated_members__"


@dataclass(frozen=True)
class Deprecated:
    """
    Immutable deprecation metadata attached to a code element.

    Instances double as decorators for functions, methods, classes,
    classmethods, staticmethods and properties. Use mark_deprecated() for
    members that cannot be decorated, such as class constants.

    Attributes:
        id: Unique deprecation identifier (e.g., 'CACHE-001')
        deprecated_in: Version when deprecated
        alternative: Recommended replacement or migration path
        removal_version: Version when this will be removed
        docs_url: URL to detailed deprecation documentation
        severity: Impact level of this deprecation
        lifecycle: Current stage in deprecation journey
        created_at: Unix timestamp when deprecation was added
        context: Additional context-specific metadata (read-only)
    """

    id: str | None = None
    deprecated_in: str | None = None
    alternative: str | None = None
    removal_version: str | None = None
    docs_url: str | None = None
    severity: Severity = Severity.NOTICE
    lifecycle: Lifecycle = Lifecycle.DEPRECATED
    created_at: int | None = None
    # Left out of the hash: mapping proxies are unhashable
    context: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dict cannot leak in
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    def __call__(self, target: T) -> T:
        """Attach this record to target and return target unchanged."""
        _attach(target, self)
        return target

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of all fields, with enums reduced to raw values."""
        return {
            "id": self.id,
            "deprecated_in": self.deprecated_in,
            "alternative": self.alternative,
            "removal_version": self.removal_version,
            "docs_url": self.docs_url,
            "severity": self.severity.value,
            "lifecycle": self.lifecycle.value,
            "created_at": self.created_at,
            "context": dict(self.context),
        }


def _storage_target(target: Any) -> Any:
    """Resolve the object that physically stores the records."""
    if isinstance(target, property):
        return target.fget
    # classmethod, staticmethod and bound methods keep them on the function
    return getattr(target, "__func__", target)


def _attach(target: Any, metadata: Deprecated) -> None:
    holder = _storage_target(target)
    existing = getattr(holder, "__dict__", {}).get(METADATA_ATTR, ())
    try:
        setattr(holder, METADATA_ATTR, (*existing, metadata))
    except (AttributeError, TypeError) as e:
        raise TypeError(
            f"Cannot attach deprecation metadata to {type(target).__name__}; "
            f"use mark_deprecated() on its owner instead"
        ) from e


def mark_deprecated(owner: Any, name: str, metadata: Deprecated) -> None:
    """
    Attach metadata to a named member of a class or module.

    Used for elements that cannot carry attributes themselves, such as
    class constants, instance attributes and module-level constants.

    Args:
        owner: Class or module declaring the member
        name: Member name
        metadata: Record to attach
    """
    members: dict[str, tuple[Deprecated, ...]] = dict(
        vars(owner).get(MEMBERS_ATTR, {})
    )
    members[name] = (*members.get(name, ()), metadata)
    setattr(owner, MEMBERS_ATTR, members)


def _own_records(element: Any) -> tuple[Deprecated, ...]:
    holder = _storage_target(element)
    # Read the element's own namespace so subclasses don't report a
    # base class's records as their own
    namespace = getattr(holder, "__dict__", None)
    if namespace is None:
        return ()
    return tuple(namespace.get(METADATA_ATTR, ()))


def get_deprecations(element: Any, member: str | None = None) -> tuple[Deprecated, ...]:
    """
    Get the deprecation records attached to an element.

    Args:
        element: Function, class, property, module or other marked object
        member: Optional member name to query on a class or module

    Returns:
        Tuple of records in declaration order (possibly empty)

    Example:
        >>> get_deprecations(old_cache_method)[0].id
        'CACHE-001'
        >>> get_deprecations(Cache, "TTL")[0].id
        'CACHE-002'
    """
    if member is None:
        return _own_records(element)

    namespace = getattr(element, "__dict__", {})
    marked = tuple(namespace.get(MEMBERS_ATTR, {}).get(member, ()))
    if member in namespace:
        return _own_records(namespace[member]) + marked
    return marked


def is_deprecated(element: Any, member: str | None = None) -> bool:
    """Check if an element (or one of its members) carries any record."""
    return bool(get_deprecations(element, member))
