"""
Deprecation inventory for modules and classes.

Collects the Deprecated records attached to the contents of a module or
class and renders them as YAML for documentation generators and review
tooling.

Example:
    >>> import mylib.cache
    >>> records = collect_deprecations(mylib.cache)
    >>> print(dump_deprecations(records))
    - name: mylib.cache.Cache.get
      id: CACHE-001
      severity: 2
      ...
"""

from __future__ import annotations

import inspect
from types import ModuleType
from typing import Any, NamedTuple

import yaml  # type: ignore[import-untyped]

from .metadata import MEMBERS_ATTR, Deprecated, get_deprecations


class DeprecationRecord(NamedTuple):
    """A metadata record together with the qualified name of its element."""

    name: str
    metadata: Deprecated

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a single mapping with the name first."""
        return {"name": self.name, **self.metadata.to_dict()}


def _scan_namespace(prefix: str, owner: Any) -> list[DeprecationRecord]:
    records: list[DeprecationRecord] = []
    namespace = vars(owner)

    for name, value in namespace.items():
        if name.startswith("__") and name.endswith("__"):
            continue
        for metadata in get_deprecations(value):
            records.append(DeprecationRecord(f"{prefix}.{name}", metadata))

    for name, marked in namespace.get(MEMBERS_ATTR, {}).items():
        for metadata in marked:
            records.append(DeprecationRecord(f"{prefix}.{name}", metadata))

    return records


def collect_deprecations(target: ModuleType | type) -> list[DeprecationRecord]:
    """
    Collect deprecation records from a module or class.

    For a module, classes defined in that module are scanned one level
    deep as well, so deprecated methods and constants are included.

    Args:
        target: Module or class to inspect

    Returns:
        Records sorted by qualified element name
    """
    if inspect.ismodule(target):
        prefix = target.__name__
    else:
        prefix = f"{target.__module__}.{target.__qualname__}"

    records = [DeprecationRecord(prefix, m) for m in get_deprecations(target)]
    records.extend(_scan_namespace(prefix, target))

    if inspect.ismodule(target):
        for name, value in vars(target).items():
            if inspect.isclass(value) and value.__module__ == target.__name__:
                records.extend(_scan_namespace(f"{prefix}.{name}", value))

    return sorted(records, key=lambda r: r.name)


def dump_deprecations(records: list[DeprecationRecord]) -> str:
    """Render records as a YAML list, one mapping per record."""
    return yaml.safe_dump(
        [r.to_dict() for r in records], sort_keys=False, allow_unicode=True
    )
