"""Recursive merge for nested request payloads."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping, Optional


def deep_merge(base: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge ``overrides`` into ``base`` and return a new dict.

    When both sides hold a mapping under the same key the two are merged
    recursively. Any other override value replaces the base value, lists
    included: an overridden list of line items is never concatenated.
    Keys only present in ``overrides`` are added. Neither input is modified.

    Example:
        >>> deep_merge({"invoice": {"status": 100, "discount": 0}}, {"invoice": {"status": 200}})
        {'invoice': {'status': 200, 'discount': 0}}
    """
    merged = deepcopy(dict(base))
    for key, value in (overrides or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged
