"""Client-side ``filter`` blocks for data source results."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from fss.engine.state import flatten_attributes
from fss.errors import ConfigurationError


def apply_filters(items: Sequence[Mapping[str, Any]], filters: Sequence[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Keep items that satisfy every filter.

    A filter matches when the named attribute equals any of its values, or,
    with ``regex`` set, when any value pattern is found in the attribute.
    Names may address nested attributes with dots; list attributes match when
    any element matches.
    """
    results = list(items)
    for entry in filters:
        name = entry["name"]
        values = [str(value) for value in entry.get("values") or []]
        patterns = _compile(values) if entry.get("regex") else None
        results = [item for item in results if _matches(item, name, values, patterns)]
    return results


def _compile(values: list[str]) -> list[re.Pattern[str]]:
    try:
        return [re.compile(value) for value in values]
    except re.error as exc:
        raise ConfigurationError(f"Invalid filter regex: {exc}") from exc


def _candidates(item: Mapping[str, Any], name: str) -> list[str]:
    flat = flatten_attributes(item)
    if name in flat:
        return [flat[name]]
    count = flat.get(f"{name}.#")
    if count is None:
        return []
    return [flat[f"{name}.{index}"] for index in range(int(count)) if f"{name}.{index}" in flat]


def _matches(
    item: Mapping[str, Any],
    name: str,
    values: list[str],
    patterns: list[re.Pattern[str]] | None,
) -> bool:
    for candidate in _candidates(item, name):
        if patterns is not None:
            if any(pattern.search(candidate) for pattern in patterns):
                return True
        elif candidate in values:
            return True
    return False
