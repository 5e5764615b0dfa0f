"""Storage optimization for structured icon set data.

:func:`optimize` hoists the most common value of selected attributes to the
root of the set, :func:`deoptimize` pushes root values back into the icons.
Both return new data and leave their input untouched.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

OPTIMIZE_PROPS = (
    "width",
    "height",
    "top",
    "left",
    "inlineHeight",
    "inlineTop",
    "verticalAlign",
)


def _value_key(value: Any) -> tuple[bool, Any]:
    # True == 1 in Python; JSON keeps them apart.
    return isinstance(value, bool), value


def most_common_value(values: Iterable[Any]) -> tuple[Any, int]:
    """Most frequent value and its count; on a tie the first value to reach that count wins."""
    counters: dict[tuple[bool, Any], int] = {}
    best_value: Any = None
    best_count = 0
    for value in values:
        key = _value_key(value)
        count = counters.get(key, 0) + 1
        counters[key] = count
        if count > best_count:
            best_value, best_count = value, count
    return best_value, best_count


def optimize(data: Mapping[str, Any], props: Iterable[str] | None = None) -> dict[str, Any]:
    """Move attribute values shared by several icons to the root of the set.

    A property is only considered when every icon defines it. Icons whose value
    differs from the hoisted one keep their own value. An empty ``aliases``
    object is dropped.
    """
    result = copy.deepcopy(dict(data))
    icons: dict[str, dict[str, Any]] = result.get("icons") or {}

    if "aliases" in result and not result["aliases"]:
        del result["aliases"]

    for prop in props or OPTIMIZE_PROPS:
        if not icons or any(prop not in icon for icon in icons.values()):
            continue

        value, count = most_common_value(icon[prop] for icon in icons.values())
        if count < 2:
            continue

        result[prop] = value
        key = _value_key(value)
        for icon in icons.values():
            if _value_key(icon[prop]) == key:
                del icon[prop]

    return result


def deoptimize(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy every root number/boolean into the icons that lack it, then drop it from the root."""
    result = copy.deepcopy(dict(data))
    icons: dict[str, dict[str, Any]] = result.get("icons") or {}

    for prop in [key for key, value in result.items() if isinstance(value, (bool, int, float))]:
        value = result.pop(prop)
        for icon in icons.values():
            icon.setdefault(prop, value)

    return result
