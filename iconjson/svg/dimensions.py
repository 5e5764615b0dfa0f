from __future__ import annotations

import math
import re

# Numbers inside a dimension such as "1.5em" or "calc(100% - 2px)".
_NUMBER_SPLIT_RE = re.compile(r"(-?[0-9.]*[0-9]+[0-9.]*)")


def format_number(value: int | float) -> str:
    """Print a number the way JSON/JS does: ``12`` not ``12.0``, never ``-0``."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _ceil(value: float, precision: int) -> float:
    return math.ceil(value * precision) / precision


def calculate_dimension(size: int | float | str, ratio: float, precision: int = 100) -> int | float | str:
    """Scale one dimension by ``ratio`` to get the other one.

    Results are rounded up to ``1 / precision`` so the icon is never clipped.
    Strings keep their units: every number inside is scaled, the rest is
    copied (``"1em"`` with ratio 0.5 gives ``"0.5em"``).
    """
    if ratio == 1:
        return size
    if isinstance(size, (int, float)) and not isinstance(size, bool):
        return _ceil(size * ratio, precision)

    parts = _NUMBER_SPLIT_RE.split(str(size))
    out: list[str] = []
    # re.split puts the captured numbers at odd indexes.
    for i, part in enumerate(parts):
        if i % 2 == 0:
            out.append(part)
            continue
        try:
            num = float(part)
        except ValueError:
            out.append(part)
            continue
        out.append(format_number(_ceil(num * ratio, precision)))
    return "".join(out)
