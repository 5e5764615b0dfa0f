"""Default attributes for a single icon.

Kept apart from the store so the renderer can normalize icon data without a
loaded icon set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ..errors import InvalidIconSet
from .models import IconAttributes, IconData

DEFAULT_ATTRIBUTES: dict[str, Any] = {
    "left": 0,
    "top": 0,
    "width": 16,
    "height": 16,
    "rotate": 0,
    "hFlip": False,
    "vFlip": False,
}


def default_vertical_align(height: float) -> float:
    # Icons drawn on a 14px grid sit lower than ones drawn on a 16px grid.
    return -0.143 if height % 7 == 0 and height % 8 != 0 else -0.125


def normalize_icon(data: Mapping[str, Any] | BaseModel) -> IconData:
    """Return a new :class:`IconData` with every missing attribute filled in.

    ``data`` may be a JSON-style mapping (``hFlip``, ``inlineTop``...) or any
    record model. ``None`` values count as absent. The input is not modified.
    Values of the wrong type raise :class:`InvalidIconSet`.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, exclude_none=True)
    try:
        source = IconAttributes.model_validate(dict(data)).as_json()
    except ValidationError as e:
        raise InvalidIconSet(f"Invalid icon data: {e.errors()[0]['msg']}") from e

    item = {**DEFAULT_ATTRIBUTES, **source}
    if "inlineTop" not in item:
        item["inlineTop"] = item["top"]
    if "inlineHeight" not in item:
        item["inlineHeight"] = item["height"]
    if "verticalAlign" not in item:
        item["verticalAlign"] = default_vertical_align(item["height"])
    return IconData.model_validate(item)
