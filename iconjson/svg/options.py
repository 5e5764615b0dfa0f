from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Props interpreted by the renderer; anything else belongs to the <svg> node.
ICON_ATTRIBUTES = (
    "width",
    "height",
    "inline",
    "hFlip",
    "vFlip",
    "flip",
    "rotate",
    "align",
    "color",
    "box",
)

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


def is_true(value: Any) -> bool:
    """Boolean-like option value: ``True``, ``"true"`` or ``"1"``."""
    return value is True or value in ("true", "1")


def split_tokens(value: str | None) -> list[str]:
    if not value:
        return []
    return [token for token in _TOKEN_SPLIT_RE.split(value.lower()) if token]


def split_attributes(props: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split props into (icon options, passthrough node attributes)."""
    icon: dict[str, Any] = {}
    node: dict[str, Any] = {}
    for name, value in props.items():
        (icon if name in ICON_ATTRIBUTES else node)[name] = value
    return icon, node


class RenderOptions(BaseModel):
    """Presentation options, same names as the Iconify API query string.

    ``width``/``height``: unset for defaults, ``"auto"`` for the icon's own
    size, ``False`` to leave the attribute out, anything else verbatim.
    Values that cannot be used are dropped instead of failing the render.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    width: bool | int | float | str | None = None
    height: bool | int | float | str | None = None
    inline: Any = None
    h_flip: Any = Field(default=None, alias="hFlip")
    v_flip: Any = Field(default=None, alias="vFlip")
    flip: str | None = None
    rotate: int | float | str | None = None
    align: str | None = None
    color: str | None = None
    box: Any = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def drop_unusable_dimension(cls, value: Any) -> Any:
        return value if isinstance(value, (bool, int, float, str)) else None

    @field_validator("rotate", mode="before")
    @classmethod
    def drop_unusable_rotation(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return None
        return value if isinstance(value, (int, float, str)) else None

    @field_validator("flip", "align", "color", mode="before")
    @classmethod
    def drop_non_string(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> RenderOptions:
        icon, _ = split_attributes(props)
        return cls.model_validate(icon)
