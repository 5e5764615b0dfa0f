from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from html import escape
from typing import Any

from ..collection.models import IconData
from ..collection.normalize import normalize_icon
from .dimensions import calculate_dimension, format_number
from .ids import IdSequence, replace_ids
from .options import RenderOptions, is_true, split_attributes, split_tokens

SVG_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"'

# "%" and "deg" rotations are converted to quarter turns.
ROTATION_UNITS = {"%": 25, "deg": 90}

_ROTATION_RE = re.compile(r"^(-?[0-9.]*)(.*)$", re.DOTALL)
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

HORIZONTAL_ALIGN = {"left": "xMin", "center": "xMid", "right": "xMax"}
VERTICAL_ALIGN = {"top": "YMin", "middle": "YMid", "bottom": "YMax"}


@dataclass
class Box:
    left: int | float
    top: int | float
    width: int | float
    height: int | float

    def rotate_quarter(self) -> None:
        self.left, self.top = self.top, self.left
        self.width, self.height = self.height, self.width

    def view_box(self) -> str:
        return " ".join(format_number(v) for v in (self.left, self.top, self.width, self.height))


@dataclass(frozen=True)
class RenderResult:
    attributes: dict[str, str]
    body: str
    style: dict[str, str] = field(default_factory=dict)


def _parse_int(text: str) -> int | None:
    m = _INT_PREFIX_RE.match(text)
    return int(m.group(1)) if m else None


def parse_rotation(value: int | float | str | None) -> int:
    """Quarter turns requested by a ``rotate`` option; 0 when it cannot be read.

    Numbers and unitless strings are quarter turns, ``"50%"`` and ``"180deg"``
    are converted and rounded half up.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not value.is_integer():
            return 0
        return int(value)

    number, units = _ROTATION_RE.match(value).groups()
    if not units:
        return _parse_int(value) or 0
    if not number:
        return 0
    split = ROTATION_UNITS.get(units)
    if split is None:
        return 0
    turns = _parse_int(number)
    if turns is None:
        return 0
    return math.floor(turns / split + 0.5)


def preserve_aspect_ratio(align: str | None) -> str:
    horizontal, vertical, slice_ = "center", "middle", False
    for token in split_tokens(align):
        if token in HORIZONTAL_ALIGN:
            horizontal = token
        elif token in VERTICAL_ALIGN:
            vertical = token
        elif token == "crop":
            slice_ = True
        elif token == "meet":
            slice_ = False
    return HORIZONTAL_ALIGN[horizontal] + VERTICAL_ALIGN[vertical] + (" slice" if slice_ else " meet")


def _ratio(a: int | float, b: int | float) -> float:
    return a / b if b else 1


def render_icon(
    icon: IconData | Mapping[str, Any],
    options: RenderOptions | Mapping[str, Any] | None = None,
    ids: IdSequence | None = None,
) -> RenderResult:
    """Compute <svg> attributes, inner body and inline style for one icon.

    ``icon`` is normalized first when it is not :class:`IconData` already.
    Rendering does not fail: option values that cannot be used are ignored.
    """
    if not isinstance(icon, IconData):
        icon = normalize_icon(icon)
    if options is None:
        options = RenderOptions()
    elif not isinstance(options, RenderOptions):
        options = RenderOptions.from_props(options)

    inline = is_true(options.inline)
    box = Box(
        left=icon.left,
        top=icon.inline_top if inline else icon.top,
        width=icon.width,
        height=icon.inline_height if inline else icon.height,
    )

    # ---- Transformations ----
    rotate = icon.rotate
    h_flip, v_flip = icon.h_flip, icon.v_flip
    if is_true(options.h_flip):
        h_flip = not h_flip
    if is_true(options.v_flip):
        v_flip = not v_flip
    for token in split_tokens(options.flip):
        if token == "horizontal":
            h_flip = not h_flip
        elif token == "vertical":
            v_flip = not v_flip
    rotate += parse_rotation(options.rotate)

    transformations: list[str] = []
    if h_flip and v_flip:
        rotate += 2
    elif h_flip:
        transformations.append(f"translate({format_number(box.width + box.left)} {format_number(0 - box.top)})")
        transformations.append("scale(-1 1)")
        box.top = box.left = 0
    elif v_flip:
        transformations.append(f"translate({format_number(0 - box.left)} {format_number(box.height + box.top)})")
        transformations.append("scale(1 -1)")
        box.top = box.left = 0

    quarter = rotate % 4
    if quarter == 1:
        center = format_number(box.height / 2 + box.top)
        transformations.insert(0, f"rotate(90 {center} {center})")
        box.rotate_quarter()
    elif quarter == 2:
        cx = format_number(box.width / 2 + box.left)
        cy = format_number(box.height / 2 + box.top)
        transformations.insert(0, f"rotate(180 {cx} {cy})")
    elif quarter == 3:
        center = format_number(box.width / 2 + box.left)
        transformations.insert(0, f"rotate(-90 {center} {center})")
        box.rotate_quarter()

    # ---- Dimensions ----
    custom_width = options.width or None
    custom_height = options.height or None
    if custom_width is None and custom_height is None:
        custom_height = "1em"
    if custom_width is not None and custom_height is not None:
        width, height = custom_width, custom_height
    elif custom_width is not None:
        width = custom_width
        height = calculate_dimension(custom_width, _ratio(box.height, box.width))
    else:
        height = custom_height
        width = calculate_dimension(custom_height, _ratio(box.width, box.height))

    attributes: dict[str, str] = {}
    if options.width is not False:
        attributes["width"] = format_number(box.width if width == "auto" else width)
    if options.height is not False:
        attributes["height"] = format_number(box.height if height == "auto" else height)

    style: dict[str, str] = {}
    if inline and icon.vertical_align != 0:
        style["vertical-align"] = f"{format_number(icon.vertical_align)}em"

    attributes["preserveAspectRatio"] = preserve_aspect_ratio(options.align)
    attributes["viewBox"] = box.view_box()

    # ---- Body ----
    body = replace_ids(icon.body, ids)
    if options.color is not None:
        body = body.replace("currentColor", options.color)
    if transformations:
        body = f'<g transform="{" ".join(transformations)}">{body}</g>'
    if is_true(options.box):
        body += (
            f'<rect x="{format_number(box.left)}" y="{format_number(box.top)}" '
            f'width="{format_number(box.width)}" height="{format_number(box.height)}" fill="rgba(0, 0, 0, 0)" />'
        )

    return RenderResult(attributes=attributes, body=body, style=style)


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def build_svg(
    icon: IconData | Mapping[str, Any],
    props: Mapping[str, Any] | None = None,
    add_extra: bool = False,
    ids: IdSequence | None = None,
) -> str:
    """Render a complete <svg> element.

    Props that are not render options (``id``, ``class``...) are added to the
    element only when ``add_extra`` is set. ``style`` is appended after the
    generated inline style.
    """
    props = props or {}
    icon_props, node_props = split_attributes(props)
    result = render_icon(icon, RenderOptions.model_validate(icon_props), ids)

    parts = [SVG_OPEN]
    if add_extra:
        for name, value in node_props.items():
            if name == "style" or value is None:
                continue
            parts.append(f' {name}="{escape(_attr_value(value))}"')
    for name, value in result.attributes.items():
        parts.append(f' {name}="{value}"')

    style = "".join(f" {name}: {value};" for name, value in result.style.items())
    if props.get("style") is not None:
        style += str(props["style"])
    style = style.strip()
    if style:
        parts.append(f' style="{escape(style)}"')

    parts.append(f">{result.body}</svg>")
    return "".join(parts)
