"""SVG attribute/transform computation for resolved icons."""

from .dimensions import calculate_dimension, format_number
from .ids import DEFAULT_IDS, IdSequence, find_ids, replace_ids
from .options import ICON_ATTRIBUTES, RenderOptions, split_attributes
from .renderer import RenderResult, build_svg, parse_rotation, render_icon

__all__ = [
    "DEFAULT_IDS",
    "ICON_ATTRIBUTES",
    "IdSequence",
    "RenderOptions",
    "RenderResult",
    "build_svg",
    "calculate_dimension",
    "find_ids",
    "format_number",
    "parse_rotation",
    "render_icon",
    "replace_ids",
    "split_attributes",
]
