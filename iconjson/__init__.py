"""Icon set storage, alias resolution and SVG rendering."""

from .collection import IconData, IconSet, deoptimize, load_icon_set, load_icon_set_file, normalize_icon, optimize
from .errors import IconJsonError, IconNotFound, IconSetLoadError, InvalidIconSet
from .svg import IdSequence, RenderOptions, RenderResult, build_svg, render_icon

__version__ = "0.1.0"

__all__ = [
    "IconData",
    "IconJsonError",
    "IconNotFound",
    "IconSet",
    "IconSetLoadError",
    "IdSequence",
    "InvalidIconSet",
    "RenderOptions",
    "RenderResult",
    "build_svg",
    "deoptimize",
    "load_icon_set",
    "load_icon_set_file",
    "normalize_icon",
    "optimize",
    "render_icon",
]
