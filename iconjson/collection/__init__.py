"""Icon set data model, alias resolution and storage optimization."""

from .loader import find_collection_file, load_collection, load_icon_set, load_icon_set_file, scriptify
from .models import AliasRecord, IconData, IconRecord, Selection
from .normalize import normalize_icon
from .optimize import OPTIMIZE_PROPS, deoptimize, optimize
from .store import MAX_HOPS, IconSet, detect_prefix

__all__ = [
    "AliasRecord",
    "IconData",
    "IconRecord",
    "IconSet",
    "MAX_HOPS",
    "OPTIMIZE_PROPS",
    "Selection",
    "deoptimize",
    "detect_prefix",
    "find_collection_file",
    "load_collection",
    "load_icon_set",
    "load_icon_set_file",
    "normalize_icon",
    "optimize",
    "scriptify",
]
