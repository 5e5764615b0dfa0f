# Purpose: Read icon sets from text, files and a collections directory; emit script bundles.
# Notes: The collections directory follows the @iconify/json layout (<dir>/json/<prefix>.json).
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..config import get_config
from ..errors import IconSetLoadError
from .optimize import optimize as optimize_data
from .store import IconSet

LOG = logging.getLogger(__name__)

DEFAULT_CALLBACK = "Iconify.addCollection"


def load_icon_set(source: Mapping[str, Any] | str | bytes, default_prefix: str | None = None) -> IconSet:
    return IconSet.from_data(source, default_prefix)


def load_icon_set_file(path: str | Path, default_prefix: str | None = None) -> IconSet:
    """Load an icon set from a JSON file.

    Without ``default_prefix`` the file name (up to the first dot) is used when
    the data has no prefix of its own.
    """
    path = Path(path)
    if default_prefix is None:
        default_prefix = path.name.split(".", 1)[0]

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IconSetLoadError(f"Cannot read icon set {path}: {e}") from e

    LOG.debug("Read icon set file %s (%d bytes)", path, len(text))
    return IconSet.from_data(text, default_prefix)


def find_collection_file(name: str, directory: str | Path | None = None) -> Path:
    if directory is None:
        directory = get_config().collections_dir
        if not directory:
            raise RuntimeError("ICONJSON_COLLECTIONS_DIR is not set")
    return Path(directory) / "json" / f"{name}.json"


def load_collection(name: str, directory: str | Path | None = None) -> IconSet:
    return load_icon_set_file(find_collection_file(name, directory))


def scriptify(
    icon_set: IconSet,
    names: Iterable[str] | None = None,
    *,
    callback: str = DEFAULT_CALLBACK,
    optimize: bool = False,
    pretty: bool = False,
) -> str:
    """Wrap exported icon set data in a JavaScript call: ``callback({...});``."""
    data = icon_set.export(names)
    if data is None:
        return ""
    if optimize:
        data = optimize_data(data)

    payload = json.dumps(data, indent="\t", ensure_ascii=False) if pretty else json.dumps(
        data, ensure_ascii=False, separators=(",", ":")
    )
    return f"{callback}({payload});\n"
