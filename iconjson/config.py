# Purpose: Environment-driven settings for icon set loading and rendering.
# Notes: Read on every call so tests can monkeypatch the environment.
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

DEFAULT_ID_PREFIX = "IconId"

_ID_PREFIX_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class IconJsonConfig:
    collections_dir: str
    id_prefix: str
    log_level: int


def _env_log_level(name: str, default: int = logging.WARNING) -> int:
    raw = os.environ.get(name, "").strip().upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def get_config() -> IconJsonConfig:
    id_prefix = os.environ.get("ICONJSON_ID_PREFIX", "").strip() or DEFAULT_ID_PREFIX
    if not _ID_PREFIX_RE.match(id_prefix):
        raise RuntimeError("Invalid ICONJSON_ID_PREFIX (start with a letter, use A-Z, a-z, 0-9, _, -)")

    return IconJsonConfig(
        collections_dir=os.environ.get("ICONJSON_COLLECTIONS_DIR", "").strip(),
        id_prefix=id_prefix,
        log_level=_env_log_level("ICONJSON_LOG_LEVEL"),
    )
