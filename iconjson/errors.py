from __future__ import annotations


class IconJsonError(Exception):
    """Base class for icon set errors."""


class InvalidIconSet(IconJsonError, ValueError):
    """Structured data, record or mutation rejected before anything changed."""


class IconNotFound(IconJsonError, LookupError):
    def __init__(self, name: str, prefix: str | None = None) -> None:
        self.name = name
        self.prefix = prefix
        full = f"{prefix}:{name}" if prefix else name
        super().__init__(f"Icon not found: {full}")


class IconSetLoadError(IconJsonError):
    """Icon set file could not be read."""
