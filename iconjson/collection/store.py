from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from ..errors import IconNotFound, InvalidIconSet
from .models import STRUCTURE_KEYS, TRANSFORM_KEYS, AliasRecord, IconData, IconRecord, Number, Selection
from .normalize import normalize_icon

LOG = logging.getLogger(__name__)

# Alias/character hops allowed between a requested name and a real icon.
MAX_HOPS = 5


def detect_prefix(icons: Mapping[str, Any]) -> str:
    """Guess the prefix from the first icon key: text before ``:``, else before ``-``."""
    keys = list(icons)
    if not keys:
        raise InvalidIconSet("Cannot detect prefix: icon set has no icons")

    key = keys[0]
    if ":" in key:
        prefix = key.split(":", 1)[0]
    elif "-" in key:
        prefix = key.split("-", 1)[0]
    else:
        raise InvalidIconSet(f"Cannot detect prefix from icon name '{key}'")
    if not prefix:
        raise InvalidIconSet(f"Cannot detect prefix from icon name '{key}'")
    return prefix


def _separators(prefix: str) -> tuple[str, ...]:
    # "prefix-name" is ambiguous when the prefix itself contains a hyphen.
    if "-" in prefix:
        return (prefix + ":",)
    return (prefix + ":", prefix + "-")


def _strip_prefix(value: Any, starts: tuple[str, ...], what: str) -> str:
    if isinstance(value, str):
        for start in starts:
            if value.startswith(start) and len(value) > len(start):
                return value[len(start) :]
    raise InvalidIconSet(f"{what} '{value}' does not match prefix '{starts[0][:-1]}'")


def _record_input(record: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
    if record is None:
        return {}
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(record, Mapping):
        raise InvalidIconSet("Icon data must be an object")
    return dict(record)


def _validate(model: type[IconRecord] | type[AliasRecord], raw: Any, name: str) -> Any:
    if not isinstance(raw, Mapping):
        raise InvalidIconSet(f"Icon '{name}' must be an object")
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise InvalidIconSet(f"Invalid data for icon '{name}': {e.errors()[0]['msg']}") from e


def _merge_parent(result: dict[str, Any], data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        if key not in result:
            result[key] = value
        elif key == "rotate":
            result["rotate"] = result["rotate"] + value
        elif key in TRANSFORM_KEYS:
            result[key] = result[key] != value
        # anything else: the alias closer to the requested name already set it


class IconSet:
    """One icon set: a prefix, icons, aliases, character codes and root defaults.

    Names are stored without the prefix. A set created without a prefix is
    "unset" until :meth:`load` succeeds: lookups come back empty and adds are
    rejected.
    """

    def __init__(self, prefix: str | None = None) -> None:
        self._prefix: str | None = prefix or None
        self._icons: dict[str, IconRecord] = {}
        self._aliases: dict[str, AliasRecord] = {}
        self._chars: dict[str, str] = {}
        self._defaults: dict[str, Number | bool] = {}
        self._meta: dict[str, Any] = {}

    @classmethod
    def from_data(cls, data: Mapping[str, Any] | str | bytes, default_prefix: str | None = None) -> IconSet:
        icon_set = cls()
        icon_set.load(data, default_prefix)
        return icon_set

    @property
    def prefix(self) -> str | None:
        return self._prefix

    @property
    def chars(self) -> Mapping[str, str]:
        return MappingProxyType(self._chars)

    @property
    def defaults(self) -> Mapping[str, Number | bool]:
        return MappingProxyType(self._defaults)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        return len(self._icons)

    def __repr__(self) -> str:
        return f"IconSet(prefix={self._prefix!r}, icons={len(self._icons)}, aliases={len(self._aliases)})"

    # ---- Loading ----

    def load(self, data: Mapping[str, Any] | str | bytes, default_prefix: str | None = None) -> None:
        """Replace the contents of this set with structured icon set data.

        ``data`` is a parsed mapping or JSON text. When it has no ``prefix``,
        the prefix is ``default_prefix`` or is detected from the first icon
        name, and every icon, alias, parent and character target must carry
        it (``prefix:name``, or ``prefix-name`` for prefixes without a
        hyphen). Nothing changes unless the whole input is valid.
        """
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise InvalidIconSet("Icon set is not valid JSON") from e

        if not isinstance(data, Mapping) or "icons" not in data:
            raise InvalidIconSet("Icon set must be an object with an 'icons' field")

        icons_raw = data["icons"]
        aliases_raw = data.get("aliases") or {}
        chars_raw = data.get("chars") or {}
        for field, value in (("icons", icons_raw), ("aliases", aliases_raw), ("chars", chars_raw)):
            if not isinstance(value, Mapping):
                raise InvalidIconSet(f"'{field}' must be an object")

        prefix = data.get("prefix")
        if prefix is not None and not isinstance(prefix, str):
            raise InvalidIconSet("'prefix' must be a string")

        starts: tuple[str, ...] | None = None
        if not prefix:
            prefix = default_prefix or detect_prefix(icons_raw)
            starts = _separators(prefix)
            LOG.debug("Icon set has no prefix, using '%s'", prefix)

        icons: dict[str, IconRecord] = {}
        for key, raw in icons_raw.items():
            name = _strip_prefix(key, starts, "Icon") if starts else key
            icons[name] = _validate(IconRecord, raw, key)

        aliases: dict[str, AliasRecord] = {}
        for key, raw in aliases_raw.items():
            name = _strip_prefix(key, starts, "Alias") if starts else key
            if starts and isinstance(raw, Mapping) and "parent" in raw:
                raw = {**raw, "parent": _strip_prefix(raw["parent"], starts, "Parent icon")}
            aliases[name] = _validate(AliasRecord, raw, key)

        chars: dict[str, str] = {}
        for code, target in chars_raw.items():
            if not isinstance(target, str):
                raise InvalidIconSet(f"Character '{code}' must map to an icon name")
            chars[code] = _strip_prefix(target, starts, "Character target") if starts else target

        defaults: dict[str, Number | bool] = {}
        meta: dict[str, Any] = {}
        for key, value in data.items():
            if key in STRUCTURE_KEYS:
                continue
            if isinstance(value, (bool, int, float)):
                defaults[key] = value
            else:
                meta[key] = copy.deepcopy(value)

        self._prefix = prefix
        self._icons = icons
        self._aliases = aliases
        self._chars = chars
        self._defaults = defaults
        self._meta = meta
        LOG.debug("Loaded icon set '%s': %d icons, %d aliases, %d chars", prefix, len(icons), len(aliases), len(chars))

    # ---- Lookups ----

    def exists(self, name: str) -> bool:
        return name in self._icons or name in self._aliases

    def list_icons(self, include_aliases: bool = False) -> list[str]:
        names = list(self._icons)
        if include_aliases:
            names.extend(self._aliases)
        return names

    def _with_defaults(self, record: IconRecord) -> dict[str, Any]:
        data = record.as_json()
        for key, value in self._defaults.items():
            data.setdefault(key, value)
        return data

    def resolve_raw(self, name: str) -> dict[str, Any] | None:
        """Merged, not yet normalized JSON data for ``name``, or ``None``.

        Follows character codes and alias parents, at most ``MAX_HOPS`` in
        total. Rotations add up, flips toggle, other attributes come from the
        alias closest to ``name``.
        """
        hops = 0
        while name not in self._icons and name not in self._aliases:
            target = self._chars.get(name)
            hops += 1
            if target is None or hops > MAX_HOPS:
                return None
            name = target

        if name in self._icons:
            return self._with_defaults(self._icons[name])

        result = self._aliases[name].as_json()
        parent = result.pop("parent")
        while hops < MAX_HOPS:
            hops += 1
            if parent in self._icons:
                _merge_parent(result, self._with_defaults(self._icons[parent]))
                return result

            alias = self._aliases.get(parent)
            if alias is None:
                return None
            data = alias.as_json()
            parent = data.pop("parent")
            _merge_parent(result, data)

        LOG.debug("Alias '%s' exceeds %d hops", name, MAX_HOPS)
        return None

    def get_icon_data(self, name: str, normalized: bool = True) -> IconData | dict[str, Any] | None:
        data = self.resolve_raw(name)
        if data is None or not normalized:
            return data
        return normalize_icon(data)

    def resolve(self, name: str) -> IconData:
        icon = self.get_icon_data(name)
        if icon is None:
            raise IconNotFound(name, self._prefix)
        return icon

    def select(self, names: Iterable[str]) -> Selection:
        """Smallest structured set that can render every name in ``names``.

        Aliases bring the icons they depend on; character codes are emitted as
        aliases of their target. Names that do not resolve are listed in
        ``missing``.
        """
        names = list(names)
        if self._prefix is None:
            return Selection(data={}, missing=names)

        icons: dict[str, dict[str, Any]] = {}
        aliases: dict[str, dict[str, Any]] = {}

        def _take(name: str, hops: int) -> bool:
            if hops > MAX_HOPS:
                return False
            if name in icons or name in aliases:
                return True
            if name in self._icons:
                icons[name] = self._icons[name].as_json()
                return True
            if name in self._aliases:
                if not _take(self._aliases[name].parent, hops + 1):
                    return False
                aliases[name] = self._aliases[name].as_json()
                return True
            target = self._chars.get(name)
            if target is not None:
                if not _take(target, hops + 1):
                    return False
                aliases[name] = {"parent": target}
                return True
            return False

        missing = [name for name in names if not _take(name, 0)]

        data: dict[str, Any] = {"prefix": self._prefix, **self._defaults, "icons": icons}
        if aliases:
            data["aliases"] = aliases
        return Selection(data=data, missing=missing)

    def export(self, names: Iterable[str] | None = None, not_found: bool = False) -> dict[str, Any] | None:
        """Structured form of the whole set, or of :meth:`select` when ``names`` is given."""
        if self._prefix is None:
            return None

        if names is not None:
            selection = self.select(names)
            data = selection.data
            if not_found and selection.missing:
                data["not_found"] = selection.missing
            return data

        data = {"prefix": self._prefix, **copy.deepcopy(self._meta)}
        data["icons"] = {name: record.as_json() for name, record in self._icons.items()}
        if self._aliases:
            data["aliases"] = {name: record.as_json() for name, record in self._aliases.items()}
        if self._chars:
            data["chars"] = dict(self._chars)
        data.update(self._defaults)
        return data

    # ---- Mutations ----

    def _require_prefix(self) -> None:
        if self._prefix is None:
            raise InvalidIconSet("Icon set has no prefix")

    def remove_icon(self, name: str, cascade: bool = True) -> list[str]:
        """Remove an icon or alias; with ``cascade`` also every alias that depends on it.

        Returns the removed names (empty when ``name`` was not in the set).
        """
        if name in self._icons:
            del self._icons[name]
        elif name in self._aliases:
            del self._aliases[name]
        else:
            return []

        removed = [name]
        if cascade:
            # Each alias is deleted once, so malformed cyclic data still terminates.
            pending = [name]
            while pending:
                parent = pending.pop()
                children = [key for key, alias in self._aliases.items() if alias.parent == parent]
                for key in children:
                    del self._aliases[key]
                removed.extend(children)
                pending.extend(children)
            if len(removed) > 1:
                LOG.debug("Removed '%s' with %d dependent aliases", name, len(removed) - 1)

        gone = set(removed)
        self._chars = {code: target for code, target in self._chars.items() if target not in gone}
        return removed

    def _depends_on(self, start: str, name: str) -> bool:
        # Parent chain of `start` passes through `name` (checked up to MAX_HOPS).
        current = start
        for _ in range(MAX_HOPS + 1):
            if current == name:
                return True
            alias = self._aliases.get(current)
            if alias is None:
                return False
            current = alias.parent
        return False

    def add_icon(self, name: str, record: Mapping[str, Any] | IconRecord) -> None:
        self._require_prefix()
        data = _record_input(record)
        char = data.pop("char", None)
        if data.get("body") is None:
            raise InvalidIconSet(f"Icon '{name}' has no body")

        icon = _validate(IconRecord, data, name)
        if char is not None:
            self._chars[str(char)] = name
        self._icons[name] = icon
        self._aliases.pop(name, None)

    def add_alias(self, name: str, parent: str, record: Mapping[str, Any] | None = None) -> None:
        self._require_prefix()
        if parent == name:
            raise InvalidIconSet(f"Alias '{name}' cannot be its own parent")
        if not self.exists(parent):
            raise InvalidIconSet(f"Cannot add alias '{name}': parent icon '{parent}' does not exist")
        if self._depends_on(parent, name):
            raise InvalidIconSet(f"Cannot add alias '{name}': parent icon '{parent}' is an alias of '{name}'")

        data = _record_input(record)
        char = data.pop("char", None)
        data["parent"] = parent
        alias = _validate(AliasRecord, data, name)
        if char is not None:
            self._chars[str(char)] = name
        self._aliases[name] = alias
        self._icons.pop(name, None)

    def set_default_value(self, key: str, value: Number | bool) -> None:
        """Set a root value used by every icon that does not define ``key``."""
        if self._prefix is None:
            LOG.debug("Ignoring default '%s' for icon set without prefix", key)
            return
        if key in STRUCTURE_KEYS:
            raise InvalidIconSet(f"'{key}' cannot be used as a default value")
        if not isinstance(value, (bool, int, float)):
            raise InvalidIconSet(f"Default value for '{key}' must be a number or boolean")
        self._defaults[key] = value
