#!/usr/bin/env python3
"""Render one icon from an icon set JSON file as a standalone SVG.

Example:
  python scripts/render_icon.py json/fa.json arrow-left --height 24 --rotate 90deg -o arrow.svg
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from iconjson.collection import load_collection, load_icon_set_file
from iconjson.config import get_config
from iconjson.errors import IconJsonError
from iconjson.svg import build_svg

LOG = logging.getLogger("render_icon")


def parse_attr(value: str) -> tuple[str, str]:
    name, sep, attr_value = value.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{value}'")
    return name.strip(), attr_value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Render an icon from an icon set as SVG.")
    ap.add_argument("source", help="Icon set JSON file, or a collection name with --catalog")
    ap.add_argument("name", help="Icon name without prefix (aliases and character codes work too)")
    ap.add_argument("--catalog", action="store_true", help="Treat SOURCE as a collection name in ICONJSON_COLLECTIONS_DIR")
    ap.add_argument("--prefix", default=None, help="Prefix to use when the file has none")
    ap.add_argument("--width", default=None)
    ap.add_argument("--height", default=None)
    ap.add_argument("--rotate", default=None, help="Quarter turns, or a value like 90deg / 25%%")
    ap.add_argument("--flip", default=None, help="horizontal, vertical or both")
    ap.add_argument("--align", default=None, help="e.g. 'left,top,crop'")
    ap.add_argument("--color", default=None, help="Replaces currentColor")
    ap.add_argument("--inline", action="store_true")
    ap.add_argument("--box", action="store_true", help="Add a transparent bounding box")
    ap.add_argument("--attr", action="append", type=parse_attr, default=[], help="Extra <svg> attribute NAME=VALUE")
    ap.add_argument("-o", "--output", type=Path, default=None, help="Write to file instead of stdout")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_config().log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.catalog:
            icon_set = load_collection(args.source)
        else:
            icon_set = load_icon_set_file(args.source, args.prefix)
        icon = icon_set.resolve(args.name)
    except (IconJsonError, RuntimeError) as e:
        raise SystemExit(str(e)) from e

    props: dict[str, object] = dict(args.attr)
    for key in ("width", "height", "rotate", "flip", "align", "color"):
        value = getattr(args, key)
        if value is not None:
            props[key] = value
    if args.inline:
        props["inline"] = True
    if args.box:
        props["box"] = True

    svg = build_svg(icon, props, add_extra=bool(args.attr))
    if args.output:
        args.output.write_text(svg + "\n", encoding="utf-8")
        LOG.info("Wrote %s:%s to %s", icon_set.prefix, args.name, args.output)
    else:
        sys.stdout.write(svg + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
