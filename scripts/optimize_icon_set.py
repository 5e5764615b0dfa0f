#!/usr/bin/env python3
"""Optimize, de-optimize, subset or scriptify an icon set JSON file.

Examples:
  python scripts/optimize_icon_set.py fa.json -o fa.min.json
  python scripts/optimize_icon_set.py fa.min.json --deoptimize --pretty
  python scripts/optimize_icon_set.py fa.json --icons arrow-left,arrow-right --scriptify
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from iconjson.collection import deoptimize, load_icon_set_file, optimize, scriptify
from iconjson.collection.loader import DEFAULT_CALLBACK
from iconjson.config import get_config
from iconjson.errors import IconJsonError

LOG = logging.getLogger("optimize_icon_set")


def split_names(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Optimize or de-optimize icon set JSON.")
    ap.add_argument("input", type=Path)
    ap.add_argument("-o", "--output", type=Path, default=None, help="Write to file instead of stdout")
    ap.add_argument("--prefix", default=None, help="Prefix to use when the file has none")
    ap.add_argument("--icons", type=split_names, default=None, help="Comma separated subset of icons to keep")
    ap.add_argument("--deoptimize", action="store_true", help="Push root defaults back into icons")
    ap.add_argument("--scriptify", nargs="?", const=DEFAULT_CALLBACK, default=None, metavar="CALLBACK")
    ap.add_argument("--pretty", action="store_true")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_config().log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        icon_set = load_icon_set_file(args.input, args.prefix)
    except IconJsonError as e:
        raise SystemExit(str(e)) from e

    if args.scriptify:
        out = scriptify(
            icon_set,
            args.icons,
            callback=args.scriptify,
            optimize=not args.deoptimize,
            pretty=args.pretty,
        )
    else:
        data = icon_set.export(args.icons, not_found=True)
        data = deoptimize(data) if args.deoptimize else optimize(data)
        if data.get("not_found"):
            LOG.warning("Icons not found in %s: %s", args.input, ", ".join(data["not_found"]))
        out = json.dumps(data, indent="\t" if args.pretty else None, ensure_ascii=False) + "\n"

    if args.output:
        args.output.write_text(out, encoding="utf-8")
        LOG.info("Wrote %s (%d bytes, %d icons)", args.output, len(out), len(icon_set))
    else:
        sys.stdout.write(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
