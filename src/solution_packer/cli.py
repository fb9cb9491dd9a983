# src/solution_packer/cli.py
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from solution_packer.builder import build_archives
from solution_packer.config import DEFAULT_CONFIG, load_settings, preview_settings
from solution_packer.exceptions import PackerError
from solution_packer.folders import find_exercise_folders
from solution_packer.matriculation import extract_numbers

logger = logging.getLogger(__name__)


def _digits(value: str) -> str:
    """argparse type: a non-empty string of digits (leading zeros kept)."""
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"expected digits only, got {value!r}")
    return value


# ----------------------------
# Commands
# ----------------------------
def cmd_find(args: argparse.Namespace) -> int:
    """List exercise folders."""
    settings = load_settings(args.config)
    folders = find_exercise_folders(
        Path(args.root),
        settings.folder_regex,
        numbers=args.numbers,
        newest=args.newest,
    )

    if args.format == "json":
        print(json.dumps([{"number": f.number, "path": str(f.path)} for f in folders], indent=2))
    else:
        for f in folders:
            print(f"{f.padded(settings.archive.number_width)}  {f.path}")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """List matriculation numbers found in archive names."""
    settings = load_settings(args.config)
    values = extract_numbers(
        Path(args.root),
        settings.archive_regex,
        extension=settings.archive.extension,
        all_occurrences=args.all,
    )

    if args.format == "json":
        print(json.dumps(values, indent=2))
    else:
        for v in values:
            print(v)
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Build archives for the selected exercise folders."""
    settings = load_settings(args.config)
    result = build_archives(
        Path(args.root),
        settings,
        numbers=args.numbers,
        all_folders=args.all,
        include=args.include,
        exclude=args.exclude,
        no_note=args.no_note,
        matriculation=args.matriculation,
        keep_going=args.keep_going,
        dry_run=args.dry_run,
    )
    print(result)
    return 0 if result.ok else 1


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective settings."""
    preview_settings(load_settings(args.config))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="solution-packer",
        description="Find exercise folders, extract matriculation numbers and pack solutions",
    )
    ap.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG,
        help=f"YAML config path (default: {DEFAULT_CONFIG})",
    )
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="cmd")

    p_find = sub.add_parser("find", help="List exercise folders under ROOT")
    p_find.add_argument("root", type=Path, help="Directory holding the exercise folders")
    p_find.add_argument("--numbers", "-n", type=int, nargs="+", default=None, help="Only these exercise numbers")
    p_find.add_argument("--newest", action="store_true", help="Only the highest-numbered folder")
    p_find.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    p_find.set_defaults(func=cmd_find)

    p_extract = sub.add_parser("extract", help="Extract matriculation numbers from archive names under ROOT")
    p_extract.add_argument("root", type=Path, help="Directory searched recursively for archives")
    p_extract.add_argument("--all", action="store_true", help="Keep duplicates (default: distinct, first-seen order)")
    p_extract.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    p_extract.set_defaults(func=cmd_extract)

    p_build = sub.add_parser("build", help="Pack solution folders into archives")
    p_build.add_argument("root", type=Path, help="Directory holding the exercise folders")
    sel = p_build.add_mutually_exclusive_group()
    sel.add_argument("--numbers", "-n", type=int, nargs="+", default=None, help="Exercise numbers to pack")
    sel.add_argument("--all", action="store_true", help="Pack every exercise folder (default: newest only)")
    p_build.add_argument("--no-note", dest="no_note", action="store_true", help="Do not append the note file")
    p_build.add_argument("--include", nargs="+", default=None, help="Extensions/globs to include (default: all files)")
    p_build.add_argument(
        "--exclude",
        nargs="*",
        default=None,
        help="Extensions/globs to exclude (default: the archive extension)",
    )
    p_build.add_argument(
        "--matriculation",
        "-m",
        type=_digits,
        default=None,
        help="Matriculation number used in archive names",
    )
    p_build.add_argument(
        "--keep-going",
        dest="keep_going",
        action="store_true",
        help="Report failing folders and continue with the rest",
    )
    p_build.add_argument("--dry-run", dest="dry_run", action="store_true", help="Log archiver calls without running them")
    p_build.set_defaults(func=cmd_build)

    p_config = sub.add_parser("config", help="Show the effective configuration")
    p_config.set_defaults(func=cmd_config)

    return ap


def main(argv: Optional[list[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    func = getattr(args, "func", None)
    if func is None:
        ap.print_help()
        return 2

    try:
        return int(func(args))
    except PackerError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
