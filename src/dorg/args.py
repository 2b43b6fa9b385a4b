"""
Argument parsing logic for dorg.
"""

import argparse
import dataclasses
import os
from pathlib import Path
from typing import Any

from dorg.models import COLLISION_POLICIES, MODE_TEMPLATES, SORT_SOURCES, AppConfig, colorize, colors


def get_default_value(field_name: str) -> Any:
    """Extract default value from AppConfig dataclass field."""
    f = AppConfig.__dataclass_fields__[field_name]
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return f.default


def get_default_info(default_val: Any) -> str:
    """Generate a string with default settings for help message."""
    return f"(default: '{colorize(str(default_val), colors.yellow)}')"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dorg",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Move files into year/month or year/month/day folders "
        "by their creation or modification date.",
        epilog=f"Example: {colorize('dorg', colors.green)} ~/Downloads -r -mode=day -sort=modified",
    )

    parser.add_argument(
        "-r",
        "--recursive",
        dest="recursive",
        action="store_true",
        help="Also organize files in subdirectories (each in its own date folders)",
    )

    def_mode = get_default_value("mode")
    parser.add_argument(
        "-mode",
        "--mode",
        dest="mode",
        type=str,
        choices=tuple(MODE_TEMPLATES),
        default=def_mode,
        help=f"Folder granularity: year/month or year/month/day {get_default_info(def_mode)}",
    )

    def_sort = get_default_value("sort")
    parser.add_argument(
        "-sort",
        "--sort",
        dest="sort",
        type=str,
        choices=SORT_SOURCES,
        default=def_sort,
        help=f"Timestamp used to pick the folder {get_default_info(def_sort)}",
    )

    def_collision = get_default_value("collision")
    parser.add_argument(
        "-c",
        "--collision",
        dest="collision",
        type=str,
        choices=COLLISION_POLICIES,
        default=def_collision,
        help="What to do when the target name is taken: skip the file or "
        f"move it as name_1.ext {get_default_info(def_collision)}",
    )
    parser.add_argument(
        "-E",
        "--show-errors",
        dest="show_errors",
        action="store_true",
        help="Show files that could not be moved",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="store_true",
        help="Quiet mode (suppress non-error messages)",
    )
    parser.add_argument(
        "-S",
        "--settings",
        dest="show_settings",
        action="store_true",
        help="Show raw settings (variable values)",
    )
    parser.add_argument(
        "-t",
        "--test",
        dest="test",
        action="store_true",
        help="Test mode: show what would be done without making changes",
    )
    parser.add_argument(
        "-v", "--version", dest="show_version", action="store_true", help="Print version and exit"
    )
    parser.add_argument(
        "-V",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Print detailed information during processing",
    )
    parser.add_argument(
        "directory",
        type=str,
        default=os.getcwd(),
        nargs="?",
        help="Directory to organize (default: current working directory)",
    )
    return parser


def get_config(argv: list[str] | None = None) -> AppConfig:
    """Parse command line arguments and return the AppConfig object."""
    args = build_parser().parse_args(argv)

    source_dir = Path(args.directory).resolve()
    source_dir_writable = os.access(source_dir, os.W_OK)

    return AppConfig(
        mode=args.mode,
        sort=args.sort,
        collision=args.collision,
        recursive=args.recursive,
        quiet=args.quiet,
        show_version=args.show_version,
        show_errors=args.show_errors,
        show_settings=args.show_settings,
        test=args.test,
        verbose=args.verbose,
        source_dir=source_dir,
        source_dir_writable=source_dir_writable,
    )
