"""CLI entrypoint for srcscan."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import ScanError
from .logging import configure_logging
from .profiles import resolve_profiles
from .scanner import Scanner
from .units import sort_units, unit_to_dict, unit_type


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srcscan",
        description="List the source units (packages, modules, projects) found in directories.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Print each unit's JSON and log debug output.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .srcscan.yml file (defaults to the one in the current directory).",
    )
    parser.add_argument(
        "--base",
        default=None,
        help="Directory that unit paths are made relative to (defaults to the current directory).",
    )
    parser.add_argument(
        "--profile",
        dest="profiles",
        action="append",
        default=None,
        help="Restrict the scan to this profile; repeat for several.",
    )
    parser.add_argument(
        "--path-independent",
        action="store_true",
        default=False,
        help="Clear machine-specific absolute paths from unit metadata.",
    )
    parser.add_argument(
        "dirs",
        nargs="*",
        default=["."],
        help="Directories to scan (defaults to the current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for srcscan."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(args.config if args.config is not None else Path.cwd())
        if args.base is not None:
            config.base = args.base
        if args.profiles:
            config.profiles = resolve_profiles(args.profiles)
        if args.path_independent:
            config.path_independent = True
    except (ConfigError, ValueError, TypeError, RuntimeError) as exc:
        parser.exit(1, f"error: {exc}\n")

    scanner = Scanner(config)
    for index, directory in enumerate(args.dirs):
        try:
            units = sort_units(scanner.scan(directory))
        except (OSError, ScanError) as exc:
            parser.exit(1, f"error: {exc}\n")
        for position, unit in enumerate(units):
            print(f"{unit_type(unit):<15} {unit.path}")
            if args.verbose:
                payload = json.dumps(unit_to_dict(unit), indent=2)
                print("    " + payload.replace("\n", "\n    "))
                if index != len(args.dirs) - 1 or position != len(units) - 1:
                    print()


if __name__ == "__main__":
    main(sys.argv[1:])
