"""Command-line comparison of the module summaries of two IAR map files.

Usage::

    iarmapcmp LEFT.map RIGHT.map [--json report.json] [--no-color]

Both files are read and parsed before anything is compared; a failure on
either side exits with status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import colorama

from iarmap import MapComparison, MapParseError, MapReadError, ObjModuleTable, compare_reports, parse_map_file
from iarmap.fields import DEFAULT_NAME_WIDTH
from iarmap.render import comparison_to_dict, render_comparison

logger = logging.getLogger("iarmapcmp")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def _load_side(path: Path, *, side: str, name_width: int) -> list[ObjModuleTable] | None:
    """Parse one map file, printing an error for that side on failure."""

    try:
        return parse_map_file(path, name_width=name_width)
    except MapReadError as exc:
        cause = exc.__cause__
        detail = getattr(cause, "strerror", None) or str(exc)
        print(f"Error: {path}: {detail}", file=sys.stderr)
    except MapParseError as exc:
        print(f"Error on {side} file: {exc}", file=sys.stderr)
    return None


def build_report(
    *,
    left_path: Path,
    right_path: Path,
    left: list[ObjModuleTable],
    right: list[ObjModuleTable],
    comparison: MapComparison,
) -> dict[str, Any]:
    """Build a complete comparison report payload."""

    return {
        "metadata": {
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "left_path": str(left_path),
            "right_path": str(right_path),
            "delta_rule": (
                "Deltas are left minus right and only exist for columns where both files printed a value."
            ),
        },
        "summary": {
            "left_group_count": len(left),
            "right_group_count": len(right),
            "groups_only_in_left_count": len(comparison["groups"]["only_in_left"]),
            "groups_only_in_right_count": len(comparison["groups"]["only_in_right"]),
            "objects_only_in_left_count": len(comparison["objects"]["only_in_left"]),
            "objects_only_in_right_count": len(comparison["objects"]["only_in_right"]),
            "changed_object_count": len(comparison["values"]["changed"]),
        },
        "comparison": comparison_to_dict(comparison),
    }


def write_report(report: dict[str, Any], *, output_path: Path) -> None:
    """Write report JSON to disk."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(description="Compare the module summaries of two IAR map files.")
    parser.add_argument("left", type=Path, help="Path to the left map file")
    parser.add_argument("right", type=Path, help="Path to the right map file")
    parser.add_argument(
        "--name-width",
        type=int,
        default=DEFAULT_NAME_WIDTH,
        help="Width in bytes of the module name column",
    )
    parser.add_argument("--json", type=Path, default=None, help="Also write a JSON report to this path")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for command-line execution."""

    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    left = _load_side(args.left, side="left", name_width=args.name_width)
    right = _load_side(args.right, side="right", name_width=args.name_width)
    if left is None or right is None:
        return 1

    comparison = compare_reports(left, right)
    if args.json is not None:
        report = build_report(
            left_path=args.left,
            right_path=args.right,
            left=left,
            right=right,
            comparison=comparison,
        )
        write_report(report, output_path=args.json)
        logger.info("Wrote comparison report: %s", args.json)

    color = not args.no_color
    if color:
        colorama.just_fix_windows_console()
    for line in render_comparison(comparison, color=color):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
