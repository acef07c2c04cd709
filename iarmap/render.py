"""Text rendering of map comparisons for terminal output and JSON reports."""

from __future__ import annotations

from typing import Any

from colorama import Fore, Style

from .compare import MapComparison
from .models import Module, size_to_string


def _paint(text: str, color: str, *, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def _paint_delta_size(size: int | None, *, enabled: bool) -> str:
    """Red for shrinking sizes, green for growing ones."""

    text = size_to_string(size)
    if size is None or size == 0:
        return text
    return _paint(text, Fore.RED if size < 0 else Fore.GREEN, enabled=enabled)


def render_delta(delta: Module, *, color: bool = True) -> str:
    """Render a delta record with the same layout as `str(Module)`."""

    return (
        f"ro_code: {_paint_delta_size(delta.ro_code, enabled=color)} \t "
        f"ro_data: {_paint_delta_size(delta.ro_data, enabled=color)} \t "
        f"rw_data: {_paint_delta_size(delta.rw_data, enabled=color)}"
    )


def render_comparison(comparison: MapComparison, *, color: bool = True) -> list[str]:
    """Render all three comparison stages as output lines."""

    lines: list[str] = []

    groups = comparison["groups"]
    if groups["identical"]:
        lines.append("No group differences")
    else:
        lines.append("Groups unique to left...")
        lines.extend(f"\tL- {_paint(name, Fore.MAGENTA, enabled=color)}" for name in groups["only_in_left"])
        lines.append("Groups unique to right...")
        lines.extend(f"\tR- {_paint(name, Fore.YELLOW, enabled=color)}" for name in groups["only_in_right"])

    objects = comparison["objects"]
    if objects["identical"]:
        lines.append("No unique objects between left and right")
    else:
        lines.append("Objects unique to left...")
        for unique in objects["only_in_left"]:
            lines.append(f"\tL- {_paint(unique['name'], Fore.MAGENTA, enabled=color)}")
            lines.append(f"\t   {unique['module']}")
        lines.append("Objects unique to right...")
        for unique in objects["only_in_right"]:
            lines.append(f"\tR- {_paint(unique['name'], Fore.YELLOW, enabled=color)}")
            lines.append(f"\t   {unique['module']}")

    values = comparison["values"]
    if values["identical"]:
        lines.append("Objects between left and right were the same")
    for item in values["changed"]:
        lines.append(f"Difference in {_paint(item['name'], Fore.CYAN, enabled=color)}...")
        lines.append(f"\tL- {item['left']}")
        lines.append(f"\tR- {item['right']}")
        lines.append(f"\tD- {render_delta(item['delta'], color=color)}")

    return lines


def comparison_to_dict(comparison: MapComparison) -> dict[str, Any]:
    """Convert a comparison into a JSON-friendly dictionary."""

    groups = comparison["groups"]
    objects = comparison["objects"]
    values = comparison["values"]
    return {
        "groups": dict(groups),
        "objects": {
            "only_in_left": [
                {"name": unique["name"], "module": unique["module"].as_dict()} for unique in objects["only_in_left"]
            ],
            "only_in_right": [
                {"name": unique["name"], "module": unique["module"].as_dict()} for unique in objects["only_in_right"]
            ],
            "identical": objects["identical"],
        },
        "values": {
            "changed": [
                {
                    "name": item["name"],
                    "left": item["left"].as_dict(),
                    "right": item["right"].as_dict(),
                    "delta": item["delta"].as_dict(),
                }
                for item in values["changed"]
            ],
            "identical": values["identical"],
        },
    }
