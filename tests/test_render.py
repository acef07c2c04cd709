"""Tests for text and JSON rendering of comparisons."""

from __future__ import annotations

import json

from colorama import Fore, Style

from iarmap.compare import compare_reports
from iarmap.models import Module, ObjModuleTable
from iarmap.render import comparison_to_dict, render_comparison, render_delta


def _tables(**modules: Module) -> list[ObjModuleTable]:
    return [ObjModuleTable(name="Obj: [1]", table=dict(modules))]


def test_render_identical_reports_states_each_stage() -> None:
    tables = _tables(foo=Module(ro_code=1))
    lines = render_comparison(compare_reports(tables, tables), color=False)
    assert lines == [
        "No group differences",
        "No unique objects between left and right",
        "Objects between left and right were the same",
    ]


def test_render_value_difference_plain() -> None:
    left = _tables(bar=Module(ro_code=22, ro_data=44))
    right = _tables(bar=Module(ro_code=20, ro_data=44))

    lines = render_comparison(compare_reports(left, right), color=False)

    assert lines == [
        "No group differences",
        "No unique objects between left and right",
        "Difference in bar...",
        "\tL- ro_code:     22 \t ro_data:     44 \t rw_data: ------",
        "\tR- ro_code:     20 \t ro_data:     44 \t rw_data: ------",
        "\tD- ro_code:      2 \t ro_data:      0 \t rw_data: ------",
    ]


def test_render_unique_groups_and_objects_plain() -> None:
    left = [ObjModuleTable(name="FileSys.a: [3]", table={"FAT_Dir.o": Module(ro_code=536, ro_data=24)})]
    right = [ObjModuleTable(name="rt7M_tl.a: [4]", table={})]

    lines = render_comparison(compare_reports(left, right), color=False)

    assert lines[:7] == [
        "Groups unique to left...",
        "\tL- FileSys.a: [3]",
        "Groups unique to right...",
        "\tR- rt7M_tl.a: [4]",
        "Objects unique to left...",
        "\tL- FAT_Dir.o",
        "\t   ro_code:    536 \t ro_data:     24 \t rw_data: ------",
    ]
    assert lines[7] == "Objects unique to right..."


def test_render_delta_colors_by_sign() -> None:
    delta = Module(ro_code=-2, ro_data=0, rw_data=5)
    rendered = render_delta(delta, color=True)
    assert f"{Fore.RED}    -2{Style.RESET_ALL}" in rendered
    assert f"{Fore.GREEN}     5{Style.RESET_ALL}" in rendered
    assert "ro_data:      0 \t" in rendered


def test_render_delta_without_color_matches_module_str() -> None:
    delta = Module(ro_code=-2, ro_data=None, rw_data=5)
    assert render_delta(delta, color=False) == str(delta)


def test_render_colors_unique_names() -> None:
    left = [ObjModuleTable(name="a: [1]", table={})]
    right = [ObjModuleTable(name="b: [2]", table={})]
    lines = render_comparison(compare_reports(left, right), color=True)
    assert f"\tL- {Fore.MAGENTA}a: [1]{Style.RESET_ALL}" in lines
    assert f"\tR- {Fore.YELLOW}b: [2]{Style.RESET_ALL}" in lines


def test_comparison_to_dict_is_json_serializable() -> None:
    left = _tables(bar=Module(ro_code=22, ro_data=44), only=Module(rw_data=1))
    right = _tables(bar=Module(ro_code=20, ro_data=44))

    payload = comparison_to_dict(compare_reports(left, right))

    assert json.loads(json.dumps(payload)) == payload
    assert payload["objects"]["only_in_left"] == [
        {"name": "only", "module": {"ro_code": None, "ro_data": None, "rw_data": 1}}
    ]
    assert payload["values"]["changed"][0]["delta"] == {"ro_code": 2, "ro_data": 0, "rw_data": None}
