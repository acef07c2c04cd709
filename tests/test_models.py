"""Tests for the `Module` value object: subtraction, totals and rendering."""

from __future__ import annotations

import dataclasses

import pytest

from iarmap.models import Module, ObjModuleTable, optional_diff, size_to_string, subtract_modules

_MODULES = [
    Module(),
    Module(ro_code=10),
    Module(ro_code=10, ro_data=0, rw_data=None),
    Module(ro_code=None, ro_data=7348, rw_data=128),
    Module(ro_code=532, ro_data=569, rw_data=103),
]


def test_optional_diff_requires_both_values() -> None:
    """A delta exists only when both sides printed a value."""
    assert optional_diff(10, 4) == 6
    assert optional_diff(4, 10) == -6
    assert optional_diff(10, None) is None
    assert optional_diff(None, 10) is None
    assert optional_diff(None, None) is None


def test_subtraction_example() -> None:
    """Subtraction follows the optional rule field by field."""
    left = Module(ro_code=10, ro_data=None, rw_data=20)
    right = Module(ro_code=5, ro_data=4, rw_data=11)
    assert left - right == Module(ro_code=5, ro_data=None, rw_data=9)
    assert subtract_modules(left, right) == left - right


@pytest.mark.parametrize("left", _MODULES)
@pytest.mark.parametrize("right", _MODULES)
def test_delta_fields_exist_iff_both_present(left: Module, right: Module) -> None:
    """Each delta field is `left - right` when both are present and None otherwise."""
    delta = left - right
    for field in ("ro_code", "ro_data", "rw_data"):
        left_value = getattr(left, field)
        right_value = getattr(right, field)
        if left_value is None or right_value is None:
            assert getattr(delta, field) is None
        else:
            assert getattr(delta, field) == left_value - right_value


@pytest.mark.parametrize("module", _MODULES)
def test_self_delta_is_zero_or_absent(module: Module) -> None:
    """Subtracting a module from itself never yields a non-zero size."""
    delta = module - module
    assert all(value in (0, None) for value in dataclasses.astuple(delta))


def test_subtracting_non_module_is_unsupported() -> None:
    with pytest.raises(TypeError):
        Module(ro_code=1) - 1  # type: ignore[operator]


def test_total_sums_all_three_sizes() -> None:
    assert Module(ro_code=88, ro_data=152, rw_data=72).total() == 312


def test_total_is_zero_when_any_size_is_missing() -> None:
    """Known quirk: a missing size makes the total 0 instead of a partial sum."""
    assert Module(ro_code=390).total() == 0
    assert Module(ro_code=168, ro_data=None, rw_data=20).total() == 0
    assert Module().total() == 0


def test_modules_are_immutable_value_objects() -> None:
    module = Module(ro_code=1, ro_data=2, rw_data=3)
    assert module == Module(ro_code=1, ro_data=2, rw_data=3)
    assert module != Module(ro_code=1, ro_data=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        module.ro_code = 5  # type: ignore[misc]


def test_size_to_string_width_and_placeholder() -> None:
    """Sizes render right-aligned in six characters; absent sizes as dashes."""
    assert size_to_string(526) == "   526"
    assert size_to_string(-2) == "    -2"
    assert size_to_string(None) == "------"


def test_module_str_layout() -> None:
    """String rendering keeps the label/tab layout used by downstream diffs."""
    module = Module(ro_code=526, ro_data=436, rw_data=None)
    assert str(module) == "ro_code:    526 \t ro_data:    436 \t rw_data: ------"


def test_module_as_dict() -> None:
    assert Module(ro_code=1).as_dict() == {"ro_code": 1, "ro_data": None, "rw_data": None}


def test_obj_module_table_object_count() -> None:
    table = ObjModuleTable(name="FileSys.a: [3]", table={"FAT_Dir.o": Module(ro_code=536, ro_data=24)})
    assert table.object_count == 1
    assert ObjModuleTable(name="command line: [2]", table={}).object_count == 0
