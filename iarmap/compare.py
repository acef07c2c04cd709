"""Comparison helpers for two parsed module summary sections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypedDict, TypeAlias

from .models import CombinedMapParse, Module, ObjModuleTable

ModulesByObject: TypeAlias = dict[str, Module]


class NameDifference(TypedDict):
    """Group headers present on only one side."""

    only_in_left: list[str]
    only_in_right: list[str]
    identical: bool


class UniqueObject(TypedDict):
    """An object present on one side, with that side's sizes."""

    name: str
    module: Module


class ObjectNameDifference(TypedDict):
    """Object names present on only one side."""

    only_in_left: list[UniqueObject]
    only_in_right: list[UniqueObject]
    identical: bool


class ChangedObject(TypedDict):
    """Size change details for an object present on both sides."""

    name: str
    left: Module
    right: Module
    delta: Module


class ValueDifference(TypedDict):
    """Objects present on both sides whose sizes differ."""

    changed: list[ChangedObject]
    identical: bool


class MapComparison(TypedDict):
    """Structured comparison output. Each stage reports independently."""

    groups: NameDifference
    objects: ObjectNameDifference
    values: ValueDifference


def compare_group_names(left: Iterable[ObjModuleTable], right: Iterable[ObjModuleTable]) -> NameDifference:
    """Compare group headers by exact string equality, `[n]` tag included."""

    left_names = {table.name for table in left}
    right_names = {table.name for table in right}
    return {
        "only_in_left": sorted(left_names - right_names),
        "only_in_right": sorted(right_names - left_names),
        "identical": left_names == right_names,
    }


def flatten_tables(tables: Iterable[ObjModuleTable]) -> ModulesByObject:
    """Merge every group's objects into one mapping.

    When the same object name appears in several groups the last one wins.
    """

    merged: ModulesByObject = {}
    for table in tables:
        merged.update(table.table)
    return merged


def compare_object_names(left: ModulesByObject, right: ModulesByObject) -> ObjectNameDifference:
    """Return objects found on only one side, sorted by name."""

    left_keys = set(left)
    right_keys = set(right)
    return {
        "only_in_left": [{"name": name, "module": left[name]} for name in sorted(left_keys - right_keys)],
        "only_in_right": [{"name": name, "module": right[name]} for name in sorted(right_keys - left_keys)],
        "identical": left_keys == right_keys,
    }


def compare_object_values(left: ModulesByObject, right: ModulesByObject) -> ValueDifference:
    """Compare sizes of objects present on both sides.

    Deltas are `left - right` and only exist for columns both sides printed.
    """

    changed: list[ChangedObject] = []
    for name in sorted(set(left) & set(right)):
        left_module = left[name]
        right_module = right[name]
        if left_module == right_module:
            continue
        changed.append(
            {
                "name": name,
                "left": left_module,
                "right": right_module,
                "delta": left_module - right_module,
            }
        )
    return {"changed": changed, "identical": not changed}


def compare_reports(left: list[ObjModuleTable], right: list[ObjModuleTable]) -> MapComparison:
    """Run the group, object-name and value comparisons for two parsed reports."""

    left_objects = flatten_tables(left)
    right_objects = flatten_tables(right)
    return {
        "groups": compare_group_names(left, right),
        "objects": compare_object_names(left_objects, right_objects),
        "values": compare_object_values(left_objects, right_objects),
    }


def compare_combined_result(combined_result: CombinedMapParse) -> MapComparison:
    """Compare the reports contained in a `CombinedMapParse`."""

    return compare_reports(combined_result.left, combined_result.right)
