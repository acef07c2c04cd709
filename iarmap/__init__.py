"""Public API exports for the IAR map parser and comparison helpers."""

from .compare import (
    ChangedObject,
    MapComparison,
    NameDifference,
    ObjectNameDifference,
    UniqueObject,
    ValueDifference,
    compare_combined_result,
    compare_group_names,
    compare_object_names,
    compare_object_values,
    compare_reports,
    flatten_tables,
)
from .errors import MapError, MapParseError, MapReadError
from .models import CombinedMapParse, Module, ObjModuleTable, subtract_modules
from .parser import parse_both_map_files, parse_map_bytes, parse_map_file, parse_map_stream

__all__ = [
    "ChangedObject",
    "CombinedMapParse",
    "MapComparison",
    "MapError",
    "MapParseError",
    "MapReadError",
    "Module",
    "NameDifference",
    "ObjModuleTable",
    "ObjectNameDifference",
    "UniqueObject",
    "ValueDifference",
    "compare_combined_result",
    "compare_group_names",
    "compare_object_names",
    "compare_object_values",
    "compare_reports",
    "flatten_tables",
    "parse_both_map_files",
    "parse_map_bytes",
    "parse_map_file",
    "parse_map_stream",
    "subtract_modules",
]
