"""Core typed models shared by parser, comparison and rendering modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SIZE_RENDER_WIDTH = 6
SIZE_PLACEHOLDER = "-" * SIZE_RENDER_WIDTH


def optional_diff(left: int | None, right: int | None) -> int | None:
    """Subtract two optional sizes iff both are present."""

    if left is None or right is None:
        return None
    return left - right


def size_to_string(size: int | None) -> str:
    """Render one size right-aligned, or the placeholder when absent."""

    if size is None:
        return SIZE_PLACEHOLDER
    return f"{size:>{SIZE_RENDER_WIDTH}}"


@dataclass(frozen=True, slots=True)
class Module:
    """Section sizes of one object file. Every field is optional.

    `None` means the report printed nothing in that column, which is not the
    same as zero.
    """

    ro_code: int | None = None
    ro_data: int | None = None
    rw_data: int | None = None

    def total(self) -> int:
        """Return the sum of the three sizes.

        Returns `0` when any size is missing rather than a partial sum.
        """

        if self.ro_code is None or self.ro_data is None or self.rw_data is None:
            return 0
        return self.ro_code + self.ro_data + self.rw_data

    def __sub__(self, other: Module) -> Module:
        if not isinstance(other, Module):
            return NotImplemented
        return subtract_modules(self, other)

    def __str__(self) -> str:
        return (
            f"ro_code: {size_to_string(self.ro_code)} \t "
            f"ro_data: {size_to_string(self.ro_data)} \t "
            f"rw_data: {size_to_string(self.rw_data)}"
        )

    def as_dict(self) -> dict[str, int | None]:
        """Serialize the sizes into a JSON-friendly dictionary."""

        return {
            "ro_code": self.ro_code,
            "ro_data": self.ro_data,
            "rw_data": self.rw_data,
        }


def subtract_modules(left: Module, right: Module) -> Module:
    """Return the field-wise delta `left - right`.

    A field of the delta is present only when both sides have a value.
    """

    return Module(
        ro_code=optional_diff(left.ro_code, right.ro_code),
        ro_data=optional_diff(left.ro_data, right.ro_data),
        rw_data=optional_diff(left.rw_data, right.rw_data),
    )


@dataclass(frozen=True, slots=True)
class ObjModuleTable:
    """One object group: its verbatim header line and its object table."""

    name: str
    table: dict[str, Module]

    @property
    def object_count(self) -> int:
        """Return the number of object rows in the group."""

        return len(self.table)


@dataclass(slots=True)
class CombinedMapParse:
    """Container for both parsed map files."""

    left_path: Path
    right_path: Path
    left: list[ObjModuleTable]
    right: list[ObjModuleTable]

    def all_tables(self) -> list[ObjModuleTable]:
        """Return a flat list of groups from both map files."""

        return [*self.left, *self.right]
