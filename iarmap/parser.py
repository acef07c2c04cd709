"""Fixed-width parser for the module summary section of IAR map files.

The section looks like::

    *******************************************************************************
    *** MODULE SUMMARY
    ***

        Module                         ro code  ro data  rw data
        ------                         -------  -------  -------
    C:\\Projects\\A\\Obj: [1]
        Bar.o                               22      44
        Baz.o                               33      55       22
        --------------------------------------------------------
        Total:                              55      99       22

Rows are positional: the object name fills a fixed-width column and the sizes
follow in 7-byte columns separated by 2-byte gaps. Trailing empty columns are
not printed, so the length of the sizes part tells which columns exist.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Literal, TypeAlias

from .errors import MapParseError, MapReadError
from .fields import (
    DEFAULT_NAME_WIDTH,
    SIZE_FIELD_GAP,
    SIZE_FIELD_WIDTH,
    decode_size,
    is_dash_run,
    normalize_object_name,
)
from .models import CombinedMapParse, Module, ObjModuleTable

logger = logging.getLogger(__name__)

RowStatus: TypeAlias = Literal["matched", "terminator", "malformed"]
ModuleTable: TypeAlias = dict[str, Module]

_STARS_RE = re.compile(rb"\*+")
_SUMMARY_TITLE_RE = re.compile(rb"\*+[ \t]+MODULE SUMMARY")
_COLUMN_TITLES_RE = re.compile(rb"[ \t]*Module[ \t]+ro code[ \t]+ro data[ \t]+rw data")
_COLUMN_UNDERLINE_RE = re.compile(rb"[ \t]*-[ \t-]*")
_TABLE_END_RE = re.compile(rb"[ \t]+-+")
_SECTION_MARKER = b"*"


@dataclass(frozen=True, slots=True)
class RowResult:
    """Outcome of parsing one table line.

    `"terminator"` means the name column held only dashes: the line is most
    likely the table end and the caller should retry it as such.
    """

    status: RowStatus
    name: str | None = None
    module: Module | None = None


def _size_span(sizes: bytes, index: int) -> bytes:
    """Return the bytes of the size column at `index` (0-based)."""

    start = index * (SIZE_FIELD_WIDTH + SIZE_FIELD_GAP)
    return sizes[start : start + SIZE_FIELD_WIDTH]


def _ro_code_only(sizes: bytes) -> Module:
    return Module(ro_code=decode_size(_size_span(sizes, 0)))


def _ro_code_ro_data(sizes: bytes) -> Module:
    return Module(
        ro_code=decode_size(_size_span(sizes, 0)),
        ro_data=decode_size(_size_span(sizes, 1)),
    )


def _ro_code_ro_data_rw_data(sizes: bytes) -> Module:
    return Module(
        ro_code=decode_size(_size_span(sizes, 0)),
        ro_data=decode_size(_size_span(sizes, 1)),
        rw_data=decode_size(_size_span(sizes, 2)),
    )


# Keyed on the byte length of the sizes part of a row.
_SIZE_LAYOUTS: dict[int, Callable[[bytes], Module]] = {
    SIZE_FIELD_WIDTH: _ro_code_only,
    2 * SIZE_FIELD_WIDTH + SIZE_FIELD_GAP: _ro_code_ro_data,
    3 * SIZE_FIELD_WIDTH + 2 * SIZE_FIELD_GAP: _ro_code_ro_data_rw_data,
}


def _strip_line_ending(line: bytes) -> bytes:
    return line.rstrip(b"\r\n")


def _split_lines(data: bytes) -> list[bytes]:
    return [_strip_line_ending(line) for line in data.split(b"\n")]


def _is_blank(line: bytes) -> bool:
    return line.strip() == b""


def is_table_end(line: bytes) -> bool:
    """Return True for an indented run of dashes closing a table."""

    return _TABLE_END_RE.fullmatch(_strip_line_ending(line)) is not None


def parse_table_row(line: bytes, name_width: int = DEFAULT_NAME_WIDTH) -> RowResult:
    """Split one line into an object name and its sizes.

    The first `name_width` bytes hold the name; the rest of the line holds the
    sizes, whose length selects the column layout.
    """

    line = _strip_line_ending(line)
    name = normalize_object_name(line[:name_width])
    if name is None:
        logger.debug("Name column is not valid UTF-8: %r", line)
        return RowResult("malformed")
    if is_dash_run(name):
        return RowResult("terminator")
    if not name:
        logger.debug("Row has an empty name column: %r", line)
        return RowResult("malformed")

    sizes = line[name_width:]
    layout = _SIZE_LAYOUTS.get(len(sizes))
    if layout is None:
        logger.debug("Row %s has an unknown sizes layout of %d bytes", name, len(sizes))
        return RowResult("malformed")
    return RowResult("matched", name=name, module=layout(sizes))


def parse_module_table(
    lines: Sequence[bytes],
    start: int,
    name_width: int = DEFAULT_NAME_WIDTH,
) -> tuple[ModuleTable, int] | None:
    """Parse table rows starting at `lines[start]` up to and including the terminator.

    Returns the object table and the index of the first line after the
    terminator, or None when the lines are not closed by a terminator. A row
    with an unknown layout raises `MapParseError`. Repeated names keep the last
    row.
    """

    table: ModuleTable = {}
    index = start
    while index < len(lines):
        line = lines[index]
        if _is_blank(line):
            return None

        result = parse_table_row(line, name_width)
        if result.status == "matched":
            table[result.name] = result.module
            index += 1
            continue
        if result.status == "malformed":
            logger.debug("Malformed module row at line %d", index + 1)
            raise MapParseError("Failed to parse")

        # Dashes in the name column: only an indented dash run is a table end.
        if not is_table_end(line):
            return None
        return table, index + 1
    return None


def _find_banner(lines: Sequence[bytes]) -> int | None:
    """Return the index of the line after the MODULE SUMMARY banner."""

    for index in range(len(lines) - 2):
        if (
            _STARS_RE.fullmatch(lines[index])
            and _SUMMARY_TITLE_RE.fullmatch(lines[index + 1])
            and _STARS_RE.fullmatch(lines[index + 2])
        ):
            return index + 3
    return None


def _skip_blank_lines(lines: Sequence[bytes], index: int) -> int:
    while index < len(lines) and _is_blank(lines[index]):
        index += 1
    return index


def _skip_column_header(lines: Sequence[bytes], index: int) -> int | None:
    """Consume the column titles and their underline."""

    index = _skip_blank_lines(lines, index)
    if index + 1 >= len(lines):
        return None
    if not _COLUMN_TITLES_RE.fullmatch(lines[index]):
        return None
    if not _COLUMN_UNDERLINE_RE.fullmatch(lines[index + 1]):
        return None
    return index + 2


def _ends_group_list(lines: Sequence[bytes], index: int) -> bool:
    """Return True at end of input or at the start of the next report section."""

    return index >= len(lines) or lines[index].startswith(_SECTION_MARKER)


def _parse_group(
    lines: Sequence[bytes],
    index: int,
    name_width: int,
) -> tuple[ObjModuleTable, int] | None:
    """Parse one group header, its table and the `Total:` line after it."""

    header = lines[index].decode("utf-8", errors="replace")
    parsed = parse_module_table(lines, index + 1, name_width)
    if parsed is None:
        return None

    table, index = parsed
    if index < len(lines) and not _is_blank(lines[index]):
        index += 1
    return ObjModuleTable(name=header, table=table), _skip_blank_lines(lines, index)


def parse_module_summaries(data: bytes, name_width: int = DEFAULT_NAME_WIDTH) -> list[ObjModuleTable]:
    """Locate the module summary section in a map report and parse its groups.

    The group list ends at end of input, at the next `*` section marker, or at
    the first header whose table is not closed by an indented dash run (the
    `Gaps` / `Linker created` / `Grand Total` trailer).
    """

    lines = _split_lines(data)

    index = _find_banner(lines)
    if index is None:
        logger.debug("MODULE SUMMARY banner not found")
        raise MapParseError("Failed to parse")

    index = _skip_column_header(lines, index)
    if index is None:
        logger.debug("Module summary column header not found after banner")
        raise MapParseError("Failed to parse")

    index = _skip_blank_lines(lines, index)
    tables: list[ObjModuleTable] = []
    while not _ends_group_list(lines, index):
        group = _parse_group(lines, index, name_width)
        if group is None:
            logger.debug("Group list ends before line %d", index + 1)
            break
        table, index = group
        tables.append(table)

    if not tables:
        logger.debug("Module summary holds no object groups")
        raise MapParseError("Failed to parse")
    return tables


def parse_map_bytes(data: bytes, *, name_width: int = DEFAULT_NAME_WIDTH) -> list[ObjModuleTable]:
    """Parse a complete map report held in memory."""

    tables = parse_module_summaries(data, name_width)
    logger.info(
        "Parsed %d object groups with %d objects",
        len(tables),
        sum(table.object_count for table in tables),
    )
    return tables


def parse_map_stream(stream: BinaryIO, *, name_width: int = DEFAULT_NAME_WIDTH) -> list[ObjModuleTable]:
    """Read a binary stream to the end, then parse it."""

    try:
        data = stream.read()
    except OSError as exc:
        raise MapReadError("Failed to read") from exc
    return parse_map_bytes(data, name_width=name_width)


def parse_map_file(map_path: str | Path, *, name_width: int = DEFAULT_NAME_WIDTH) -> list[ObjModuleTable]:
    """Parse one map file into its object groups."""

    path = Path(map_path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise MapReadError(f"Failed to read {path}") from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return parse_map_bytes(data, name_width=name_width)


def parse_both_map_files(
    left_path: str | Path,
    right_path: str | Path,
    *,
    name_width: int = DEFAULT_NAME_WIDTH,
) -> CombinedMapParse:
    """Parse both map files and return them as one combined structure."""

    return CombinedMapParse(
        left_path=Path(left_path),
        right_path=Path(right_path),
        left=parse_map_file(left_path, name_width=name_width),
        right=parse_map_file(right_path, name_width=name_width),
    )
