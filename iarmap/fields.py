"""Fixed-width field decoding helpers used by map parsing."""

from __future__ import annotations

import re

SIZE_FIELD_WIDTH = 7
SIZE_FIELD_GAP = 2
DEFAULT_NAME_WIDTH = 35

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _spaceless(span: bytes) -> str | None:
    """Decode bytes and drop every space character, or return None."""

    try:
        text = span.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return text.replace(" ", "")


def decode_size(span: bytes) -> int | None:
    """Decode one size column into an integer.

    Spaces are thousands separators (`"  1 360"` is 1360). A blank column,
    non-numeric text or invalid bytes all decode to None.
    """

    cleaned = _spaceless(span)
    if not cleaned or not _INTEGER_RE.fullmatch(cleaned):
        return None
    return int(cleaned)


def normalize_object_name(span: bytes) -> str | None:
    """Decode the name column, dropping its padding spaces."""

    return _spaceless(span)


def is_dash_run(text: str) -> bool:
    """Return True when `text` is one or more dashes and nothing else."""

    return bool(text) and text.strip("-") == ""
