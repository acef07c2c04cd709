"""Exceptions raised while reading or parsing map files."""

from __future__ import annotations


class MapError(Exception):
    """Base class for map file failures."""


class MapReadError(MapError, OSError):
    """The input could not be read completely."""


class MapParseError(MapError, ValueError):
    """The module summary section could not be parsed.

    The message is intentionally opaque; details are logged at DEBUG level.
    """
