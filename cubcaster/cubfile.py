"""Reading and validating ``.cub`` scene files."""

from __future__ import annotations

import os
from collections.abc import Sequence

from cubcaster.elements import (
    color_to_rgba,
    is_x_filetype,
    split_sections,
    valid_textures,
)
from cubcaster.mapcheck import valid_map
from cubcaster.models import Element, Scene
from cubcaster.textutil import is_space, read_lines


class CubFileError(Exception):
    """Raised when a scene file cannot be read or is not a valid scene."""


def is_empty_line(text: str) -> bool:
    """True if the line holds nothing but whitespace."""
    return all(is_space(ch) for ch in text)


def _can_open(path: str) -> bool:
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def cub_name_is_valid(argv: Sequence[str]) -> bool:
    """True if argv holds exactly one argument naming a readable ``.cub`` file."""
    if len(argv) != 2:
        return False
    name = argv[1]
    return is_x_filetype(name, ".cub") and _can_open(name)


def load_lines(path: str | os.PathLike) -> list[str]:
    """Read every line of a scene file, newlines kept.

    Raises CubFileError if the file cannot be read or is empty.
    """
    try:
        lines = read_lines(path)
    except (OSError, ValueError) as exc:
        raise CubFileError(f"cannot read {os.fspath(path)!r}: {exc}") from exc
    if not lines:
        raise CubFileError(f"empty scene file: {os.fspath(path)!r}")
    return lines


def parse_scene(lines: Sequence[str]) -> Scene:
    """Build a validated Scene from the raw lines of a scene file."""
    elements, rows = split_sections(lines)
    if not elements:
        raise CubFileError("scene has no texture or colour lines")
    if not rows:
        raise CubFileError("scene has no map")
    if not valid_map(rows):
        raise CubFileError("map is invalid: it needs one player and closed walls")
    if not valid_textures(elements):
        raise CubFileError("texture or colour lines are invalid")
    values = {element.kind: element.value for element in elements}
    return Scene(
        rows=list(rows),
        north=values[Element.NORTH],
        south=values[Element.SOUTH],
        west=values[Element.WEST],
        east=values[Element.EAST],
        floor_color=color_to_rgba(values[Element.FLOOR]),
        ceiling_color=color_to_rgba(values[Element.CEILING]),
    )


def load_scene(path: str | os.PathLike) -> Scene:
    """Read and validate the scene file at ``path``."""
    return parse_scene(load_lines(path))