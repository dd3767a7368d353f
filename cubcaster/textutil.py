"""Small text helpers used when reading scene files."""

from __future__ import annotations

import os

_SPACES = frozenset("\t\n\v\f\r ")


def is_space(ch: str) -> bool:
    """True for the ASCII whitespace characters: tab, newline, vt, ff, cr, space."""
    return ch in _SPACES and len(ch) == 1


def split_words(text: str, sep: str) -> list[str]:
    """Split on a separator character, dropping empty pieces."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [piece for piece in text.split(sep) if piece]


def read_lines(path: str | os.PathLike) -> list[str]:
    """Read a file into lines split on '\\n', each keeping its newline."""
    with open(path, encoding="utf-8", newline="") as handle:
        content = handle.read()
    pieces = content.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines