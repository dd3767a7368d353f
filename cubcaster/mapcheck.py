"""Validation and measurement of the map grid."""

from __future__ import annotations

from collections.abc import Sequence

from cubcaster.textutil import is_space

_DIRECTIONS = frozenset("NSEW")
_VISITED = "V"


def is_direction_letter(ch: str) -> bool:
    """True for a player start marker: N, S, E or W."""
    return ch in _DIRECTIONS


def is_open_cell(ch: str) -> bool:
    """True for a walkable cell: '0' or a player start marker."""
    return ch == "0" or is_direction_letter(ch)


def count_players(rows: Sequence[str]) -> int:
    """Number of player start markers in the map."""
    return sum(is_direction_letter(ch) for row in rows for ch in row)


def has_single_player(rows: Sequence[str]) -> bool:
    """True if the map holds exactly one player start."""
    return count_players(rows) == 1


def _flood(grid: list[list[str]], row: int, col: int) -> bool:
    height = len(grid)
    stack = [(row, col)]
    while stack:
        r, c = stack.pop()
        if r < 0 or r >= height or c < 0 or c > len(grid[r]):
            continue
        cell = grid[r][c] if c < len(grid[r]) else ""
        if (r == 0 or c == 0 or r == height - 1) and is_open_cell(cell):
            return False
        if cell == "" or is_space(cell):
            return False
        if cell in (_VISITED, "1"):
            continue
        grid[r][c] = _VISITED
        stack.extend(((r, c - 1), (r - 1, c), (r, c + 1), (r + 1, c)))
    return True


def is_enclosed(rows: Sequence[str]) -> bool:
    """True if no open cell can reach the map edge, a blank, or a row end."""
    grid = [list(row) for row in rows]
    for r, row in enumerate(grid):
        for c in range(len(row)):
            if is_open_cell(row[c]) and not _flood(grid, r, c):
                return False
    return True


def valid_map(rows: Sequence[str]) -> bool:
    """One player and walls that close the playable area."""
    return has_single_player(rows) and is_enclosed(rows)


def count_open_cells(rows: Sequence[str]) -> int:
    """Number of walkable cells, player start included."""
    return sum(is_open_cell(ch) for row in rows for ch in row)


def map_height(rows: Sequence[str]) -> int:
    """Number of rows in the map."""
    return len(rows)


def row_length(line: str) -> int:
    """Length of a row up to and including its last wall block."""
    return line.rfind("1") + 1


def map_width(rows: Sequence[str]) -> int:
    """Length of the longest row, measured to its last wall block."""
    return max((row_length(row) for row in rows), default=0)