"""Casting rays from the player's position through the map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cubcaster.geometry import (
    degrees_to_radians,
    grid_to_pixel,
    is_ray_northeast,
    is_ray_northwest,
    is_ray_southeast,
    is_ray_southwest,
    movement_len_h,
    movement_len_v,
    normalize_angle,
    pixel_to_grid,
    step_inside_grid,
)
from cubcaster.mapcheck import is_direction_letter, row_length
from cubcaster.models import (
    CUBE_SIZE,
    FOV_ANGLE,
    PLANE_HEIGHT,
    PLANE_WIDTH,
    Ray,
    Vec2,
)

Cell = tuple[int, int]

_MARKER_ANGLES = {"E": 0.0, "N": 90.0, "W": 180.0}
_RAY_SPACES = frozenset(" \t\n")


def find_player(grid: Sequence[str]) -> Cell:
    """Return the (x, y) cell of the first player start marker.

    Only the part of each row up to its last wall is searched. Raises
    ValueError if the map has no player.
    """
    for y, row in enumerate(grid):
        for x, ch in enumerate(row[: row_length(row)]):
            if is_direction_letter(ch):
                return x, y
    raise ValueError("map has no player start")


def initial_viewing_angle(marker: str) -> float:
    """Viewing angle for a start marker: E 0, N 90, W 180, anything else 270."""
    return _MARKER_ANGLES.get(marker, 270.0)


def is_out_of_map(grid: Sequence[str], cell: Cell) -> bool:
    """True if the cell lies outside the map or past its row's last wall."""
    x, y = cell
    if x < 0 or y < 0 or y >= len(grid):
        return True
    return x >= row_length(grid[y])


def is_wall(grid: Sequence[str], cell: Cell) -> bool:
    """True if the cell holds a wall block."""
    x, y = cell
    return grid[y][x] == "1"


def is_whitespace(grid: Sequence[str], cell: Cell) -> bool:
    """True if the cell holds a space, tab or newline."""
    x, y = cell
    return grid[y][x] in _RAY_SPACES


def blocks_ray(grid: Sequence[str], cell: Cell) -> bool:
    """True if a ray stops at this cell: off the map, a wall or a blank."""
    return is_out_of_map(grid, cell) or is_wall(grid, cell) or is_whitespace(grid, cell)


def first_horizontal_point(angle: float, origin: Vec2, cube_size: int) -> Vec2:
    """First crossing of a horizontal grid line by a ray from ``origin``.

    Raises ValueError for rays at 0 or 180 degrees, which never cross one.
    """
    if is_ray_northeast(angle) or is_ray_northwest(angle) or angle == 90.0:
        y = math.floor(origin.y / cube_size) * cube_size
        straight = angle == 90.0
    elif is_ray_southwest(angle) or is_ray_southeast(angle) or angle == 270.0:
        y = math.floor(origin.y / cube_size) * cube_size + cube_size
        straight = angle == 270.0
    else:
        raise ValueError(f"ray at {angle} never crosses a horizontal grid line")
    if straight:
        x = origin.x
    else:
        x = origin.x + (origin.y - y) / math.tan(degrees_to_radians(angle))
    return Vec2(float(x), float(y))


def first_vertical_point(angle: float, origin: Vec2, cube_size: int) -> Vec2:
    """First crossing of a vertical grid line by a ray from ``origin``.

    Raises ValueError for rays at 90 or 270 degrees, which never cross one.
    """
    if is_ray_northeast(angle) or is_ray_southeast(angle) or angle == 0.0:
        x = math.floor(origin.x / cube_size) * cube_size + cube_size
        straight = angle == 0.0
    elif is_ray_northwest(angle) or is_ray_southwest(angle) or angle == 180.0:
        x = math.floor(origin.x / cube_size) * cube_size
        straight = angle == 180.0
    else:
        raise ValueError(f"ray at {angle} never crosses a vertical grid line")
    if straight:
        y = origin.y
    else:
        y = origin.y + (origin.x - x) * math.tan(degrees_to_radians(angle))
    return Vec2(float(x), float(y))


def _trace(grid: Sequence[str], point: Vec2, step: Vec2, cube_size: int) -> Vec2:
    while True:
        cell = (pixel_to_grid(point.x, cube_size), pixel_to_grid(point.y, cube_size))
        if blocks_ray(grid, cell):
            return point
        point = point.moved(step.x, step.y)


def trace_horizontal(
    grid: Sequence[str], angle: float, origin: Vec2, cube_size: int
) -> Vec2 | None:
    """Point where a ray stops along horizontal grid lines, or None at 0 and 180."""
    if angle in (0.0, 180.0):
        return None
    start = step_inside_grid(first_horizontal_point(angle, origin, cube_size), angle)
    return _trace(grid, start, movement_len_h(angle, cube_size), cube_size)


def trace_vertical(
    grid: Sequence[str], angle: float, origin: Vec2, cube_size: int
) -> Vec2 | None:
    """Point where a ray stops along vertical grid lines, or None at 90 and 270."""
    if angle in (90.0, 270.0):
        return None
    start = step_inside_grid(first_vertical_point(angle, origin, cube_size), angle)
    return _trace(grid, start, movement_len_v(angle, cube_size), cube_size)


def _usable(hit: Vec2 | None) -> bool:
    return hit is not None and hit.x >= 0 and hit.y >= 0


def choose_hit(origin: Vec2, h_hit: Vec2 | None, v_hit: Vec2 | None) -> tuple[float, bool]:
    """Pick the nearer of the two hits.

    Returns the distance and whether the vertical hit won; ties go to the
    vertical hit. Hits that are missing or have negative coordinates are
    ignored. Raises ValueError if neither hit is usable.
    """
    h_ok, v_ok = _usable(h_hit), _usable(v_hit)
    if not h_ok and not v_ok:
        raise ValueError("ray has no usable intersection")
    if not h_ok:
        return origin.distance_to(v_hit), True
    if not v_ok:
        return origin.distance_to(h_hit), False
    h_dist = origin.distance_to(h_hit)
    v_dist = origin.distance_to(v_hit)
    if h_dist < v_dist:
        return h_dist, False
    return v_dist, True


def projected_slice_len(dist: float, cube_size: int, len_to_plane: float) -> int:
    """Height in pixels of the wall slice seen at distance ``dist``."""
    if dist <= 0:
        raise ValueError(f"distance must be positive, got {dist}")
    return int(cube_size / dist * len_to_plane)


def top_wall_y(slice_len: int, plane_height: int) -> int:
    """Row where a centred wall slice starts, never above the top of the plane."""
    return max(plane_height // 2 - slice_len // 2, 0)


class RayCaster:
    """The player's view of a map: position, heading and one ray per column."""

    def __init__(
        self,
        grid: Sequence[str],
        plane_width: int = PLANE_WIDTH,
        plane_height: int = PLANE_HEIGHT,
        cube_size: int = CUBE_SIZE,
        fov: float = FOV_ANGLE,
    ) -> None:
        self.grid = list(grid)
        self.plane_width = plane_width
        self.plane_height = plane_height
        self.cube_size = cube_size
        self.fov = fov
        self.player_height = cube_size // 2
        x, y = find_player(self.grid)
        self.player_cell: Cell = (x, y)
        self.viewing_angle = initial_viewing_angle(self.grid[y][x])
        row = self.grid[y]
        self.grid[y] = row[:x] + "0" + row[x + 1:]
        self.position = Vec2(grid_to_pixel(x, cube_size), grid_to_pixel(y, cube_size))
        self.len_to_plane_center = (plane_width / 2) / math.tan(degrees_to_radians(fov / 2))
        self.angle_step = fov / plane_width

    def ray_angles(self) -> list[float]:
        """Angles of the rays, left edge of the view first, each in [0, 360)."""
        angles: list[float] = []
        angle = self.viewing_angle + self.fov / 2
        for _ in range(self.plane_width):
            angle = normalize_angle(angle)
            angles.append(angle)
            angle -= self.angle_step
        return angles

    def _cast_one(self, angle: float) -> Ray:
        h_hit = trace_horizontal(self.grid, angle, self.position, self.cube_size)
        v_hit = trace_vertical(self.grid, angle, self.position, self.cube_size)
        dist, is_vertical = choose_hit(self.position, h_hit, v_hit)
        dist *= math.cos(degrees_to_radians(angle - self.viewing_angle))
        slice_len = projected_slice_len(dist, self.cube_size, self.len_to_plane_center)
        return Ray(
            angle=angle,
            h_hit=h_hit,
            v_hit=v_hit,
            dist=dist,
            slice_len=slice_len,
            top_wall_y=top_wall_y(slice_len, self.plane_height),
            is_vertical=is_vertical,
        )

    def cast(self) -> list[Ray]:
        """Cast every ray of the current view."""
        return [self._cast_one(angle) for angle in self.ray_angles()]