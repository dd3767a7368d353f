"""Angle and grid helpers for the ray caster.

Angles are in degrees, counter-clockwise from east: 90 is north, 270 south.
Pixel y grows downward.
"""

from __future__ import annotations

import math

from cubcaster.models import Vec2


def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * (math.pi / 180.0)


def grid_to_pixel(grid: int, cube_size: int) -> float:
    """Pixel coordinate of the centre of a grid cell."""
    return float(grid * cube_size + cube_size // 2)


def pixel_to_grid(pixel: float, cube_size: int) -> int:
    """Grid cell holding a pixel coordinate, truncated toward zero."""
    return int(pixel / cube_size)


def normalize_angle(angle: float) -> float:
    """Bring an angle into the range [0, 360)."""
    angle = math.fmod(angle, 360.0)
    if angle < 0.0:
        angle += 360.0
    return angle


def is_ray_up(angle: float) -> bool:
    return 0.0 <= angle < 180.0


def is_ray_down(angle: float) -> bool:
    return 180.0 <= angle < 360.0


def is_ray_left(angle: float) -> bool:
    return 90.0 <= angle < 270.0


def is_ray_right(angle: float) -> bool:
    return 270.0 <= angle < 360.0 or 0.0 <= angle < 90.0


def is_ray_northeast(angle: float) -> bool:
    return 0.0 < angle < 90.0


def is_ray_northwest(angle: float) -> bool:
    return 90.0 < angle < 180.0


def is_ray_southwest(angle: float) -> bool:
    return 180.0 < angle < 270.0


def is_ray_southeast(angle: float) -> bool:
    return 270.0 < angle < 360.0


def step_inside_grid(point: Vec2, angle: float) -> Vec2:
    """Nudge a point on a grid line one pixel into the cell the ray enters."""
    if is_ray_northeast(angle) or angle == 0.0:
        return point.moved(1, 0 if angle == 0.0 else -1)
    if is_ray_northwest(angle) or angle in (180.0, 90.0):
        return point.moved(0 if angle == 90.0 else -1, 0 if angle == 180.0 else -1)
    if is_ray_southwest(angle) or angle == 270.0:
        return point.moved(0 if angle == 270.0 else -1, 1)
    if is_ray_southeast(angle):
        return point.moved(1, 1)
    return point


def movement_len_h(angle: float, cube_size: int) -> Vec2:
    """Step between successive horizontal grid-line crossings of a ray.

    Raises ValueError for rays parallel to the horizontal lines (0 and 180).
    """
    if is_ray_northeast(angle) or is_ray_northwest(angle) or angle == 90.0:
        dy = -float(cube_size)
    elif is_ray_southwest(angle) or is_ray_southeast(angle) or angle == 270.0:
        dy = float(cube_size)
    else:
        raise ValueError(f"ray at {angle} never crosses a horizontal grid line")
    if angle in (90.0, 270.0):
        dx = 0.0
    else:
        dx = cube_size / math.tan(degrees_to_radians(angle))
        if is_ray_southwest(angle) or is_ray_southeast(angle):
            dx = -dx
    return Vec2(dx, dy)


def movement_len_v(angle: float, cube_size: int) -> Vec2:
    """Step between successive vertical grid-line crossings of a ray.

    Raises ValueError for rays parallel to the vertical lines (90 and 270).
    """
    if is_ray_northeast(angle) or is_ray_southeast(angle) or angle == 0.0:
        dx = float(cube_size)
    elif is_ray_northwest(angle) or is_ray_southwest(angle) or angle == 180.0:
        dx = -float(cube_size)
    else:
        raise ValueError(f"ray at {angle} never crosses a vertical grid line")
    if angle in (0.0, 180.0):
        dy = 0.0
    else:
        dy = cube_size * math.tan(degrees_to_radians(angle))
        if is_ray_southeast(angle) or is_ray_northeast(angle):
            dy = -dy
    return Vec2(dx, dy)