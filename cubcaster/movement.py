"""Player rotation and collision-checked movement."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

from cubcaster.geometry import degrees_to_radians, normalize_angle, pixel_to_grid
from cubcaster.models import CUBE_SIZE, MOVE_SPEED, PIXEL_BUFFER, ROTATION_SPEED, Vec2
from cubcaster.raycaster import blocks_ray


class Move(Enum):
    """A movement key: the heading offset in radians and the direction sign."""

    FORWARD = (0.0, 1)
    BACKWARD = (0.0, -1)
    LEFT = (math.pi / 2, 1)
    RIGHT = (-math.pi / 2, 1)

    @property
    def offset(self) -> float:
        return self.value[0]

    @property
    def sign(self) -> int:
        return self.value[1]


def rotate(angle: float, turn_left: bool, turn_right: bool) -> float:
    """Turn the viewing angle; left wins if both turns are requested."""
    if turn_left:
        angle += ROTATION_SPEED
    elif turn_right:
        angle -= ROTATION_SPEED
    else:
        return angle
    return normalize_angle(angle)


def movement_vector(angle: float, move: Move) -> Vec2:
    """Pixel-space displacement for one step of ``move`` while facing ``angle``.

    Pixel y grows downward, so a step north has a negative y component.
    """
    heading = degrees_to_radians(angle) + move.offset
    return Vec2(
        math.cos(heading) * MOVE_SPEED * move.sign,
        -math.sin(heading) * MOVE_SPEED * move.sign,
    )


def _cell_is_free(grid: Sequence[str], x: float, y: float, cube_size: int) -> bool:
    cell = (pixel_to_grid(x, cube_size), pixel_to_grid(y, cube_size))
    return not blocks_ray(grid, cell)


def can_stand(grid: Sequence[str], x: float, y: float, cube_size: int = CUBE_SIZE) -> bool:
    """True if the point and the points a buffer away on each axis are all free."""
    probes = (
        (x, y),
        (x - PIXEL_BUFFER, y),
        (x + PIXEL_BUFFER, y),
        (x, y - PIXEL_BUFFER),
        (x, y + PIXEL_BUFFER),
    )
    return all(_cell_is_free(grid, px, py, cube_size) for px, py in probes)


def try_move(
    grid: Sequence[str],
    position: Vec2,
    angle: float,
    move: Move | None,
    cube_size: int = CUBE_SIZE,
) -> Vec2 | None:
    """New position after one step, the same position if there is no move,
    or None if the step would run into a wall or off the map."""
    if move is None:
        return position
    delta = movement_vector(angle, move)
    target = position.moved(delta.x, delta.y)
    if not can_stand(grid, target.x, target.y, cube_size):
        return None
    return target