"""Core data types shared by the parser, the ray caster and the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

PLANE_WIDTH = 1920
PLANE_HEIGHT = 1080
FOV_ANGLE = 60.0
CUBE_SIZE = 1080
MOVE_SPEED = 200
ROTATION_SPEED = 3.0
PIXEL_BUFFER = 216
BYTES_PER_PIXEL = 4


class Element(IntEnum):
    """Kinds of lines in a scene description, in their required order."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3
    FLOOR = 4
    CEILING = 5
    NONE = 6


@dataclass(frozen=True)
class ElementLine:
    """One classified line of a scene file: its kind and its cleaned value."""

    kind: Element
    value: str


@dataclass(frozen=True)
class Vec2:
    """A point or vector in pixel space."""

    x: float
    y: float

    def moved(self, dx: float, dy: float) -> Vec2:
        """Return a new point shifted by (dx, dy)."""
        return Vec2(self.x + dx, self.y + dy)

    def distance_to(self, other: Vec2) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class Scene:
    """A validated scene: the map rows, wall texture paths and RGBA colours."""

    rows: list[str]
    north: str
    south: str
    west: str
    east: str
    floor_color: int
    ceiling_color: int


@dataclass
class Ray:
    """The result of casting one ray through the map."""

    angle: float
    h_hit: Vec2 | None = None
    v_hit: Vec2 | None = None
    dist: float = 0.0
    slice_len: int = 0
    top_wall_y: int = 0
    is_vertical: bool = False
    extra: dict = field(default_factory=dict, repr=False, compare=False)