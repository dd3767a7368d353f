"""Texture loading and drawing of ceiling, walls and floor into a frame.

A frame is a ``(height, width)`` numpy array of ``uint32`` RGBA colours.
Textures are ``(height, width, 4)`` numpy arrays of ``uint8`` RGBA bytes.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pygame

from cubcaster.geometry import is_ray_down, is_ray_left, is_ray_right, is_ray_up
from cubcaster.models import CUBE_SIZE, Ray, Scene

FALLBACK_COLOR = 0x000000FC


@dataclass
class WallTextures:
    """The four wall textures, one per compass face."""

    north: np.ndarray
    south: np.ndarray
    west: np.ndarray
    east: np.ndarray


def load_texture(path: str | os.PathLike, size: int = CUBE_SIZE) -> np.ndarray:
    """Load an image and scale it to ``size`` x ``size`` RGBA pixels.

    Raises OSError if the image cannot be loaded.
    """
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, FileNotFoundError) as exc:
        raise OSError(f"cannot load texture {os.fspath(path)!r}: {exc}") from exc
    scaled = pygame.transform.scale(surface, (size, size))
    data = pygame.image.tostring(scaled, "RGBA")
    return np.frombuffer(data, dtype=np.uint8).reshape(size, size, 4).copy()


def load_wall_textures(scene: Scene, size: int = CUBE_SIZE) -> WallTextures:
    """Load the four wall textures named by a scene."""
    return WallTextures(
        north=load_texture(scene.north, size),
        south=load_texture(scene.south, size),
        west=load_texture(scene.west, size),
        east=load_texture(scene.east, size),
    )


def texture_x(ray: Ray, cube_size: int) -> int:
    """Texture column hit by a ray: the offset of the hit along its wall block."""
    if ray.is_vertical:
        return int(ray.v_hit.y) % cube_size
    return int(ray.h_hit.x) % cube_size


def select_texture(ray: Ray, textures: WallTextures) -> np.ndarray | None:
    """Texture of the wall face the ray hit, or None for an unknown direction."""
    if ray.is_vertical and is_ray_right(ray.angle):
        return textures.east
    if ray.is_vertical and is_ray_left(ray.angle):
        return textures.west
    if not ray.is_vertical and is_ray_up(ray.angle):
        return textures.north
    if not ray.is_vertical and is_ray_down(ray.angle):
        return textures.south
    return None


def _pack(rgba: np.ndarray) -> np.ndarray:
    channels = rgba.astype(np.uint32)
    return (
        (channels[..., 0] << 24)
        | (channels[..., 1] << 16)
        | (channels[..., 2] << 8)
        | channels[..., 3]
    )


def _clamp(value: int, upper: int) -> int:
    return min(max(value, 0), upper - 1)


def texture_color(texture: np.ndarray, x: int, y: int) -> int:
    """RGBA colour of a texture pixel, coordinates clamped to the texture."""
    height, width = texture.shape[:2]
    return int(_pack(texture[_clamp(y, height), _clamp(x, width)]))


def draw_ceiling(frame: np.ndarray, column: int, top: int, color: int) -> None:
    """Fill a column from the top of the frame down to ``top``."""
    frame[: max(top, 0), column] = color


def draw_floor(frame: np.ndarray, column: int, top: int, color: int) -> None:
    """Fill a column from ``top`` down to the bottom of the frame."""
    frame[max(top, 0):, column] = color


def draw_wall_slice(
    frame: np.ndarray, column: int, ray: Ray, textures: WallTextures, cube_size: int
) -> int:
    """Draw the textured wall slice of a ray and return the row just below it."""
    height = frame.shape[0]
    top = ray.top_wall_y
    if ray.slice_len <= 0 or top >= height:
        return top
    count = min(ray.slice_len, height - top)
    bottom = top + count
    texture = select_texture(ray, textures)
    if texture is None:
        frame[top:bottom, column] = FALLBACK_COLOR
        return bottom
    step = cube_size / ray.slice_len
    start = (ray.slice_len - height) // 2 * step if ray.slice_len > height else 0.0
    tex_height, tex_width = texture.shape[:2]
    ys = np.clip((start + step * np.arange(count)).astype(np.int64), 0, tex_height - 1)
    x = _clamp(texture_x(ray, cube_size), tex_width)
    frame[top:bottom, column] = _pack(texture[ys, x])
    return bottom


def draw_frame(
    frame: np.ndarray,
    rays: Sequence[Ray],
    textures: WallTextures,
    floor_color: int,
    ceiling_color: int,
    cube_size: int = CUBE_SIZE,
) -> np.ndarray:
    """Draw ceiling, wall and floor for every ray, one column each."""
    for column, ray in enumerate(rays):
        draw_ceiling(frame, column, ray.top_wall_y, ceiling_color)
        bottom = draw_wall_slice(frame, column, ray, textures, cube_size)
        draw_floor(frame, column, bottom, floor_color)
    return frame