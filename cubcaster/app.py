"""The game loop and the command-line entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import numpy as np
import pygame

from cubcaster.cubfile import CubFileError, cub_name_is_valid, load_scene
from cubcaster.models import CUBE_SIZE, PLANE_HEIGHT, PLANE_WIDTH, Scene
from cubcaster.movement import Move, rotate, try_move
from cubcaster.raycaster import RayCaster
from cubcaster.renderer import WallTextures, draw_frame, load_wall_textures

_MOVE_KEYS = (
    (pygame.K_w, Move.FORWARD),
    (pygame.K_s, Move.BACKWARD),
    (pygame.K_a, Move.LEFT),
    (pygame.K_d, Move.RIGHT),
)


class Game:
    """A scene being played: the ray caster, its rays and the current frame."""

    def __init__(self, scene: Scene, textures: WallTextures) -> None:
        self.scene = scene
        self.textures = textures
        self.caster = RayCaster(scene.rows)
        self.rays = self.caster.cast()
        self.frame = np.zeros(
            (self.caster.plane_height, self.caster.plane_width), dtype=np.uint32
        )
        self.render()

    def handle_input(self, move: Move | None, turn_left: bool, turn_right: bool) -> bool:
        """Apply one tick of input; return True if a new frame was drawn.

        A blocked move cancels the whole tick, rotation included.
        """
        if move is None and not turn_left and not turn_right:
            return False
        caster = self.caster
        position = try_move(
            caster.grid, caster.position, caster.viewing_angle, move, caster.cube_size
        )
        if position is None:
            return False
        caster.position = position
        caster.viewing_angle = rotate(caster.viewing_angle, turn_left, turn_right)
        self.rays = caster.cast()
        self.render()
        return True

    def render(self) -> np.ndarray:
        """Draw the current rays into the frame and return it."""
        return draw_frame(
            self.frame,
            self.rays,
            self.textures,
            self.scene.floor_color,
            self.scene.ceiling_color,
            self.caster.cube_size,
        )


def _frame_to_rgb(frame: np.ndarray) -> np.ndarray:
    rgb = np.stack(
        [(frame >> 24) & 0xFF, (frame >> 16) & 0xFF, (frame >> 8) & 0xFF], axis=-1
    ).astype(np.uint8)
    return rgb.transpose(1, 0, 2)


def _pressed_move(keys) -> Move | None:
    for key, move in _MOVE_KEYS:
        if keys[key]:
            return move
    return None


def run(scene: Scene) -> int:
    """Open a window and play the scene until it is closed or ESC is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((PLANE_WIDTH, PLANE_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption("cub3d")
        game = Game(scene, load_wall_textures(scene, CUBE_SIZE))
        image = pygame.surfarray.make_surface(_frame_to_rgb(game.frame))
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (
                    event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                ):
                    running = False
            if not running:
                break
            keys = pygame.key.get_pressed()
            if game.handle_input(_pressed_move(keys), keys[pygame.K_LEFT], keys[pygame.K_RIGHT]):
                image = pygame.surfarray.make_surface(_frame_to_rgb(game.frame))
            screen.blit(pygame.transform.scale(image, screen.get_size()), (0, 0))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the scene file named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not cub_name_is_valid(["cubcaster", *args]):
        sys.stderr.write("Error\n")
        return 1
    try:
        scene = load_scene(args[0])
        return run(scene)
    except (CubFileError, OSError, ValueError, pygame.error):
        sys.stderr.write("Error\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())