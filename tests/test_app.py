import numpy as np
import pytest

from cubcaster.app import Game, main
from cubcaster.models import MOVE_SPEED, ROTATION_SPEED, Scene, Vec2
from cubcaster.movement import Move
from cubcaster.renderer import WallTextures, texture_color

ROWS = [
    "1111111",
    "1000001",
    "1000001",
    "1000001",
    "1000001",
    "100N001",
    "1111111",
]
FLOOR = 0x203040FF
CEILING = 0x506070FF


def solid(rgba):
    tex = np.zeros((4, 4, 4), dtype=np.uint8)
    tex[:, :] = rgba
    return tex


@pytest.fixture(scope="module")
def walls():
    return WallTextures(
        north=solid((1, 2, 3, 255)),
        south=solid((4, 5, 6, 255)),
        west=solid((7, 8, 9, 255)),
        east=solid((10, 11, 12, 255)),
    )


@pytest.fixture
def game(walls):
    scene = Scene(rows=list(ROWS), north="n.png", south="s.png", west="w.png",
                  east="e.png", floor_color=FLOOR, ceiling_color=CEILING)
    return Game(scene, walls)


def test_initial_frame_has_ceiling_wall_and_floor(game, walls):
    frame = game.frame
    center = frame.shape[1] // 2
    assert frame[0, center] == CEILING
    assert frame[-1, center] == FLOOR
    assert frame[frame.shape[0] // 2, center] == texture_color(walls.north, 0, 0)


def test_one_ray_per_column(game):
    assert len(game.rays) == game.frame.shape[1]


def test_no_input_draws_nothing(game):
    assert game.handle_input(None, False, False) is False


def test_forward_moves_player(game):
    start = game.caster.position
    assert game.handle_input(Move.FORWARD, False, False) is True
    assert game.caster.position.x == pytest.approx(start.x, abs=1e-6)
    assert game.caster.position.y == pytest.approx(start.y - MOVE_SPEED)


def test_turn_left_rotates_and_recasts(game):
    first = game.rays[0].angle
    assert game.handle_input(None, True, False) is True
    assert game.caster.viewing_angle == pytest.approx(90.0 + ROTATION_SPEED)
    assert game.rays[0].angle == pytest.approx(first + ROTATION_SPEED)


def test_blocked_move_cancels_rotation(game):
    game.caster.position = Vec2(3780.0, 1420.0)
    assert game.handle_input(Move.FORWARD, True, False) is False
    assert game.caster.position == Vec2(3780.0, 1420.0)
    assert game.caster.viewing_angle == 90.0


def test_render_returns_frame(game):
    assert game.render() is game.frame


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "Error\n"


def test_main_with_wrong_extension(tmp_path, capsys):
    path = tmp_path / "scene.txt"
    path.write_text("1\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err == "Error\n"


def test_main_with_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().err == "Error\n"


def test_main_with_invalid_scene(tmp_path, capsys):
    path = tmp_path / "bad.cub"
    path.write_text("NO ./missing.png\n\n111\n101\n111\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err == "Error\n"