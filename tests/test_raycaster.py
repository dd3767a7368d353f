import math

import pytest

from cubcaster.geometry import grid_to_pixel, normalize_angle, pixel_to_grid
from cubcaster.models import Vec2
from cubcaster.raycaster import (
    RayCaster,
    blocks_ray,
    choose_hit,
    find_player,
    first_horizontal_point,
    first_vertical_point,
    initial_viewing_angle,
    is_out_of_map,
    is_wall,
    is_whitespace,
    projected_slice_len,
    top_wall_y,
    trace_horizontal,
    trace_vertical,
)

CUBE = 64
ROOM = ["11111", "10001", "10N01", "10001", "11111"]


def _origin():
    return Vec2(grid_to_pixel(2, CUBE), grid_to_pixel(2, CUBE))


def _cell(point):
    return pixel_to_grid(point.x, CUBE), pixel_to_grid(point.y, CUBE)


def test_find_player():
    assert find_player(ROOM) == (2, 2)


def test_find_player_missing():
    with pytest.raises(ValueError):
        find_player(["111", "101", "111"])


@pytest.mark.parametrize(
    "marker, angle", [("E", 0.0), ("N", 90.0), ("W", 180.0), ("S", 270.0)]
)
def test_initial_viewing_angle(marker, angle):
    assert initial_viewing_angle(marker) == angle


def test_is_out_of_map():
    assert is_out_of_map(ROOM, (-1, 0))
    assert is_out_of_map(ROOM, (0, -1))
    assert is_out_of_map(ROOM, (0, len(ROOM)))
    assert is_out_of_map(ROOM, (5, 0))
    assert not is_out_of_map(ROOM, (4, 0))


def test_is_out_of_map_ignores_trailing_blanks():
    assert is_out_of_map(["1111  "], (4, 0))


def test_wall_and_whitespace():
    grid = ["1 1", "101"]
    assert is_wall(grid, (0, 0))
    assert not is_wall(grid, (1, 1))
    assert is_whitespace(grid, (1, 0))
    assert not is_whitespace(grid, (1, 1))
    assert blocks_ray(grid, (1, 0))
    assert not blocks_ray(grid, (1, 1))


def test_first_points_reject_parallel_rays():
    with pytest.raises(ValueError):
        first_horizontal_point(0.0, _origin(), CUBE)
    with pytest.raises(ValueError):
        first_vertical_point(90.0, _origin(), CUBE)


@pytest.mark.parametrize("angle", [30.0, 45.0, 120.0, 200.0, 300.0])
def test_first_horizontal_point_on_grid_line_and_ray(angle):
    origin = _origin()
    point = first_horizontal_point(angle, origin, CUBE)
    assert point.y % CUBE == 0
    slope = (origin.y - point.y) / (point.x - origin.x)
    assert slope == pytest.approx(math.tan(math.radians(angle)))


@pytest.mark.parametrize("angle", [30.0, 45.0, 120.0, 200.0, 300.0])
def test_first_vertical_point_on_grid_line_and_ray(angle):
    origin = _origin()
    point = first_vertical_point(angle, origin, CUBE)
    assert point.x % CUBE == 0
    slope = (origin.y - point.y) / (point.x - origin.x)
    assert slope == pytest.approx(math.tan(math.radians(angle)))


def test_trace_none_for_parallel_rays():
    assert trace_horizontal(ROOM, 0.0, _origin(), CUBE) is None
    assert trace_horizontal(ROOM, 180.0, _origin(), CUBE) is None
    assert trace_vertical(ROOM, 90.0, _origin(), CUBE) is None
    assert trace_vertical(ROOM, 270.0, _origin(), CUBE) is None


@pytest.mark.parametrize("angle", [10.0, 45.0, 90.0, 135.0, 200.0, 270.0, 315.0])
def test_trace_horizontal_stops_at_blocking_cell(angle):
    hit = trace_horizontal(ROOM, angle, _origin(), CUBE)
    assert blocks_ray(ROOM, _cell(hit))


@pytest.mark.parametrize("angle", [0.0, 10.0, 45.0, 135.0, 180.0, 200.0, 315.0])
def test_trace_vertical_stops_at_blocking_cell(angle):
    hit = trace_vertical(ROOM, angle, _origin(), CUBE)
    assert blocks_ray(ROOM, _cell(hit))


def test_trace_straight_up_keeps_column():
    origin = _origin()
    hit = trace_horizontal(ROOM, 90.0, origin, CUBE)
    assert hit.x == origin.x
    assert _cell(hit) == (2, 0)


def test_opposite_rays_in_symmetric_room_are_equal():
    origin = _origin()
    east = trace_vertical(ROOM, 0.0, origin, CUBE)
    west = trace_vertical(ROOM, 180.0, origin, CUBE)
    assert origin.distance_to(east) == pytest.approx(origin.distance_to(west))


def test_choose_hit_uses_only_available_hit():
    origin = _origin()
    v_hit = Vec2(257.0, 160.0)
    assert choose_hit(origin, None, v_hit) == (origin.distance_to(v_hit), True)
    h_hit = Vec2(160.0, 63.0)
    assert choose_hit(origin, h_hit, None) == (origin.distance_to(h_hit), False)


def test_choose_hit_picks_nearer_and_ignores_negative():
    origin = _origin()
    near = Vec2(160.0, 100.0)
    far = Vec2(400.0, 160.0)
    assert choose_hit(origin, near, far) == (origin.distance_to(near), False)
    assert choose_hit(origin, far, near) == (origin.distance_to(near), True)
    assert choose_hit(origin, Vec2(-1.0, 100.0), far) == (origin.distance_to(far), True)


def test_choose_hit_without_hits():
    with pytest.raises(ValueError):
        choose_hit(_origin(), None, None)


def test_projected_slice_len_at_one_cube():
    assert projected_slice_len(CUBE, CUBE, 300.0) == 300


def test_projected_slice_len_shrinks_with_distance():
    assert projected_slice_len(10.0, CUBE, 300.0) > projected_slice_len(100.0, CUBE, 300.0)


def test_projected_slice_len_rejects_zero():
    with pytest.raises(ValueError):
        projected_slice_len(0.0, CUBE, 300.0)


def test_top_wall_y():
    assert top_wall_y(0, 100) == 50
    assert top_wall_y(10_000, 100) == 0
    assert top_wall_y(20, 100) > top_wall_y(60, 100)


def test_raycaster_setup():
    caster = RayCaster(ROOM, plane_width=8, plane_height=6, cube_size=CUBE, fov=60.0)
    assert caster.player_cell == (2, 2)
    assert caster.viewing_angle == 90.0
    assert caster.grid[2][2] == "0"
    assert ROOM[2][2] == "N"
    assert caster.position == _origin()
    assert caster.angle_step == pytest.approx(60.0 / 8)


def test_ray_angles():
    caster = RayCaster(ROOM, plane_width=8, plane_height=6, cube_size=CUBE, fov=60.0)
    angles = caster.ray_angles()
    assert len(angles) == 8
    assert angles[0] == normalize_angle(90.0 + 30.0)
    for left, right in zip(angles, angles[1:]):
        assert normalize_angle(left - right) == pytest.approx(caster.angle_step)
    assert all(0.0 <= angle < 360.0 for angle in angles)


def test_ray_angles_wrap_around_east():
    grid = ["11111", "10001", "10E01", "10001", "11111"]
    caster = RayCaster(grid, plane_width=16, plane_height=6, cube_size=CUBE, fov=60.0)
    angles = caster.ray_angles()
    assert all(0.0 <= angle < 360.0 for angle in angles)
    assert any(angle > 300.0 for angle in angles)


def test_cast_results():
    caster = RayCaster(ROOM, plane_width=16, plane_height=40, cube_size=CUBE, fov=60.0)
    rays = caster.cast()
    assert len(rays) == 16
    for ray in rays:
        assert ray.dist > 0
        assert 0 <= ray.top_wall_y <= 20
        if ray.h_hit is None:
            assert ray.is_vertical
        if ray.v_hit is None:
            assert not ray.is_vertical
        hit = ray.v_hit if ray.is_vertical else ray.h_hit
        assert blocks_ray(caster.grid, _cell(hit))


def test_cast_is_symmetric_in_centred_room():
    caster = RayCaster(ROOM, plane_width=10, plane_height=40, cube_size=CUBE, fov=60.0)
    rays = caster.cast()
    for left, right in zip(rays, reversed(rays[1:])):
        offset_left = left.angle - caster.viewing_angle
        offset_right = caster.viewing_angle - right.angle
        if offset_left == pytest.approx(offset_right):
            assert left.dist == pytest.approx(right.dist)