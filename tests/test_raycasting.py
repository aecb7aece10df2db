import math

import pytest

from raycube.game import Game, Vec2
from raycube.image import Image
from raycube.raycasting import (
    calc_perp_dist,
    calc_step,
    init_ray,
    perform_dda,
    perform_raycasting,
    texture_x,
    wall_params,
)
from raycube.scene import parse_scene

COLORS = {"north": 0x111111, "south": 0x222222, "west": 0x333333, "east": 0x444444}
WIDTH = 32
HEIGHT = 24


def make_textures(size=8):
    textures = {}
    for name, color in COLORS.items():
        image = Image(size, size)
        image.fill(color)
        textures[name] = image
    return textures


def room(char="N"):
    return ["11111", "10001", "10" + char + "01", "10001", "11111"]


def make_game(rows):
    scene = parse_scene([row + "\n" for row in rows])
    return Game(scene, make_textures(), WIDTH, HEIGHT)


def test_centre_ray_follows_player_direction():
    game = make_game(room("N"))
    ray = init_ray(game, WIDTH // 2)
    assert ray.camera_x == 0.0
    assert ray.dir == Vec2(0.0, -1.0)
    assert (ray.map_x, ray.map_y) == (2, 2)
    assert math.isinf(ray.delta_dist.x)
    assert ray.hit is False


def test_calc_step_directions():
    game = make_game(room("N"))
    ray = init_ray(game, WIDTH // 2)
    calc_step(game, ray)
    assert (ray.step_x, ray.step_y) == (1, -1)
    assert ray.side_dist.y == pytest.approx(0.5)


def test_dda_hits_north_wall():
    game = make_game(room("N"))
    ray = init_ray(game, WIDTH // 2)
    calc_step(game, ray)
    perform_dda(game, ray)
    calc_perp_dist(game, ray)
    assert (ray.map_x, ray.map_y) == (2, 0)
    assert ray.side == 1
    assert ray.wall_type == 3
    assert ray.perp_dist == pytest.approx(1.5)


@pytest.mark.parametrize(
    "char, wall_type, texture",
    [("N", 3, "north"), ("S", 2, "south"), ("E", 0, "east"), ("W", 1, "west")],
)
def test_centre_column_uses_facing_texture(char, wall_type, texture):
    game = make_game(room(char))
    ray = init_ray(game, WIDTH // 2)
    calc_step(game, ray)
    perform_dda(game, ray)
    calc_perp_dist(game, ray)
    assert ray.wall_type == wall_type
    perform_raycasting(game)
    assert game.frame[WIDTH // 2, HEIGHT // 2] == COLORS[texture]
    assert game.frame[WIDTH // 2, 0] == 0


def test_every_ray_stops_on_a_wall():
    game = make_game(room("E"))
    for x in range(WIDTH):
        ray = init_ray(game, x)
        calc_step(game, ray)
        perform_dda(game, ray)
        assert ray.hit
        assert game.grid[ray.map_y][ray.map_x] == "1"


def test_texture_x_stays_in_texture():
    game = make_game(room("S"))
    for x in range(WIDTH):
        ray = init_ray(game, x)
        calc_step(game, ray)
        perform_dda(game, ray)
        calc_perp_dist(game, ray)
        assert 0 <= texture_x(game, ray) < game.texture_width


@pytest.mark.parametrize("perp_dist", [0.1, 0.5, 1.0, 3.0, 50.0])
def test_wall_params_stay_on_screen(perp_dist):
    line_height, start, end = wall_params(HEIGHT, perp_dist)
    assert line_height >= 0
    assert 0 <= start <= end <= HEIGHT - 1


def test_wall_params_at_unit_distance_fill_the_height():
    line_height, start, end = wall_params(HEIGHT, 1.0)
    assert line_height == HEIGHT
    assert start == 0
    assert end == HEIGHT - 1


def test_wall_params_zero_distance_is_clamped():
    _, start, end = wall_params(HEIGHT, 0.0)
    assert (start, end) == (0, HEIGHT - 1)