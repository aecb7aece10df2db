"""Casting one ray per screen column and drawing the textured wall it hits."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raycube.game import Vec2

# Texture for each wall type: 0 east, 1 west, 2 south, 3 north.
_WALL_TEXTURES = ("east", "west", "south", "north")


@dataclass
class Ray:
    """State of one ray walking through the map grid."""

    camera_x: float
    dir: Vec2
    map_x: int
    map_y: int
    delta_dist: Vec2
    side_dist: Vec2 = field(default_factory=Vec2)
    step_x: int = 0
    step_y: int = 0
    hit: bool = False
    side: int = 0
    perp_dist: float = 0.0
    wall_type: int = 0


def _inverse_abs(value):
    return math.inf if value == 0 else abs(1 / value)


def _scaled(distance, delta):
    return math.inf if math.isinf(delta) else distance * delta


def init_ray(game, x):
    """Create the ray for screen column ``x``."""
    camera_x = 2 * x / game.win_width - 1
    player = game.player
    dx = player.dir.x + player.plane.x * camera_x
    dy = player.dir.y + player.plane.y * camera_x
    return Ray(
        camera_x=camera_x,
        dir=Vec2(dx, dy),
        map_x=int(player.pos.x),
        map_y=int(player.pos.y),
        delta_dist=Vec2(_inverse_abs(dx), _inverse_abs(dy)),
    )


def calc_step(game, ray):
    """Set the step direction and the distance to the first grid lines."""
    pos = game.player.pos
    if ray.dir.x < 0:
        ray.step_x = -1
        ray.side_dist.x = _scaled(pos.x - ray.map_x, ray.delta_dist.x)
    else:
        ray.step_x = 1
        ray.side_dist.x = _scaled(ray.map_x + 1.0 - pos.x, ray.delta_dist.x)
    if ray.dir.y < 0:
        ray.step_y = -1
        ray.side_dist.y = _scaled(pos.y - ray.map_y, ray.delta_dist.y)
    else:
        ray.step_y = 1
        ray.side_dist.y = _scaled(ray.map_y + 1.0 - pos.y, ray.delta_dist.y)


def perform_dda(game, ray):
    """Walk the ray cell by cell until it hits a wall or leaves the map."""
    while not ray.hit:
        if ray.side_dist.x < ray.side_dist.y:
            ray.side_dist.x += ray.delta_dist.x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist.y += ray.delta_dist.y
            ray.map_y += ray.step_y
            ray.side = 1
        if not 0 <= ray.map_y < game.map_height or not 0 <= ray.map_x < len(game.grid[ray.map_y]):
            ray.hit = True
            return
        if game.grid[ray.map_y][ray.map_x] == "1":
            ray.hit = True


def calc_perp_dist(game, ray):
    """Set the perpendicular wall distance and which wall face was hit."""
    pos = game.player.pos
    if ray.side == 0:
        ray.perp_dist = (ray.map_x - pos.x + (1 - ray.step_x) // 2) / ray.dir.x
    else:
        ray.perp_dist = (ray.map_y - pos.y + (1 - ray.step_y) // 2) / ray.dir.y
    if ray.side == 0 and ray.dir.x > 0:
        ray.wall_type = 0
    elif ray.side == 0 and ray.dir.x < 0:
        ray.wall_type = 1
    elif ray.side == 1 and ray.dir.y > 0:
        ray.wall_type = 2
    else:
        ray.wall_type = 3


def wall_params(win_height, perp_dist):
    """Return ``(line_height, draw_start, draw_end)`` for a wall slice."""
    line_height = int(win_height / perp_dist) if perp_dist > 0 else win_height
    draw_start = max(0, -(line_height // 2) + win_height // 2)
    draw_end = min(win_height - 1, line_height // 2 + win_height // 2)
    return line_height, draw_start, draw_end


def texture_x(game, ray):
    """Return the texture column hit by the ray."""
    pos = game.player.pos
    if ray.side == 0:
        wall_x = pos.y + ray.perp_dist * ray.dir.y
    else:
        wall_x = pos.x + ray.perp_dist * ray.dir.x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * game.texture_width)
    if (ray.side == 0 and ray.dir.x > 0) or (ray.side == 1 and ray.dir.y < 0):
        tex_x = game.texture_width - tex_x - 1
    return tex_x


def draw_column(game, x, ray):
    """Draw the textured wall slice of ``ray`` into column ``x`` of the frame."""
    line_height, draw_start, draw_end = wall_params(game.win_height, ray.perp_dist)
    tex_x = texture_x(game, ray)
    texture = game.textures[_WALL_TEXTURES[ray.wall_type]]
    half = game.win_height // 2
    for y in range(draw_start, draw_end):
        tex_y = (y - half + line_height // 2) * game.texture_height // line_height
        game.frame[x, y] = texture[tex_x, tex_y]


def perform_raycasting(game):
    """Cast and draw one ray for every screen column."""
    for x in range(game.win_width):
        ray = init_ray(game, x)
        calc_step(game, ray)
        perform_dda(game, ray)
        calc_perp_dist(game, ray)
        draw_column(game, x, ray)