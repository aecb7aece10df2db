"""Doors: validating their placement, opening them and drawing them."""

from __future__ import annotations

from raycube.raycasting import calc_perp_dist, calc_step, draw_column, init_ray
from raycube.scene import CubError


def _cell(grid, x, y):
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return " "


def is_valid_door_position(grid, width, y, x):
    """Return whether a door may stand at (x, y).

    The cell must be inside the border, be a door or a floor cell, and sit
    between two walls either horizontally or vertically.
    """
    if x <= 0 or x >= width - 1 or y <= 0 or y >= len(grid) - 1:
        return False
    if _cell(grid, x, y) not in ("D", "0"):
        return False
    if _cell(grid, x - 1, y) == "1" and _cell(grid, x + 1, y) == "1":
        return True
    return _cell(grid, x, y - 1) == "1" and _cell(grid, x, y + 1) == "1"


def build_doors(grid, width):
    """Return the door layer of ``grid``, or ``None`` if it has no doors.

    The layer is a list of rows of ``width`` characters, 'D' for a closed
    door and '0' elsewhere. Badly placed doors raise :class:`CubError`.
    """
    if len(grid) < 3 or width < 3:
        raise CubError("map too small to place a door")
    doors = [(x, y) for y, row in enumerate(grid) for x, char in enumerate(row) if char == "D"]
    for x, y in doors:
        if not is_valid_door_position(grid, width, y, x):
            raise CubError(f"invalid door position at [{y}][{x}]")
    if not doors:
        return None
    layer = [["0"] * width for _ in grid]
    for x, y in doors:
        layer[y][x] = "D"
    return layer


def toggle_door(game, map_x, map_y):
    """Open or close the door at (map_x, map_y).

    Returns ``True`` when a closed door was opened.
    """
    if game.doors is None:
        return False
    if not (0 <= map_x < game.map_width and 0 <= map_y < game.map_height):
        return False
    row = game.doors[map_y]
    if row[map_x] == "D":
        row[map_x] = "0"
        return True
    if row[map_x] == "0":
        row[map_x] = "D"
    return False


def _advance(ray):
    if ray.side_dist.x < ray.side_dist.y:
        ray.side_dist.x += ray.delta_dist.x
        ray.map_x += ray.step_x
        ray.side = 0
    else:
        ray.side_dist.y += ray.delta_dist.y
        ray.map_y += ray.step_y
        ray.side = 1


def render_doors(game):
    """Draw every closed door that is seen before a wall."""
    if game.doors is None:
        return
    for x in range(game.win_width):
        ray = init_ray(game, x)
        calc_step(game, ray)
        while not ray.hit:
            _advance(ray)
            if not (0 <= ray.map_x < game.map_width and 0 <= ray.map_y < game.map_height):
                break
            if _cell(game.grid, ray.map_x, ray.map_y) == "1":
                ray.hit = True
            elif game.doors[ray.map_y][ray.map_x] == "D":
                ray.hit = True
                calc_perp_dist(game, ray)
                draw_column(game, x, ray)