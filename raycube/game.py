"""Game state: the map, the player and the frame being drawn."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raycube.image import Image

_ORIENTATIONS = {
    "N": ((0.0, -1.0), (0.66, 0.0)),
    "S": ((0.0, 1.0), (-0.66, 0.0)),
    "E": ((1.0, 0.0), (0.0, 0.66)),
    "W": ((-1.0, 0.0), (0.0, -0.66)),
}
_TEXTURE_NAMES = ("north", "south", "west", "east")


@dataclass
class Vec2:
    """A mutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Player:
    """Position, facing direction and camera plane of the player."""

    pos: Vec2 = field(default_factory=Vec2)
    dir: Vec2 = field(default_factory=Vec2)
    plane: Vec2 = field(default_factory=Vec2)
    angle: float = 0.0
    move_speed: float = 0.1
    rot_speed: float = 0.05


def deg_to_rad(degrees):
    """Convert an angle from degrees to radians."""
    return degrees * math.pi / 180.0


def init_player(grid):
    """Find the first player start in ``grid`` and build the player from it.

    ``grid`` is a list of row strings; the start cell is replaced by '0'.
    Without a start cell the player keeps its default position and heading.
    """
    player = Player()
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char in _ORIENTATIONS:
                (dx, dy), (px, py) = _ORIENTATIONS[char]
                player.pos = Vec2(x + 0.5, y + 0.5)
                player.dir = Vec2(dx, dy)
                player.plane = Vec2(px, py)
                player.angle = math.atan2(dy, dx)
                grid[y] = row[:x] + "0" + row[x + 1:]
                return player
    return player


class Game:
    """Everything one running game needs between frames.

    ``textures`` maps each of ``north``, ``south``, ``west`` and ``east``
    to an :class:`~raycube.image.Image`.
    """

    def __init__(self, scene, textures, win_width=1280, win_height=720):
        missing = [name for name in _TEXTURE_NAMES if name not in textures]
        if missing:
            raise ValueError(f"missing textures: {', '.join(missing)}")
        self.grid = list(scene.grid)
        self.player = init_player(self.grid)
        self.player.pos = Vec2(*scene.player_pos)
        self.textures = {name: textures[name] for name in _TEXTURE_NAMES}
        self.texture_width = min(image.width for image in self.textures.values())
        self.texture_height = min(image.height for image in self.textures.values())
        self.win_width = win_width
        self.win_height = win_height
        self.frame = Image(win_width, win_height)
        self.floor_color = scene.floor_color
        self.ceil_color = scene.ceil_color
        self.sprites = list(scene.sprites)
        self.doors = None

    @property
    def map_height(self):
        return len(self.grid)

    @property
    def map_width(self):
        return max((len(row) for row in self.grid), default=0)

    def check_collision(self, x, y):
        """Return whether the point (x, y) lies in a free cell of the map.

        Cells outside the map, walls and closed doors are not free.
        """
        map_x, map_y = int(x), int(y)
        if not (0 <= map_x < self.map_width and 0 <= map_y < self.map_height):
            return False
        row = self.grid[map_y]
        if map_x < len(row) and row[map_x] == "1":
            return False
        if self.doors is not None and self.doors[map_y][map_x] == "D":
            return False
        return True