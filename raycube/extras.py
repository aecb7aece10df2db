"""Extra features: animated sprites, the minimap and generated maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from raycube.scene import CubError

_FRAME_TIME = 0.016
_MINIMAP_SCALE = 8
_WALL_COLOR = 0xFFFFFF
_FLOOR_COLOR = 0x000000
_PLAYER_COLOR = 0xFF0000
_DOOR_COLOR = 0x00FF00
_MAP_SIZE = 10
_MAP_HEADER = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "WE ./textures/west.xpm\n"
    "EA ./textures/east.xpm\n"
    "F 220,100,0\n"
    "C 225,30,0\n\n"
)


@dataclass
class Sprite:
    """An animated sprite standing at a map position."""

    pos: tuple[float, float]
    frames: list = field(default_factory=list)
    frame: int = 0
    anim_speed: float = 0.1

    @property
    def frame_count(self):
        return len(self.frames)

    @property
    def image(self):
        return self.frames[self.frame]


def load_sprites(positions, frames):
    """Create one sprite per position, each animated through ``frames``."""
    positions = list(positions)
    if not positions:
        return []
    frames = list(frames)
    if not frames:
        raise ValueError("a sprite needs at least one frame")
    return [Sprite(pos=tuple(pos), frames=list(frames)) for pos in positions]


class SpriteAnimator:
    """Advances sprite animations with a shared clock at 60 frames a second."""

    def __init__(self):
        self.time = 0.0

    def update(self, sprites):
        """Advance the clock by one frame and step sprites that are due."""
        self.time += _FRAME_TIME
        for sprite in sprites:
            if self.time >= sprite.anim_speed:
                sprite.frame = (sprite.frame + 1) % sprite.frame_count
                self.time = 0.0


def _fill_cell(game, x, y, color):
    rows = range(y * _MINIMAP_SCALE, min((y + 1) * _MINIMAP_SCALE, game.win_height))
    cols = range(x * _MINIMAP_SCALE, min((x + 1) * _MINIMAP_SCALE, game.win_width))
    for py in rows:
        for px in cols:
            game.frame[px, py] = color


def draw_minimap_cell(game, x, y):
    """Draw map cell (x, y) as a square on the minimap."""
    cell = game.grid[y][x]
    pos = game.player.pos
    if cell == "1":
        color = _WALL_COLOR
    elif cell == "0":
        color = _FLOOR_COLOR
    elif int(pos.x) == x and int(pos.y) == y:
        color = _PLAYER_COLOR
    elif game.doors is not None and game.doors[y][x] == "D":
        color = _DOOR_COLOR
    else:
        return
    _fill_cell(game, x, y, color)


def render_minimap(game):
    """Draw the whole map in the top left corner of the frame."""
    width = game.map_width
    for y, row in enumerate(game.grid):
        for x in range(min(width, len(row))):
            draw_minimap_cell(game, x, y)


def generate_random_map():
    """Return a 10x10 walled room with the player facing north at (2, 2)."""
    last = _MAP_SIZE - 1
    grid = [
        "".join(
            "1" if y in (0, last) or x in (0, last) else "0"
            for x in range(_MAP_SIZE)
        )
        for y in range(_MAP_SIZE)
    ]
    grid[2] = grid[2][:2] + "N" + grid[2][3:]
    return grid


def format_map_file(grid):
    """Return the text of a ``.cub`` file holding ``grid``."""
    return _MAP_HEADER + "".join(f"{row}\n" for row in grid)


def save_map_to_file(grid, filename):
    """Write ``grid`` as a ``.cub`` file to ``filename``."""
    try:
        Path(filename).write_text(format_map_file(grid), encoding="utf-8")
    except OSError as exc:
        raise CubError(f"cannot create map file {filename}: {exc}") from exc