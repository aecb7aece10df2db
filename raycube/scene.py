"""Reading and validating ``.cub`` scene descriptions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

_TEXTURE_PREFIXES = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_COLOR_PREFIXES = ("F ", "C ")
_PLAYER_DIRECTIONS = {"N": (0, -1), "S": (0, 1), "E": (1, 0), "W": (-1, 0)}
_MAP_CHARS = frozenset("01NSEW ")
_WALLS = frozenset("1 ")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d*)")


class CubError(Exception):
    """Raised when a scene file is missing, malformed or invalid."""


@dataclass
class Textures:
    """Wall texture paths, one per compass direction."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None


@dataclass
class Scene:
    """A parsed and validated scene: textures, colours, map and start point."""

    grid: list[str]
    player_pos: tuple[float, float]
    player_dir: tuple[int, int]
    textures: Textures = field(default_factory=Textures)
    floor_color: int = 0
    ceil_color: int = 0
    sprites: list[tuple[float, float]] = field(default_factory=list)

    @property
    def height(self):
        return len(self.grid)

    @property
    def width(self):
        return max((len(row) for row in self.grid), default=0)


def is_texture_line(line):
    """Return whether ``line`` starts with a texture identifier."""
    return bool(line) and line.startswith(tuple(_TEXTURE_PREFIXES))


def is_color_line(line):
    """Return whether ``line`` starts with a floor or ceiling identifier."""
    return bool(line) and line.startswith(_COLOR_PREFIXES)


def parse_texture(line, textures):
    """Store the path given on a texture line in ``textures``."""
    attribute = _TEXTURE_PREFIXES.get(line[:3])
    if attribute is None:
        raise CubError("invalid texture identifier")
    setattr(textures, attribute, line[3:].strip(" \t\r\n"))


def _atoi(text):
    digits = _ATOI.match(text).group(1)
    return int(digits) if digits.lstrip("+-") else 0


def parse_color(line):
    """Parse a ``F r,g,b`` or ``C r,g,b`` line.

    Returns the identifier letter and the colour as 0xRRGGBB.
    """
    parts = [part for part in line[2:].split(",") if part]
    if len(parts) < 3:
        raise CubError("invalid colour")
    r, g, b = (_atoi(part) for part in parts[:3])
    if not all(0 <= channel <= 255 for channel in (r, g, b)):
        raise CubError("RGB values out of range")
    kind = line[:1]
    if kind not in ("F", "C"):
        raise CubError("invalid colour identifier")
    return kind, (r << 16) | (g << 8) | b


def _check_rows(grid):
    players = []
    last = len(grid) - 1
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char in _PLAYER_DIRECTIONS:
                players.append(((x + 0.5, y + 0.5), _PLAYER_DIRECTIONS[char]))
            if char not in _MAP_CHARS:
                raise CubError(f"invalid character {char!r} in map at [{y}][{x}]")
        if y in (0, last) and not set(row) <= _WALLS:
            raise CubError("map not surrounded by walls (horizontal border)")
        if row:
            if row[0] not in _WALLS:
                raise CubError("map not surrounded by walls (left border)")
            if row[-1] not in _WALLS:
                raise CubError("map not surrounded by walls (right border)")
    if len(players) != 1:
        raise CubError("invalid or missing player")
    return players[0]


def _is_closed(grid, start_x, start_y):
    visited = set()
    stack = [(start_y, start_x)]
    while stack:
        y, x = stack.pop()
        if not 0 <= y < len(grid):
            return False
        row = grid[y]
        if x < 0 or x >= len(row) or (y, x) in visited or row[x] in _WALLS:
            continue
        visited.add((y, x))
        stack.extend(((y, x + 1), (y, x - 1), (y + 1, x), (y - 1, x)))
    return True


def check_map(grid):
    """Validate a map grid and return the player's start.

    The result is ``((x, y), (dx, dy))``: the centre of the player's cell
    and the unit direction the player faces.
    """
    width = max((len(row) for row in grid), default=0)
    if len(grid) < 3 or width < 3:
        raise CubError("map too small")
    position, direction = _check_rows(grid)
    if not _is_closed(grid, int(position[0]), int(position[1])):
        raise CubError("map not surrounded by walls")
    return position, direction


def find_sprites(grid):
    """Return the cell centres of every sprite ('S') in the grid, row by row."""
    return [
        (x + 0.5, y + 0.5)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char == "S"
    ]


def parse_scene(lines: Iterable[str]):
    """Build a :class:`Scene` from the lines of a ``.cub`` file.

    Lines keep their line endings; lines of one character or less are
    ignored, as are identifier lines once they have been read.
    """
    textures = Textures()
    colors = {"F": 0, "C": 0}
    map_lines = []
    seen_any = False
    for line in lines:
        seen_any = True
        if is_texture_line(line):
            parse_texture(line, textures)
        elif is_color_line(line):
            kind, color = parse_color(line)
            colors[kind] = color
        elif len(line) > 1:
            map_lines.append(line)
    if not seen_any:
        raise CubError("empty file or read error")
    if not map_lines:
        raise CubError("no valid map line")
    grid = [line.rstrip("\r\n") for line in map_lines]
    position, direction = check_map(grid)
    return Scene(
        grid=grid,
        player_pos=position,
        player_dir=direction,
        textures=textures,
        floor_color=colors["F"],
        ceil_color=colors["C"],
        sprites=find_sprites(grid),
    )


def load_scene(path):
    """Read and validate the ``.cub`` file at ``path``."""
    try:
        with open(Path(path), encoding="utf-8", errors="replace", newline="") as handle:
            lines = handle.readlines()
    except OSError as exc:
        raise CubError(f"cannot open file {path}: {exc}") from exc
    return parse_scene(lines)