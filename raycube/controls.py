"""Keyboard and mouse handling: moving, turning and opening doors."""

from __future__ import annotations

import enum
import math

from raycube.doors import toggle_door


class Key(enum.Enum):
    """The keys the game reacts to."""

    W = "w"
    S = "s"
    A = "a"
    D = "d"
    LEFT = "left"
    RIGHT = "right"
    ESC = "escape"
    E = "e"


class GameExit(Exception):
    """Raised when the player asks to leave the game."""


# Key -> (angle offset from the facing direction, sign of the step).
_MOVES = {
    Key.W: (0.0, 1),
    Key.S: (0.0, -1),
    Key.A: (-math.pi / 2, 1),
    Key.D: (math.pi / 2, 1),
}


def _rotate(player, angle):
    """Turn the player by ``angle`` radians, keeping dir and plane in step."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    old_dir_x = player.dir.x
    player.dir.x = player.dir.x * cos_a - player.dir.y * sin_a
    player.dir.y = old_dir_x * sin_a + player.dir.y * cos_a
    old_plane_x = player.plane.x
    player.plane.x = player.plane.x * cos_a - player.plane.y * sin_a
    player.plane.y = old_plane_x * sin_a + player.plane.y * cos_a
    player.angle += angle


def handle_keypress(game, key, bonus=False):
    """Apply one key press to ``game``.

    Returns the name of a sound event to play ("door_open"), or ``None``.
    Raises :class:`GameExit` on the escape key. With ``bonus`` set, moves
    into walls or closed doors are refused and the E key works doors.
    """
    player = game.player
    if key in _MOVES:
        offset, sign = _MOVES[key]
        heading = player.angle + offset
        new_x = player.pos.x + sign * math.cos(heading) * player.move_speed
        new_y = player.pos.y + sign * math.sin(heading) * player.move_speed
        if bonus and not game.check_collision(new_x, new_y):
            return None
        player.pos.x = new_x
        player.pos.y = new_y
    elif key is Key.LEFT:
        _rotate(player, -player.rot_speed)
    elif key is Key.RIGHT:
        _rotate(player, player.rot_speed)
    elif key is Key.ESC:
        raise GameExit()
    elif key is Key.E and bonus:
        target_x = int(player.pos.x + math.cos(player.angle))
        target_y = int(player.pos.y + math.sin(player.angle))
        if toggle_door(game, target_x, target_y):
            return "door_open"
    return None


class MouseRotation:
    """Turns the player as the mouse moves horizontally."""

    def __init__(self):
        self.last_x = None

    def rotate(self, player, x):
        """Turn ``player`` by the horizontal distance since the last call."""
        if self.last_x is None:
            self.last_x = x
        angle = (x - self.last_x) * player.rot_speed * 0.01
        _rotate(player, angle)
        self.last_x = x