from unittest.mock import patch

import pygame
import pytest

from raycube.app import App, AudioPlayer, load_textures, main
from raycube.game import Game
from raycube.image import Image
from raycube.scene import CubError, parse_scene

COLORS = {"north": 0x0000FF, "south": 0x00FF00, "west": 0xFF0000, "east": 0xFFFF00}


def write_xpm(path, color):
    path.write_text(
        "static char *img[] = {\n"
        '"2 2 1 1",\n'
        f'"a c #{color:06X}",\n'
        '"aa",\n'
        '"aa"\n'
        "};\n"
    )


def make_game():
    scene = parse_scene(["11111\n", "1N001\n", "11111\n"])
    textures = {}
    for name, color in COLORS.items():
        image = Image(4, 4)
        image.fill(color)
        textures[name] = image
    return Game(scene, textures, 16, 12)


def _held_values(obj):
    """Every value an object holds directly or inside a dict, list or tuple."""
    found = []
    for value in vars(obj).values():
        found.append(value)
        if isinstance(value, dict):
            found.extend(value.values())
        elif isinstance(value, (list, tuple)):
            found.extend(value)
    return found


def test_load_textures_reads_all_four(tmp_path):
    for name, color in COLORS.items():
        write_xpm(tmp_path / f"{name}.xpm", color)
    textures = load_textures(tmp_path)
    assert sorted(textures) == sorted(COLORS)
    assert all(textures[name][0, 0] == color for name, color in COLORS.items())


def test_load_textures_missing_file(tmp_path):
    write_xpm(tmp_path / "north.xpm", COLORS["north"])
    with pytest.raises(CubError):
        load_textures(tmp_path)


def test_render_frame_draws_north_wall_in_centre():
    app = App(make_game())
    frame = app.render_frame()
    assert frame[8, 6] == COLORS["north"]


def test_bonus_render_draws_minimap():
    app = App(make_game(), bonus=True)
    frame = app.render_frame()
    assert app.game.doors is None
    assert frame[0, 0] == 0xFFFFFF


def test_bonus_builds_door_layer():
    game = make_game()
    game.grid[1] = "100D1"
    app = App(game, bonus=True)
    assert app.game.doors[1][3] == "D"
    assert app.game.doors[1][2] == "0"


def test_bonus_rejects_badly_placed_door():
    game = make_game()
    game.grid[1] = "D0001"
    with pytest.raises(CubError):
        App(game, bonus=True)


def test_audio_plays_known_events(tmp_path):
    with patch("raycube.app.pygame.mixer") as mixer:
        player = AudioPlayer(tmp_path)
        assert mixer.Sound.return_value in _held_values(player)
        loaded = str(mixer.Sound.call_args_list)
        assert "footsteps.wav" in loaded
        assert "door_open.wav" in loaded
        player.play("door_open")
        player.play("unknown")
        assert mixer.Sound.return_value.play.call_count == 1
        assert mixer.music.play.call_args.args == (-1,)
        player.close()
        assert mixer.quit.call_count == 1


def test_audio_failure_raises(tmp_path):
    with patch("raycube.app.pygame.mixer") as mixer:
        mixer.init.side_effect = pygame.error("no audio device")
        with pytest.raises(CubError):
            AudioPlayer(tmp_path)


@pytest.mark.parametrize("argv", [[], ["a.cub", "b.cub"]])
def test_main_usage(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_main_missing_textures(tmp_path, monkeypatch, capsys):
    map_file = tmp_path / "room.cub"
    map_file.write_text("11111\n1N001\n11111\n")
    monkeypatch.chdir(tmp_path)
    assert main([str(map_file)]) == 1
    assert capsys.readouterr().err.startswith("Error\n")