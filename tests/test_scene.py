import pytest

from raycube.scene import (
    CubError,
    Scene,
    Textures,
    check_map,
    find_sprites,
    is_color_line,
    is_texture_line,
    load_scene,
    parse_color,
    parse_scene,
    parse_texture,
)

SAMPLE = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "WE ./textures/west.xpm\n"
    "EA ./textures/east.xpm\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
    "111111\n"
    "100001\n"
    "10N001\n"
    "111111\n"
)

VALID_GRID = ["11111", "10001", "10N01", "11111"]


def test_texture_line_detection():
    assert is_texture_line("NO ./a.xpm\n") is True
    assert is_texture_line("EA ./a.xpm") is True
    assert is_texture_line("NOX ./a.xpm") is False
    assert is_texture_line("F 1,2,3") is False
    assert is_texture_line("") is False


def test_color_line_detection():
    assert is_color_line("F 1,2,3\n") is True
    assert is_color_line("C 1,2,3") is True
    assert is_color_line("FF 1,2,3") is False
    assert is_color_line("NO ./a.xpm") is False


def test_parse_texture_sets_matching_slot():
    textures = Textures()
    parse_texture("WE   ./textures/west.xpm \t\n", textures)
    assert textures.west == "./textures/west.xpm"
    assert textures.north is None


def test_parse_texture_replaces_previous_path():
    textures = Textures()
    parse_texture("SO ./one.xpm", textures)
    parse_texture("SO ./two.xpm", textures)
    assert textures.south == "./two.xpm"


def test_parse_texture_rejects_unknown_identifier():
    with pytest.raises(CubError):
        parse_texture("XX ./a.xpm", Textures())


def test_parse_color_channels_round_trip():
    kind, color = parse_color("F 220,100,0\n")
    assert kind == "F"
    assert (color >> 16, (color >> 8) & 0xFF, color & 0xFF) == (220, 100, 0)


def test_parse_color_allows_spaces_and_extra_parts():
    kind, color = parse_color("C  12, 34 ,56,99")
    assert kind == "C"
    assert (color >> 16, (color >> 8) & 0xFF, color & 0xFF) == (12, 34, 56)


@pytest.mark.parametrize("line", ["F 256,0,0", "C 0,-1,0", "F 0,0,300"])
def test_parse_color_out_of_range(line):
    with pytest.raises(CubError):
        parse_color(line)


@pytest.mark.parametrize("line", ["F 1,2", "C ", "F 1,,2"])
def test_parse_color_too_few_parts(line):
    with pytest.raises(CubError):
        parse_color(line)


def test_check_map_returns_player_start():
    (x, y), direction = check_map(VALID_GRID)
    assert (int(x), int(y)) == (VALID_GRID[2].index("N"), 2)
    assert x - int(x) == 0.5 and y - int(y) == 0.5
    assert direction == (0, -1)


@pytest.mark.parametrize(
    "char, direction",
    [("N", (0, -1)), ("S", (0, 1)), ("E", (1, 0)), ("W", (-1, 0))],
)
def test_check_map_directions(char, direction):
    grid = ["1111", f"10{char}1", "1111"]
    assert check_map(grid)[1] == direction


def test_check_map_too_small():
    with pytest.raises(CubError, match="small"):
        check_map(["11", "1N"])


def test_check_map_invalid_character():
    with pytest.raises(CubError, match="invalid character"):
        check_map(["11111", "10X01", "10N01", "11111"])


def test_check_map_rejects_doors():
    with pytest.raises(CubError):
        check_map(["11111", "1D0N1", "11111"])


def test_check_map_missing_player():
    with pytest.raises(CubError, match="player"):
        check_map(["1111", "1001", "1111"])


def test_check_map_two_players():
    with pytest.raises(CubError, match="player"):
        check_map(["11111", "1NS01", "11111"])


def test_check_map_open_top_border():
    with pytest.raises(CubError, match="border"):
        check_map(["11011", "10N01", "11111"])


def test_check_map_open_right_border():
    with pytest.raises(CubError, match="right"):
        check_map(["11111", "10N00", "11111"])


def test_check_map_open_left_border():
    with pytest.raises(CubError, match="left"):
        check_map(["11111", "00N01", "11111"])


def test_check_map_spaces_count_as_border():
    (x, y), _ = check_map([" 1111 ", " 1N01", " 1111"])
    assert (int(x), int(y)) == (2, 1)


def test_find_sprites_positions():
    grid = ["1111", "1S01", "10S1", "1111"]
    sprites = find_sprites(grid)
    assert [(int(x), int(y)) for x, y in sprites] == [(1, 1), (2, 2)]


def test_find_sprites_none():
    assert find_sprites(VALID_GRID) == []


def test_parse_scene_full():
    scene = parse_scene(SAMPLE.splitlines(keepends=True))
    assert isinstance(scene, Scene)
    assert scene.textures.north == "./textures/north.xpm"
    assert scene.textures.east == "./textures/east.xpm"
    assert scene.floor_color >> 16 == 220
    assert scene.ceil_color >> 16 == 225
    assert scene.grid == ["111111", "100001", "10N001", "111111"]
    assert scene.height == 4
    assert scene.width == 6
    assert scene.player_dir == (0, -1)
    assert scene.sprites == []


def test_parse_scene_south_player_is_sprite():
    lines = ["1111\n", "10S1\n", "1111\n"]
    scene = parse_scene(lines)
    assert scene.sprites == [scene.player_pos]


def test_parse_scene_skips_blank_and_crlf_lines():
    lines = ["F 1,2,3\r\n", "\n", "1111\r\n", "\n", "1E01\r\n", "1111"]
    scene = parse_scene(lines)
    assert scene.grid == ["1111", "1E01", "1111"]
    assert scene.floor_color & 0xFF == 3


def test_parse_scene_empty_input():
    with pytest.raises(CubError, match="empty"):
        parse_scene([])


def test_parse_scene_without_map():
    with pytest.raises(CubError, match="map"):
        parse_scene(["NO ./a.xpm\n", "F 1,2,3\n", "\n"])


def test_parse_scene_bad_color_propagates():
    with pytest.raises(CubError, match="range"):
        parse_scene(["F 999,0,0\n", "111\n", "1N1\n", "111\n"])


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(SAMPLE, encoding="utf-8")
    scene = load_scene(path)
    assert scene.grid == parse_scene(SAMPLE.splitlines(keepends=True)).grid
    assert scene.textures.south == "./textures/south.xpm"


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(CubError, match="cannot open"):
        load_scene(tmp_path / "missing.cub")