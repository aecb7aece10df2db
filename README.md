# raycube

A small first-person raycasting engine. It reads a `.cub` scene file, checks
that its map is closed, and lets you walk around it in a pygame window with
textured walls.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
raycube path/to/scene.cub
raycube --bonus path/to/scene.cub
```

The window is 1280x720. Wall textures are always read as XPM images from
`./textures/` relative to the current directory: `north.xpm`, `south.xpm`,
`west.xpm` and `east.xpm`. If the scene cannot be read or is invalid, or a
texture cannot be loaded, the command prints `Error` and a message on
standard error and exits with status 1. A wrong number of arguments prints
the usage line the same way.

With `--bonus` the game also:

- refuses moves into walls, cells outside the map and closed doors;
- turns the player with horizontal mouse movement;
- draws a minimap (8 pixels per cell) in the top left corner;
- plays background music from `./audio/spinning-head.mp3`, and loads
  `./audio/footsteps.wav` and `./audio/door_open.wav`; the door sound plays
  when the `E` key opens a door;
- if the map has `S` cells, loads the sprite frames
  `./textures/sprite1_frame1.xpm` and `./textures/sprite1_frame2.xpm` and
  steps their animation every frame.

Missing audio files are an error in this mode.

## Controls

- `W` / `S` move forward and back
- `A` / `D` strafe left and right
- left / right arrows turn
- `E` opens or closes the door in front of you (with `--bonus`)
- `Esc` or closing the window quits

## Scene files

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100001
10N001
111111
```

Lines starting with `NO `, `SO `, `WE ` or `EA ` give texture paths, and
`F ` / `C ` lines give the floor and ceiling colours as `r,g,b` with each
channel from 0 to 255. Every other line longer than one character is a map
row. Map cells are `0` (floor), `1` (wall), a space (void) and exactly one of
`N`, `S`, `E`, `W` for the player's start and facing. The first and last rows
and both ends of every row must be walls or spaces, and the player must not
be able to reach the edge of the map; otherwise loading raises
`raycube.scene.CubError`.

## Using it as a library

```python
from raycube.scene import load_scene
from raycube.xpm import load_xpm
from raycube.game import Game
from raycube.raycasting import perform_raycasting

scene = load_scene("maps/example.cub")
textures = {name: load_xpm(f"textures/{name}.xpm")
            for name in ("north", "south", "west", "east")}
game = Game(scene, textures, 320, 200)
perform_raycasting(game)
frame = game.frame          # a raycube.image.Image of 0xAARRGGBB pixels
rgb = frame.to_rgb_bytes()  # packed RGB, row by row
```

- `raycube.scene`: `parse_scene`, `load_scene`, `check_map`, `parse_color`,
  `find_sprites`, `Scene`, `Textures`, `CubError`.
- `raycube.xpm`: `load_xpm`, `parse_xpm_text`, `parse_xpm_lines` read XPM
  pixmaps (named X11 colours, `#rrggbb` and `None` for transparency);
  malformed data raises `XpmError`. `raycube.colornames.lookup_color` gives
  the value of an X11 colour name.
- `raycube.game`: `Game` (with `check_collision`), `Player`, `Vec2`,
  `init_player`, `deg_to_rad`.
- `raycube.raycasting`: the per-column DDA steps (`init_ray`, `calc_step`,
  `perform_dda`, `calc_perp_dist`, `draw_column`) and `perform_raycasting`.
- `raycube.doors`: `build_doors`, `is_valid_door_position`, `toggle_door`,
  `render_doors`.
- `raycube.controls`: `handle_keypress` with the `Key` enum, `MouseRotation`,
  and `GameExit`, raised by the escape key.
- `raycube.extras`: `load_sprites`, `SpriteAnimator`, `render_minimap`,
  `generate_random_map` (a 10x10 walled room with the player facing north at
  column 2, row 2), `format_map_file` and `save_map_to_file`, which write a
  ready-to-load `.cub` file.
- `raycube.app`: `App`, `AudioPlayer`, `load_textures` and `main`.

## What it does not do

- Only walls are drawn. The floor and ceiling colours are read and kept on
  the game but not painted, and sprites are animated but never drawn.
- The texture paths in a scene file are recorded in `Scene.textures` but not
  used; the command always loads `./textures/<direction>.xpm`.
- The map check accepts only `0`, `1`, space and `N`/`S`/`E`/`W`, so a scene
  file cannot contain door (`D`) cells; doors exist only for grids passed to
  `build_doors` directly.
- There is no command for generating maps; use `generate_random_map` and
  `save_map_to_file` from Python.