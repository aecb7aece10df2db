"""The playable game: window, textures, sounds and the main loop."""

from __future__ import annotations

import os
import sys
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from raycube.controls import GameExit, Key, MouseRotation, handle_keypress  # noqa: E402
from raycube.doors import build_doors, render_doors  # noqa: E402
from raycube.extras import SpriteAnimator, load_sprites, render_minimap  # noqa: E402
from raycube.game import Game  # noqa: E402
from raycube.raycasting import perform_raycasting  # noqa: E402
from raycube.scene import CubError, load_scene  # noqa: E402
from raycube.xpm import XpmError, load_xpm  # noqa: E402

_TEXTURE_NAMES = ("north", "south", "west", "east")
_SPRITE_FRAMES = ("sprite1_frame1.xpm", "sprite1_frame2.xpm")
_FPS = 60
_KEYS = {
    pygame.K_w: Key.W,
    pygame.K_s: Key.S,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_e: Key.E,
}


def load_textures(directory):
    """Load the four wall textures ``<direction>.xpm`` from ``directory``."""
    base = Path(directory)
    try:
        return {name: load_xpm(base / f"{name}.xpm") for name in _TEXTURE_NAMES}
    except XpmError as exc:
        raise CubError(f"error loading textures: {exc}") from exc


class AudioPlayer:
    """Background music and sound effects."""

    def __init__(self, directory):
        base = Path(directory)
        try:
            pygame.mixer.init(44100, -16, 2, 2048)
            pygame.mixer.music.load(str(base / "spinning-head.mp3"))
            self.sounds = {
                "footstep": pygame.mixer.Sound(str(base / "footsteps.wav")),
                "door_open": pygame.mixer.Sound(str(base / "door_open.wav")),
            }
            pygame.mixer.music.play(-1)
        except (pygame.error, OSError) as exc:
            raise CubError(f"audio initialisation failed: {exc}") from exc

    def play(self, event):
        """Play the sound for ``event``; unknown events are ignored."""
        sound = self.sounds.get(event)
        if sound is not None:
            sound.play()

    def close(self):
        """Stop the music and shut the mixer down."""
        pygame.mixer.music.stop()
        pygame.mixer.quit()


class App:
    """Runs a :class:`~raycube.game.Game` in a window."""

    def __init__(self, game, bonus=False):
        self.game = game
        self.bonus = bonus
        self.audio = None
        self.sprites = []
        self.animator = SpriteAnimator()
        self.mouse = MouseRotation()
        self._screen = None
        if bonus:
            game.doors = build_doors(game.grid, game.map_width)

    def render_frame(self):
        """Draw one frame, show it if a window is open, and return it."""
        game = self.game
        perform_raycasting(game)
        if self.bonus:
            render_doors(game)
            render_minimap(game)
            self.animator.update(self.sprites)
        if self._screen is not None:
            size = (game.win_width, game.win_height)
            surface = pygame.image.frombuffer(game.frame.to_rgb_bytes(), size, "RGB")
            self._screen.blit(surface, (0, 0))
            pygame.display.flip()
        return game.frame

    def _handle_event(self, event):
        if event.type == pygame.QUIT:
            raise GameExit()
        if event.type == pygame.KEYDOWN:
            key = _KEYS.get(event.key)
            if key is None:
                return
            sound = handle_keypress(self.game, key, self.bonus)
            if sound is not None and self.audio is not None:
                self.audio.play(sound)
        elif event.type == pygame.MOUSEMOTION and self.bonus:
            self.mouse.rotate(self.game.player, event.pos[0])

    def run(self):
        """Open the window and play until it is closed or escape is pressed."""
        pygame.display.init()
        self._screen = pygame.display.set_mode((self.game.win_width, self.game.win_height))
        pygame.display.set_caption("raycube")
        clock = pygame.time.Clock()
        try:
            while True:
                for event in pygame.event.get():
                    self._handle_event(event)
                self.render_frame()
                clock.tick(_FPS)
        except GameExit:
            pass
        finally:
            self.close()

    def close(self):
        """Release the window and the audio."""
        if self.audio is not None:
            self.audio.close()
            self.audio = None
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None


def _build_app(path, bonus):
    scene = load_scene(path)
    game = Game(scene, load_textures("textures"))
    app = App(game, bonus)
    if bonus:
        app.audio = AudioPlayer("audio")
        if scene.sprites:
            try:
                frames = [load_xpm(Path("textures") / name) for name in _SPRITE_FRAMES]
            except XpmError as exc:
                app.close()
                raise CubError(f"error loading sprite textures: {exc}") from exc
            app.sprites = load_sprites(scene.sprites, frames)
    return app


def main(argv=None):
    """Run the game on the ``.cub`` file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    paths = [arg for arg in args if arg != "--bonus"]
    if len(paths) != 1:
        print("Error\nUsage: raycube [--bonus] <map.cub>", file=sys.stderr)
        return 1
    try:
        app = _build_app(paths[0], bonus)
    except (CubError, ValueError) as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())