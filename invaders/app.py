"""Window, drawing and the main loop of the game."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pygame

from invaders.assets import AssetError, load_texture
from invaders.entities import HEIGHT, WIDTH
from invaders.game import Game, Key, Stage

TITLE = "Invaders Tutorial"
TICK_MS = 20
CLEAR_COLOR = (255, 255, 255)

# file name, half width, half height of each sprite's quad in world units
_SPRITES: Dict[str, Tuple[str, float, float]] = {
    "background": ("background.png", WIDTH / 2, HEIGHT / 2),
    "player": ("player.png", 22.0, 22.0),
    "bullet": ("bullet.png", 6.0, 12.0),
    "enemy": ("enemy.png", 32.0, 32.0),
    "enemy_bullet": ("enemy_bullet.png", 12.0, 12.0),
    "gameover": ("gameover.png", WIDTH / 2, HEIGHT / 2),
}
_REQUIRED = ("background", "player", "bullet", "enemy")
_SCREEN_CENTER = (WIDTH / 2, HEIGHT / 2, 0.0)

_KEYS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_r: Key.R,
}


def to_screen(pos: Sequence[float], height: float) -> Tuple[float, float]:
    """Map a world point (y pointing up) to screen coordinates (y pointing down)."""
    return (float(pos[0]), float(height) - float(pos[1]))


def sprite_rect(
    center: Sequence[float], half_width: float, half_height: float, height: float
) -> pygame.Rect:
    """The screen rectangle covered by a quad centred on a world point."""
    x, y = to_screen(center, height)
    left = round(x - half_width)
    top = round(y - half_height)
    return pygame.Rect(left, top, round(2 * half_width), round(2 * half_height))


class Renderer:
    """Draws a game onto a surface using the sprite images in a directory."""

    def __init__(self, screen: pygame.Surface, sprite_dir: Union[str, Path] = "sprites") -> None:
        self.screen = screen
        self.sprite_dir = Path(sprite_dir)
        self._cache: Dict[str, pygame.Surface] = {}
        for name in _REQUIRED:
            self._sprite(name)

    def _sprite(self, name: str) -> pygame.Surface:
        surface = self._cache.get(name)
        if surface is not None:
            return surface
        filename, half_w, half_h = _SPRITES[name]
        texture = load_texture(self.sprite_dir / filename)
        image = pygame.image.frombuffer(
            texture.data, (texture.width, texture.height), texture.mode
        ).copy()
        # The first image row is texture row v=0, which the quads place at the
        # bottom of the sprite, so images appear upside down on screen.
        image = pygame.transform.flip(image, False, True)
        size = (round(2 * half_w), round(2 * half_h))
        surface = pygame.transform.scale(image, size)
        self._cache[name] = surface
        return surface

    def _blit(self, name: str, center: Sequence[float]) -> None:
        _, half_w, half_h = _SPRITES[name]
        rect = sprite_rect(center, half_w, half_h, HEIGHT)
        self.screen.blit(self._sprite(name), rect)

    def draw(self, game: Game) -> None:
        """Draw the whole scene for the current state of ``game``."""
        self.screen.fill(CLEAR_COLOR)
        self._blit("background", _SCREEN_CENTER)
        self._blit("player", game.player.pos)
        for _, pos in game.player.bullets.active():
            self._blit("bullet", pos)
        for _, pos in game.formation.active():
            self._blit("enemy", pos)
        for _, pos in game.enemy_bullets.active():
            self._blit("enemy_bullet", pos)
        if game.game_over():
            self._blit("gameover", _SCREEN_CENTER)


def _parse_stage(text: str) -> Stage:
    try:
        return Stage(int(text))
    except ValueError as exc:
        choices = ", ".join(str(s.value) for s in Stage)
        raise argparse.ArgumentTypeError(
            f"invalid stage {text!r} (choose from {choices})"
        ) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(prog="invaders", description="Play invaders.")
    parser.add_argument(
        "--stage",
        type=_parse_stage,
        default=Stage.GAMEOVER_SCREEN,
        help="which rules to play with (15-18)",
    )
    parser.add_argument(
        "--sprites",
        type=Path,
        default=Path("sprites"),
        help="directory holding the sprite images",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Open the window and run the game until it is closed."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(WIDTH), int(HEIGHT)))
        pygame.display.set_caption(TITLE)
        try:
            renderer = Renderer(screen, args.sprites)
        except AssetError as exc:
            print(exc, file=sys.stderr)
            return 1

        game = Game(args.stage, random.Random(args.seed))
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                key = _KEYS.get(getattr(event, "key", None))
                if key is None:
                    continue
                if event.type == pygame.KEYDOWN:
                    game.key_down(key)
                elif event.type == pygame.KEYUP:
                    game.key_up(key)
            game.tick()
            try:
                renderer.draw(game)
            except AssetError as exc:
                print(exc, file=sys.stderr)
                return 1
            pygame.display.flip()
            clock.tick(1000 // TICK_MS)
    finally:
        pygame.quit()