"""Game rules: one tick of play, key handling and the game-over state."""

from __future__ import annotations

import enum
import logging
import math
import random
from typing import Optional, Protocol, Sequence

from invaders.entities import (
    ENEMY_BULLET_COUNT,
    ENEMY_BULLET_FLOOR,
    ENEMY_BULLET_SPEED,
    BulletPool,
    Formation,
    Player,
)

logger = logging.getLogger(__name__)

PLAYER_HIT_RADIUS = 10.0
ENEMY_FIRE_RANGE = 5000
ENEMY_FIRE_THRESHOLD = 4950


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class Stage(enum.IntEnum):
    """How much of the game is switched on, from plain shooting to game over."""

    SHOOT_ENEMIES = 15
    ENEMIES_SHOOT_BACK = 16
    PLAYER_HIT_DETECT = 17
    GAMEOVER_SCREEN = 18

    @property
    def enemies_shoot(self) -> bool:
        """Whether enemies drop bullets of their own."""
        return self >= Stage.ENEMIES_SHOOT_BACK

    @property
    def detects_player_hit(self) -> bool:
        """Whether enemies and their bullets are checked against the player."""
        return self >= Stage.PLAYER_HIT_DETECT

    @property
    def has_game_over(self) -> bool:
        """Whether a hit on the player ends the game."""
        return self >= Stage.GAMEOVER_SCREEN


class Key(enum.Enum):
    """The keys the game reacts to."""

    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    R = "r"


class Game:
    """The full state of one game and the rules that advance it."""

    def __init__(
        self,
        stage: Stage = Stage.GAMEOVER_SCREEN,
        rng: Optional[_RandomSource] = None,
    ) -> None:
        self.stage = Stage(stage)
        self.rng: _RandomSource = rng if rng is not None else random.Random()
        self.player = Player()
        self.formation = Formation()
        self.enemy_bullets = BulletPool(ENEMY_BULLET_COUNT)
        self.hits = 0
        self._over = False

    def game_over(self) -> bool:
        """Whether the game-over screen is showing."""
        return self._over

    def player_hit(self, point: Sequence[float]) -> bool:
        """Check ``point`` against the player's ship and react to a hit.

        Returns whether the point is within reach of the ship.
        """
        px, py = self.player.pos[0], self.player.pos[1]
        if math.hypot(px - point[0], py - point[1]) > PLAYER_HIT_RADIUS:
            return False
        self.hits += 1
        if self.stage.has_game_over:
            self._over = True
        else:
            logger.info("player hit detected!!")
        return True

    def tick(self) -> None:
        """Advance the game by one frame; nothing moves once the game is over."""
        if self._over:
            return

        self.player.update()

        for _, pos in self.formation.march():
            if self.stage.detects_player_hit:
                self.player_hit(pos)
            if not self.stage.enemies_shoot:
                continue
            if self.rng.randrange(ENEMY_FIRE_RANGE) < ENEMY_FIRE_THRESHOLD:
                continue
            self.enemy_bullets.spawn(pos)

        for index, pos in self.player.bullets.active():
            if self.formation.hit(pos) is not None:
                self.player.bullets.deactivate(index)

        if self.stage.enemies_shoot:
            self.enemy_bullets.advance(ENEMY_BULLET_SPEED)
            for index, pos in self.enemy_bullets.active():
                if self.stage.detects_player_hit:
                    self.player_hit(pos)
                if pos[1] < ENEMY_BULLET_FLOOR:
                    self.enemy_bullets.deactivate(index)

    def key_down(self, key: Key) -> None:
        """React to a key being pressed."""
        if key is Key.LEFT:
            self.player.left = True
        elif key is Key.RIGHT:
            self.player.right = True
        elif key is Key.SPACE:
            self.player.fire()
        elif key is Key.R and self._over:
            self.reset()

    def key_up(self, key: Key) -> None:
        """React to a key being released."""
        if key is Key.LEFT:
            self.player.left = False
        elif key is Key.RIGHT:
            self.player.right = False
        elif key is Key.SPACE:
            self.player.release_fire()

    def reset(self) -> None:
        """Start over: ship, enemies and bullets back to their first state."""
        self.player.reset()
        self.formation.reset()
        self.enemy_bullets.clear()
        self._over = False