"""Game entities: the player's ship, bullet pools and the enemy formation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]

WIDTH = 640.0
HEIGHT = 480.0

PLAYER_START_Y = 30.0
PLAYER_SPEED = 6.0
PLAYER_BULLET_COUNT = 3
PLAYER_BULLET_SPEED = 10.0
PLAYER_BULLET_CEILING = HEIGHT + 12.0

ENEMY_COUNT = 10
ENEMY_ROW_LENGTH = 5
ENEMY_START_X = 70.0
ENEMY_START_Y = HEIGHT - 140.0
ENEMY_SPACING = 90.0
ENEMY_START_DX = 3.0
ENEMY_DROP = -10.0
ENEMY_HIT_RADIUS = 32.0
ENEMY_SPEEDUP = 1.05

ENEMY_BULLET_COUNT = 10
ENEMY_BULLET_SPEED = -3.0
ENEMY_BULLET_FLOOR = -20.0


def _vec3(pos: Sequence[float]) -> Vec3:
    x, y, z = pos
    return (float(x), float(y), float(z))


def formation_positions() -> List[Vec3]:
    """Starting positions of the enemies: two rows of five, bottom row first."""
    return [
        (
            ENEMY_START_X + (i % ENEMY_ROW_LENGTH) * ENEMY_SPACING,
            ENEMY_START_Y + (i // ENEMY_ROW_LENGTH) * ENEMY_SPACING,
            0.0,
        )
        for i in range(ENEMY_COUNT)
    ]


@dataclass
class _Slot:
    pos: Vec3 = (0.0, 0.0, 0.0)
    active: bool = False


class BulletPool:
    """A fixed number of bullet slots, each either in flight or free."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._slots = [_Slot() for _ in range(capacity)]

    def __len__(self) -> int:
        """The number of slots, in flight or not."""
        return len(self._slots)

    def spawn(self, pos: Sequence[float]) -> Optional[int]:
        """Put a bullet at ``pos`` in the first free slot; return its index.

        Returns None when every slot is already in flight.
        """
        for index, slot in enumerate(self._slots):
            if not slot.active:
                slot.active = True
                slot.pos = _vec3(pos)
                return index
        return None

    def active(self) -> List[Tuple[int, Vec3]]:
        """Index and position of each bullet in flight, in slot order."""
        return [(i, s.pos) for i, s in enumerate(self._slots) if s.active]

    def deactivate(self, index: int) -> None:
        """Free the slot at ``index``."""
        self._slots[index].active = False

    def advance(self, dy: float) -> None:
        """Move every bullet in flight vertically by ``dy``."""
        for slot in self._slots:
            if slot.active:
                x, y, z = slot.pos
                slot.pos = (x, y + dy, z)

    def clear(self) -> None:
        """Free every slot."""
        for slot in self._slots:
            slot.active = False


@dataclass
class Player:
    """The player's ship and the bullets it has fired."""

    pos: Vec3 = (WIDTH / 2, PLAYER_START_Y, 0.0)
    left: bool = False
    right: bool = False
    space: bool = False
    bullets: BulletPool = field(
        default_factory=lambda: BulletPool(PLAYER_BULLET_COUNT)
    )

    def update(self) -> None:
        """Move the ship by the held keys and advance its bullets one tick."""
        x, y, z = self.pos
        if self.right:
            x += PLAYER_SPEED
        if self.left:
            x -= PLAYER_SPEED
        x = min(max(x, 0.0), WIDTH)
        self.pos = (x, y, z)

        self.bullets.advance(PLAYER_BULLET_SPEED)
        for index, (_, by, _) in self.bullets.active():
            if by >= PLAYER_BULLET_CEILING:
                self.bullets.deactivate(index)

    def fire(self) -> Optional[int]:
        """Press the fire key: shoot once per press if a slot is free.

        Returns the slot used, or None if nothing was fired.
        """
        fired = None
        if not self.space:
            fired = self.bullets.spawn(self.pos)
        self.space = True
        return fired

    def release_fire(self) -> None:
        """Release the fire key so the next press shoots again."""
        self.space = False

    def reset(self) -> None:
        """Return to the starting position with no keys held and no bullets."""
        self.pos = (WIDTH / 2, PLAYER_START_Y, 0.0)
        self.left = False
        self.right = False
        self.space = False
        self.bullets.clear()


class Formation:
    """The marching block of enemies."""

    def __init__(self) -> None:
        self.dx = ENEMY_START_DX
        self.dy = ENEMY_DROP
        self._slots: List[_Slot] = []
        self.reset()

    def reset(self) -> None:
        """Restore every enemy to its starting place.

        The horizontal speed is left as it is.
        """
        self._slots = [_Slot(pos, True) for pos in formation_positions()]

    def active(self) -> List[Tuple[int, Vec3]]:
        """Index and position of each enemy still alive."""
        return [(i, s.pos) for i, s in enumerate(self._slots) if s.active]

    def march(self) -> List[Tuple[int, Vec3]]:
        """Step the live enemies sideways, turning and dropping at the edges.

        Returns each live enemy's index and position after the sideways step
        but before any drop, in order.
        """
        moved: List[Tuple[int, Vec3]] = []
        turn = False
        for index, slot in enumerate(self._slots):
            if not slot.active:
                continue
            x, y, z = slot.pos
            x += self.dx
            slot.pos = (x, y, z)
            moved.append((index, slot.pos))
            if x > WIDTH or x < 0:
                turn = True

        if turn:
            self.dx = -self.dx
            for slot in self._slots:
                x, y, z = slot.pos
                slot.pos = (x, y + self.dy, z)
        return moved

    def hit(self, point: Sequence[float]) -> Optional[int]:
        """Destroy the first live enemy within reach of ``point``.

        A hit speeds up the formation. Returns the enemy's index, or None.
        """
        px, py = point[0], point[1]
        for index, slot in enumerate(self._slots):
            if not slot.active:
                continue
            if math.hypot(px - slot.pos[0], py - slot.pos[1]) > ENEMY_HIT_RADIUS:
                continue
            self.dx *= ENEMY_SPEEDUP
            slot.active = False
            return index
        return None