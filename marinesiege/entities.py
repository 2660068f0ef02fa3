"""The actors of the stage: the marine, its bolts, the enemies and dropped points."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from .geometry import Vector2

MAGAZINE_SIZE = 10
RESPAWN_FRAMES = 120
HURT_COOLDOWN = 60
_OFFSCREEN = Vector2(-128.0, -128.0)


class Facing(Enum):
    """Which way a sprite looks."""

    LEFT = 0
    RIGHT = 1


@dataclass
class Player:
    """The marine controlled by the keyboard."""

    pos: Vector2
    radius: float = 16.0
    speed: float = 4.0
    bolts: int = MAGAZINE_SIZE
    shoot_cooldown: int = 0
    hp: int = 10
    hurt_cooldown: int = HURT_COOLDOWN
    kill_counter: int = 0

    @classmethod
    def spawn(cls) -> Player:
        """Return a fresh marine below the middle of the room."""
        return cls(pos=Vector2(1280.0 / 2.0, 720.0 / 2.0 + 150.0))


@dataclass
class Bullet:
    """A bolt in the magazine or in flight."""

    NONE: ClassVar[int] = -1
    STRAIGHT: ClassVar[int] = 0
    HOMING: ClassVar[int] = 1

    pos: Vector2 = _OFFSCREEN
    heading: Vector2 = _OFFSCREEN
    radius: float = 4.0
    speed: float = 12.0
    is_shot: bool = False
    kind: int = -1
    kill_counter: int = 0

    @classmethod
    def holstered(cls) -> Bullet:
        """Return a bolt still in the magazine, parked off screen."""
        return cls()

    def reload(self) -> None:
        """Put the bolt back into the magazine."""
        self.is_shot = False
        self.kind = Bullet.NONE
        self.kill_counter = 0


@dataclass
class Enemy:
    """A minion or a boss."""

    pos: Vector2
    hp: int
    radius: float
    speed: float
    respawn_time: int = RESPAWN_FRAMES
    is_alive: bool = True

    @classmethod
    def minion(cls, position: Vector2) -> Enemy:
        """Return a live minion at ``position``."""
        return cls(pos=position, hp=1, radius=8.0, speed=0.5)

    @classmethod
    def boss(cls, position: Vector2) -> Enemy:
        """Return a dormant boss at ``position``."""
        return cls(pos=position, hp=100, radius=45.0, speed=1.0, is_alive=False)


@dataclass
class Item:
    """A point gem dropped by a fallen enemy."""

    pos: Vector2 = field(default_factory=lambda: Vector2(-1000.0, -1000.0))
    radius: float = 0.0
    is_alive: bool = False

    @classmethod
    def hidden(cls) -> Item:
        """Return a gem that is not on the field."""
        return cls()