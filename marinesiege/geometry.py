"""Plane vectors and the movement rules used on the stage."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

_HALF_SPRITE = 32.0


@dataclass(frozen=True)
class Vector2:
    """A point or direction in screen coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2:
        """Return the unit vector in the same direction; a zero vector stays zero."""
        length = self.length()
        if length == 0:
            return self
        return Vector2(self.x / length, self.y / length)


@dataclass(frozen=True)
class Quad:
    """The four corners of a sprite-sized square."""

    left_up: Vector2
    right_up: Vector2
    left_down: Vector2
    right_down: Vector2


def _rotate(dx: float, dy: float, radians: float, center: Vector2) -> Vector2:
    cos, sin = math.cos(radians), math.sin(radians)
    return Vector2(dx * cos - dy * sin + center.x, dx * sin + dy * cos + center.y)


def rotated_quad(center: Vector2, radians: float) -> Quad:
    """Return the corners of a 64x64 square around ``center`` turned by ``radians``."""
    h = _HALF_SPRITE
    return Quad(
        left_up=_rotate(-h, -h, radians, center),
        right_up=_rotate(h, -h, radians, center),
        left_down=_rotate(-h, h, radians, center),
        right_down=_rotate(h, h, radians, center),
    )


def bullet_step(position: Vector2, direction: Vector2, speed: float) -> Vector2:
    """Move ``position`` along ``direction`` scaled by ``speed``."""
    return position + direction * speed


def home_in(position: Vector2, target: Vector2, speed: float) -> Vector2:
    """Move ``position`` by ``speed`` straight towards ``target``."""
    return position + (target - position).normalized() * speed


def random_edge_position(width: int, height: int, rng: random.Random) -> Vector2:
    """Pick a random whole-pixel point on one of the four edges of the window."""
    edge = rng.randrange(4)
    if edge == 0:
        return Vector2(float(rng.randrange(width)), 0.0)
    if edge == 1:
        return Vector2(float(rng.randrange(width)), float(height))
    if edge == 2:
        return Vector2(0.0, float(rng.randrange(height)))
    return Vector2(float(width), float(rng.randrange(height)))