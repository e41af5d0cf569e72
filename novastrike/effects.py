"""
Cosmetic subsystem: particle bursts and the parallax starfield

Nothing here feeds back into collisions or scoring. Both draw from their own
generator so that cosmetic randomness never shifts gameplay rolls.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator

import numpy as np

from .canvas import Canvas

PARTICLE_LIFE = 60
PARTICLE_GRAVITY = 0.2
PARTICLE_CAPACITY = 500
STAR_COUNT = 100


@dataclass
class Particle:
    """Short-lived spark"""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    life: int = PARTICLE_LIFE
    max_life: int = PARTICLE_LIFE

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.vy += PARTICLE_GRAVITY
        self.life -= 1

    def is_expired(self) -> bool:
        return self.life <= 0

    def draw(self, canvas: Canvas) -> None:
        canvas.fill_rect(self.x, self.y, 4, 4, self.color, self.life / self.max_life)


class ParticleSystem:
    """Fixed-capacity particle pool; the oldest particles are dropped first when full"""

    def __init__(self, rng: np.random.Generator, capacity: int = PARTICLE_CAPACITY):
        assert capacity >= 0, "capacity must be non-negative"
        self.rng = rng
        self.capacity = capacity
        self._particles: Deque[Particle] = deque(maxlen=capacity)

    def burst(self, x: float, y: float, color: str, count: int) -> None:
        if self.capacity == 0 or count <= 0:
            return
        vel = (self.rng.random((count, 2)) - 0.5) * 10
        for vx, vy in vel:
            self._particles.append(Particle(x=x, y=y, vx=float(vx), vy=float(vy), color=color))

    def update(self) -> None:
        for p in self._particles:
            p.update()
        self._particles = deque((p for p in self._particles if not p.is_expired()),
                                maxlen=self.capacity)

    def draw(self, canvas: Canvas) -> None:
        for p in self._particles:
            p.draw(canvas)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __len__(self) -> int:
        return len(self._particles)


class Starfield:
    """Vertically scrolling background stars held in flat numpy arrays"""

    def __init__(self, width: float, height: float, rng: np.random.Generator,
                 count: int = STAR_COUNT):
        self.width = width
        self.height = height
        self.rng = rng
        self.x = rng.uniform(0, width, count)
        self.y = rng.uniform(0, height, count)
        self.speed = rng.random(count) * 2 + 1
        self.size = rng.random(count) * 2

    def update(self, game_speed: float) -> None:
        self.y += self.speed * game_speed
        wrapped = self.y > self.height
        n = int(wrapped.sum())
        if n:
            self.y[wrapped] = 0.0
            self.x[wrapped] = self.rng.uniform(0, self.width, n)

    def draw(self, canvas: Canvas) -> None:
        for x, y, s in zip(self.x, self.y, self.size):
            canvas.fill_rect(x + s / 2, y + s / 2, s, s, "#ffffff", 0.8)

    def __len__(self) -> int:
        return len(self.x)
