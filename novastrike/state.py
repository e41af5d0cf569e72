"""
Explicit per-session context passed into the simulation step
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .effects import PARTICLE_CAPACITY, STAR_COUNT, ParticleSystem, Starfield
from .entities import (
    MAX_HEALTH,
    START_LIVES,
    Bullet,
    Character,
    Enemy,
    Player,
    Powerup,
)
from .events import EventBus
from .powerups import PowerupRegistry
from .progression import Spawner, StageTracker
from .utils import make_rng


@dataclass
class SessionStats:
    """Running counters, read by the Gymnasium wrapper and evaluation tools"""
    shots_fired: int = 0
    kills: int = 0
    damage_taken: int = 0
    pickups: int = 0


@dataclass
class SessionState:
    """All mutable state of one play session"""
    player: Player
    rng: np.random.Generator
    particles: ParticleSystem
    starfield: Starfield
    spawner: Spawner
    events: EventBus = field(default_factory=EventBus)
    width: float = 800
    height: float = 600
    tick_rate: int = 60
    tick: int = 0
    score: int = 0
    lives: int = START_LIVES
    health: int = MAX_HEALTH
    game_over: bool = False
    progress: StageTracker = field(default_factory=StageTracker)
    active_powerups: PowerupRegistry = field(default_factory=PowerupRegistry)
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    pickups: List[Powerup] = field(default_factory=list)
    stats: SessionStats = field(default_factory=SessionStats)

    @classmethod
    def new(
        cls,
        character: Character,
        width: float = 800,
        height: float = 600,
        tick_rate: int = 60,
        rng: Optional[np.random.Generator] = None,
        events: Optional[EventBus] = None,
        particle_capacity: int = PARTICLE_CAPACITY,
        star_count: int = STAR_COUNT,
    ) -> "SessionState":
        rng = rng if rng is not None else make_rng()
        # cosmetic effects get their own stream
        fx_rng = make_rng(int(rng.integers(0, 2 ** 32)))
        return cls(
            player=Player.spawn(character, width, height),
            rng=rng,
            particles=ParticleSystem(fx_rng, capacity=particle_capacity),
            starfield=Starfield(width, height, fx_rng, count=star_count),
            spawner=Spawner(width),
            events=events if events is not None else EventBus(),
            width=width,
            height=height,
            tick_rate=tick_rate,
        )

    @property
    def stage(self) -> int:
        return self.progress.stage

    @property
    def game_speed(self) -> float:
        return self.progress.game_speed

    @property
    def character(self) -> Character:
        return self.player.character
