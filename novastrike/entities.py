"""
Game entity dataclasses

Every transient entity carries an ``alive`` flag. Updates and collision
passes only ever clear the flag; the simulation step compacts the live
collections afterwards, so no collection is mutated while it is iterated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from .canvas import Canvas
from .events import SoundEvent
from .powerups import POWERUP_KINDS, PowerupKind
from .controls import Action, InputSnapshot
from .utils import clamp

if TYPE_CHECKING:
    import numpy as np
    from .state import SessionState

# Collision radii
BULLET_RADIUS = 5.0
PLAYER_RADIUS = 20.0
ENEMY_RADIUS = 20.0
ENEMY_BODY_RADIUS = 25.0  # enemy vs player
POWERUP_RADIUS = 15.0

PLAYER_EDGE_MARGIN = 20.0
PLAYER_START_OFFSET = 100.0  # distance from the bottom edge
INVULNERABLE_TICKS = 60
MAX_HEALTH = 100
START_LIVES = 3

ENEMY_SPAWN_Y = -30.0
ENEMY_BULLET_SPEED = 4.0
ENEMY_BULLET_COLOR = "#ff4040"
OFFSCREEN_MARGIN = 50.0

DAMAGE_PARTICLES = 10
HIT_PARTICLES = 5
EXPLOSION_PARTICLES = 15
DAMAGE_COLOR = "#ff4040"
EXPLOSION_COLOR = "#ffff40"


# ----------------------------
# Character archetypes
# ----------------------------

@dataclass(frozen=True)
class Character:
    """Immutable stat template picked at session start"""
    key: str
    name: str
    speed: float
    fire_rate: float  # shots per second
    damage: int
    color: str


CHARACTERS: Dict[str, Character] = {
    "nova": Character("nova", "Nova", speed=5, fire_rate=8, damage=1, color="#00d4ff"),
    "blaze": Character("blaze", "Blaze", speed=4, fire_rate=6, damage=2, color="#ff4040"),
    "viper": Character("viper", "Viper", speed=7, fire_rate=12, damage=1, color="#40ff40"),
}
DEFAULT_CHARACTER = "nova"


class UnknownCharacterError(KeyError):
    """Raised for a character selection key outside the archetype table"""


def get_character(key: str) -> Character:
    try:
        return CHARACTERS[key]
    except KeyError:
        raise UnknownCharacterError(
            f"unknown character {key!r}, expected one of {sorted(CHARACTERS)}"
        ) from None


# ----------------------------
# Enemy kinds
# ----------------------------

class EnemyKind(str, Enum):
    BASIC = "basic"
    FAST = "fast"
    HEAVY = "heavy"


@dataclass(frozen=True)
class EnemyStats:
    size: float
    speed: float
    health: int
    fire_rate: float  # chance per tick is fire_rate / 1000
    points: int
    color: str


ENEMY_STATS: Dict[EnemyKind, EnemyStats] = {
    EnemyKind.BASIC: EnemyStats(size=30, speed=2, health=1, fire_rate=2, points=10, color="#ff6040"),
    EnemyKind.FAST: EnemyStats(size=25, speed=4, health=1, fire_rate=3, points=15, color="#40ff60"),
    EnemyKind.HEAVY: EnemyStats(size=45, speed=1, health=3, fire_rate=1, points=25, color="#ff4040"),
}


# ----------------------------
# Entities
# ----------------------------

@dataclass
class Bullet:
    """Projectile fired by the player or by an enemy"""
    x: float
    y: float
    vx: float
    vy: float
    damage: int
    color: str
    owned_by_player: bool
    radius: float = BULLET_RADIUS
    alive: bool = True

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy

    def is_expired(self, width: float, height: float) -> bool:
        m = 10
        return self.x < -m or self.x > width + m or self.y < -m or self.y > height + m

    def draw(self, canvas: Canvas) -> None:
        canvas.fill_rect(self.x, self.y, 4, 10, self.color)


@dataclass
class Player:
    """The player's ship; one per session"""
    x: float
    y: float
    character: Character
    width: float = 40.0
    height: float = 40.0
    radius: float = PLAYER_RADIUS
    last_shot_tick: Optional[int] = None
    invulnerable: bool = False
    invulnerable_ticks: int = 0

    @classmethod
    def spawn(cls, character: Character, width: float, height: float) -> "Player":
        return cls(x=width / 2, y=height - PLAYER_START_OFFSET, character=character)

    @property
    def speed(self) -> float:
        return self.character.speed

    @property
    def fire_rate(self) -> float:
        return self.character.fire_rate

    @property
    def damage(self) -> int:
        return self.character.damage

    @property
    def color(self) -> str:
        return self.character.color

    def can_fire(self, tick: int, tick_rate: int) -> bool:
        """Cooldown of 1000/fire_rate ms measured on the logical clock"""
        if self.last_shot_tick is None:
            return True
        return (tick - self.last_shot_tick) * self.fire_rate >= tick_rate

    def update(self, state: "SessionState", snapshot: InputSnapshot) -> None:
        if Action.LEFT in snapshot:
            self.x -= self.speed
        if Action.RIGHT in snapshot:
            self.x += self.speed
        if Action.UP in snapshot:
            self.y -= self.speed
        if Action.DOWN in snapshot:
            self.y += self.speed

        m = PLAYER_EDGE_MARGIN
        self.x = clamp(self.x, m, state.width - m)
        self.y = clamp(self.y, m, state.height - m)

        if Action.FIRE in snapshot and self.can_fire(state.tick, state.tick_rate):
            self.shoot(state)
            self.last_shot_tick = state.tick

        # Checked before counting down: a hit on tick T keeps the player immune
        # through tick T + INVULNERABLE_TICKS.
        if self.invulnerable:
            if self.invulnerable_ticks <= 0:
                self.invulnerable = False
            else:
                self.invulnerable_ticks -= 1

    def shoot(self, state: "SessionState") -> List[Bullet]:
        powerups = state.active_powerups
        spread = 3 if PowerupKind.TRIPLE_SHOT in powerups else 1
        speed = 12.0 if PowerupKind.RAPID_FIRE in powerups else 8.0
        damage = self.damage * (2 if PowerupKind.POWER_SHOT in powerups else 1)

        fired = []
        for i in range(spread):
            angle = 0.0 if spread == 1 else (i - 1) * 0.3
            fired.append(Bullet(
                x=self.x, y=self.y - 20,
                vx=math.sin(angle) * speed, vy=-speed,
                damage=damage, color=self.color, owned_by_player=True,
            ))
        state.bullets.extend(fired)
        state.stats.shots_fired += 1
        state.events.emit(SoundEvent.SHOOT)
        return fired

    def take_damage(self, amount: int, state: "SessionState") -> bool:
        """Apply damage unless invulnerable; returns whether it landed"""
        if self.invulnerable:
            return False

        state.health = clamp(state.health - amount, 0, MAX_HEALTH)
        state.stats.damage_taken += amount
        self.invulnerable = True
        self.invulnerable_ticks = INVULNERABLE_TICKS
        state.events.emit(SoundEvent.PLAYER_HIT)
        state.particles.burst(self.x, self.y, DAMAGE_COLOR, DAMAGE_PARTICLES)

        if state.health <= 0:
            state.lives = max(0, state.lives - 1)
            state.health = MAX_HEALTH
            if state.lives <= 0:
                state.game_over = True
        return True

    def draw(self, canvas: Canvas) -> None:
        blink = self.invulnerable and (self.invulnerable_ticks // 6) % 2 == 1
        alpha = 0.5 if blink else 1.0
        canvas.fill_rect(self.x, self.y, self.width, self.height, self.color, alpha)
        canvas.fill_rect(self.x, self.y, 10, 30, "#ffffff", alpha)
        if not blink:
            # engine glow
            canvas.fill_rect(self.x, self.y + self.height / 2, 6, 10, self.color)


@dataclass
class Enemy:
    """Descending enemy; its stats are fixed by ``kind`` at construction"""
    x: float
    y: float
    kind: EnemyKind
    stats: EnemyStats = field(init=False)
    health: int = field(init=False)
    radius: float = ENEMY_RADIUS
    alive: bool = True

    def __post_init__(self):
        self.kind = EnemyKind(self.kind)
        self.stats = ENEMY_STATS[self.kind]
        self.health = self.stats.health

    @property
    def size(self) -> float:
        return self.stats.size

    @property
    def speed(self) -> float:
        return self.stats.speed

    @property
    def fire_rate(self) -> float:
        return self.stats.fire_rate

    @property
    def points(self) -> int:
        return self.stats.points

    @property
    def color(self) -> str:
        return self.stats.color

    def update(self, state: "SessionState") -> None:
        self.y += self.speed * state.game_speed

        if state.rng.random() < self.fire_rate / 1000:
            state.bullets.append(Bullet(
                x=self.x, y=self.y + 20,
                vx=0.0, vy=ENEMY_BULLET_SPEED,
                damage=1, color=ENEMY_BULLET_COLOR, owned_by_player=False,
            ))

    def take_damage(self, amount: int, state: "SessionState") -> bool:
        """Returns True when this hit destroyed the enemy"""
        self.health -= amount
        state.events.emit(SoundEvent.ENEMY_HIT)
        state.particles.burst(self.x, self.y, self.color, HIT_PARTICLES)

        if self.health > 0:
            return False

        state.score += self.points
        state.stats.kills += 1
        state.particles.burst(self.x, self.y, EXPLOSION_COLOR, EXPLOSION_PARTICLES)
        drop = state.spawner.roll_drop(self.x, self.y, state.rng)
        if drop is not None:
            state.pickups.append(drop)
        state.events.emit(SoundEvent.EXPLOSION)
        return True

    def is_expired(self, width: float, height: float) -> bool:
        return self.y > height + OFFSCREEN_MARGIN

    def draw(self, canvas: Canvas) -> None:
        canvas.fill_rect(self.x, self.y, self.size, self.size, self.color)


POWERUP_COLORS: Dict[PowerupKind, str] = {
    PowerupKind.TRIPLE_SHOT: "#ffff00",
    PowerupKind.RAPID_FIRE: "#ff8000",
    PowerupKind.POWER_SHOT: "#ff0080",
    PowerupKind.SHIELD: "#00ff80",
}


@dataclass
class Powerup:
    """Collectible dropped by a destroyed enemy"""
    x: float
    y: float
    kind: PowerupKind
    rotation: float = 0.0
    speed: float = 2.0
    size: float = 20.0
    radius: float = POWERUP_RADIUS
    alive: bool = True

    @classmethod
    def random(cls, x: float, y: float, rng: "np.random.Generator") -> "Powerup":
        kind = POWERUP_KINDS[int(rng.integers(len(POWERUP_KINDS)))]
        return cls(x=x, y=y, kind=kind)

    @property
    def color(self) -> str:
        return POWERUP_COLORS[self.kind]

    def update(self) -> None:
        self.y += self.speed
        self.rotation += 0.1

    def is_expired(self, width: float, height: float) -> bool:
        return self.y > height + OFFSCREEN_MARGIN

    def collect(self, state: "SessionState") -> None:
        state.active_powerups.activate(self.kind)
        state.stats.pickups += 1
        state.events.emit(SoundEvent.POWERUP)

    def draw(self, canvas: Canvas) -> None:
        half = self.size / 2
        c, s = math.cos(self.rotation), math.sin(self.rotation)
        corners = [(-half, -half), (half, -half), (half, half), (-half, half)]
        points = [(self.x + cx * c - cy * s, self.y + cx * s + cy * c) for cx, cy in corners]
        canvas.fill_polygon(points, self.color)
