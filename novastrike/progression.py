"""
Difficulty progression: stage tracking and probabilistic spawning
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .entities import ENEMY_SPAWN_Y, Enemy, EnemyKind, Powerup

logger = logging.getLogger(__name__)

MAX_STAGE = 3
POINTS_PER_STAGE = 500
SPEED_STEP = 0.3

SPAWN_BASE_CHANCE = 0.02
SPAWN_STAGE_CHANCE = 0.005
SPAWN_MARGIN = 30.0
FAST_THRESHOLD = 0.3
HEAVY_THRESHOLD = 0.15
POWERUP_DROP_CHANCE = 0.15


def stage_for_score(score: int) -> int:
    return min(score // POINTS_PER_STAGE + 1, MAX_STAGE)


def speed_for_stage(stage: int) -> float:
    return 1 + (stage - 1) * SPEED_STEP


class StageTracker:
    """Monotonic stage derived from cumulative score"""

    def __init__(self):
        self.stage = 1
        self.game_speed = 1.0

    def update(self, score: int) -> bool:
        """Advance the stage if the score earns it; returns True on advance"""
        new_stage = stage_for_score(score)
        if new_stage <= self.stage:
            return False
        self.stage = new_stage
        self.game_speed = speed_for_stage(new_stage)
        logger.info("Stage %d reached at score %d (speed x%.1f)",
                    self.stage, score, self.game_speed)
        return True

    def reset(self) -> None:
        self.stage = 1
        self.game_speed = 1.0


class Spawner:
    """Per-tick enemy spawn roll and the powerup drop roll on enemy death"""

    def __init__(self, width: float):
        self.width = width

    @staticmethod
    def spawn_chance(stage: int) -> float:
        return SPAWN_BASE_CHANCE + stage * SPAWN_STAGE_CHANCE

    @staticmethod
    def choose_kind(stage: int, rng: np.random.Generator) -> EnemyKind:
        # One draw serves both thresholds, so heavy spawns are a subset of
        # the fast-eligible draws.
        kind = EnemyKind.BASIC
        roll = rng.random()
        if stage >= 2 and roll < FAST_THRESHOLD:
            kind = EnemyKind.FAST
        if stage >= 3 and roll < HEAVY_THRESHOLD:
            kind = EnemyKind.HEAVY
        return kind

    def maybe_spawn(self, stage: int, rng: np.random.Generator) -> Optional[Enemy]:
        if rng.random() >= self.spawn_chance(stage):
            return None
        x = rng.uniform(SPAWN_MARGIN, self.width - SPAWN_MARGIN)
        return Enemy(x=float(x), y=ENEMY_SPAWN_Y, kind=self.choose_kind(stage, rng))

    def roll_drop(self, x: float, y: float, rng: np.random.Generator) -> Optional[Powerup]:
        if rng.random() >= POWERUP_DROP_CHANCE:
            return None
        return Powerup.random(x, y, rng)
