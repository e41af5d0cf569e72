"""
ShooterEnv - Gymnasium wrapper around a NovaStrike game session
---------------------------------------------------------------
- One env step == one logical simulation tick
- Gymnasium API, headless by default
- Discrete MultiDiscrete action space: [horizontal(3), vertical(3), fire(2)]
- Vector observation: player state + active powerups + top-K nearest enemies
  + top-M nearest enemy bullets
- Optional rendering: Arcade window ("human") or numpy frame ("rgb_array")

Quick test:
    python -m novastrike.shooter_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .canvas import ArrayCanvas
from .controls import Action, snapshot
from .entities import DEFAULT_CHARACTER, MAX_HEALTH, START_LIVES, EnemyKind
from .powerups import POWERUP_KINDS
from .progression import MAX_STAGE
from .session import GameSession
from .utils import clamp

DEFAULT_REWARDS = {
    "R_SCORE": 0.01,    # per point scored
    "R_PICKUP": 0.5,    # per powerup collected
    "R_DAMAGE": 1.0,    # multiplied by damage / max health
    "R_LIFE": 2.0,      # per life lost
    "R_TIME": 0.001,    # survival bonus per tick
    "R_GAME_OVER": 5.0,
}

_KIND_CODE = {EnemyKind.BASIC: -1.0, EnemyKind.FAST: 0.0, EnemyKind.HEAVY: 1.0}


class ShooterEnv(gym.Env):
    """Vertical arcade shooter environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        tick_rate: int = 60,
        max_steps: int = 3600,  # 60s at 60 ticks/sec
        k_enemies: int = 5,
        m_bullets: int = 5,
        character: str = DEFAULT_CHARACTER,
        particle_capacity: int = 200,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"unsupported render_mode {render_mode!r}"
        assert max_steps > 0, "max_steps must be positive"
        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.tick_rate = tick_rate
        self.max_steps = max_steps
        self.character = character
        self.particle_capacity = particle_capacity

        # Observation config
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # horizontal: 0 none, 1 left, 2 right
        # vertical:   0 none, 1 up, 2 down
        # fire:       0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Player: pos(2) health(1) lives(1) stage(1) invulnerable(1)
        # Powerups: one flag per kind
        # Each enemy: rel pos(2) kind(1)
        # Each enemy bullet: rel pos(2)
        obs_dim = 6 + len(POWERUP_KINDS) + (self.k_enemies * 3) + (self.m_bullets * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.session: Optional[GameSession] = None
        self._step_count = 0
        self._prev: Dict[str, int] = {}

        # Rendering state
        self._window = None
        self._canvas: Optional[ArrayCanvas] = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        character = (options or {}).get("character", self.character)
        self.session = GameSession(
            width=self.width,
            height=self.height,
            tick_rate=self.tick_rate,
            character=character,
            rng=self.np_random,
            particle_capacity=self.particle_capacity,
        )
        self.session.start_game()
        self._step_count = 0
        self._prev = self._counters()

        if self._window is not None:
            self._window.session = self.session

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        assert self.session is not None, "call reset() before step()"

        horizontal, vertical, fire = int(action[0]), int(action[1]), int(action[2])
        self.session.tick(self._to_snapshot(horizontal, vertical, fire))

        reward = self._compute_reward()

        terminated = self.session.is_game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Action / observation / reward
    # ----------------------------

    @staticmethod
    def _to_snapshot(horizontal: int, vertical: int, fire: int):
        held = []
        if horizontal == 1:
            held.append(Action.LEFT)
        elif horizontal == 2:
            held.append(Action.RIGHT)
        if vertical == 1:
            held.append(Action.UP)
        elif vertical == 2:
            held.append(Action.DOWN)
        if fire:
            held.append(Action.FIRE)
        return snapshot(held)

    def _counters(self) -> Dict[str, int]:
        s = self.session.state
        return {
            "score": s.score,
            "lives": s.lives,
            "damage": s.stats.damage_taken,
            "pickups": s.stats.pickups,
        }

    def _get_obs(self) -> np.ndarray:
        s = self.session.state
        p = s.player

        obs_parts: List[float] = [
            p.x / self.width * 2 - 1,
            p.y / self.height * 2 - 1,
            s.health / MAX_HEALTH * 2 - 1,
            s.lives / START_LIVES * 2 - 1,
            (s.stage - 1) / max(1, MAX_STAGE - 1) * 2 - 1,
            1.0 if p.invulnerable else -1.0,
        ]
        obs_parts += [1.0 if kind in s.active_powerups else -1.0 for kind in POWERUP_KINDS]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            s.enemies, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / self.width, -1, 1),
                    clamp((e.y - p.y) / self.height, -1, 1),
                    _KIND_CODE[e.kind],
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Enemy bullets: top-M nearest
        hostile = [b for b in s.bullets if not b.owned_by_player]
        bullets_sorted = sorted(
            hostile, key=lambda b: (b.x - p.x) ** 2 + (b.y - p.y) ** 2
        )
        for i in range(self.m_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [
                    clamp((b.x - p.x) / self.width, -1, 1),
                    clamp((b.y - p.y) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        obs = np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)
        return obs

    def _compute_reward(self) -> float:
        now = self._counters()
        prev = self._prev
        self._prev = now

        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * (now["score"] - prev["score"])
        reward += r["R_PICKUP"] * (now["pickups"] - prev["pickups"])
        reward -= r["R_DAMAGE"] * (now["damage"] - prev["damage"]) / MAX_HEALTH
        reward -= r["R_LIFE"] * (prev["lives"] - now["lives"])
        reward += r["R_TIME"]

        if self.session.is_game_over:
            reward -= r["R_GAME_OVER"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session.state
        return {
            "score": s.score,
            "lives": s.lives,
            "health": s.health,
            "stage": s.stage,
            "kills": s.stats.kills,
            "active_powerups": s.active_powerups.active_names(),
            "num_enemies": len(s.enemies),
            "num_bullets": len(s.bullets),
            "num_pickups": len(s.pickups),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            # Arcade is only needed for on-screen rendering
            from .window import ShooterWindow
            self._window = ShooterWindow(self.session, self.width, self.height)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        if self._canvas is None:
            self._canvas = ArrayCanvas(self.width, self.height)
        self._canvas.clear()
        self.session.draw(self._canvas)
        return self._canvas.frame()

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42, fps: float = 60.0):
    """Run a random episode for testing"""
    env = ShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to stop early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1.0 / fps)

    print(f"Random episode return: {total:.2f}  "
          f"score: {info['score']}  stage: {info['stage']}  steps: {info['step']}")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
