"""
Game session lifecycle: start -> playing -> gameOver -> start
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from .canvas import Canvas
from .controls import NO_INPUT, InputSnapshot
from .effects import PARTICLE_CAPACITY, STAR_COUNT
from .entities import DEFAULT_CHARACTER, MAX_HEALTH, START_LIVES, Character, get_character
from .events import EventBus
from .simulation import step
from .state import SessionState
from .utils import make_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HudSnapshot:
    """Read-only view of the session for a display layer"""
    score: int
    lives: int
    health: int
    stage: int
    character_name: str
    active_powerups: Tuple[str, ...]

    @property
    def health_percent(self) -> float:
        return float(self.health)


HudSink = Callable[[HudSnapshot], None]


class SessionMachine(StateMachine):
    """Guards session transitions; state changes are applied by GameSession"""

    start = State("Start", value="start", initial=True)
    playing = State("Playing", value="playing")
    game_over = State("Game Over", value="gameOver")

    start_game = start.to(playing)
    end_game = playing.to(game_over)
    restart_game = game_over.to(start)

    def __init__(self, session: "GameSession"):
        self.session = session
        super().__init__()

    def on_enter_playing(self):
        self.session._begin()

    def on_enter_game_over(self):
        self.session._finish()


class GameSession:
    """
    Owns the session state and decides whether the simulation runs.

    The host calls :meth:`tick` once per frame with the current input
    snapshot; ticks outside the ``playing`` phase do nothing. Sound triggers
    go to ``events`` and a HUD snapshot is pushed to ``hud_sink`` after every
    tick, both best-effort.
    """

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        tick_rate: int = 60,
        character: str = DEFAULT_CHARACTER,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        particle_capacity: int = PARTICLE_CAPACITY,
        star_count: int = STAR_COUNT,
        hud_sink: Optional[HudSink] = None,
    ):
        self.width = width
        self.height = height
        self.tick_rate = tick_rate
        self.particle_capacity = particle_capacity
        self.star_count = star_count
        self.rng = rng if rng is not None else make_rng(seed)
        self.events = EventBus()
        self.hud_sink = hud_sink

        self.selected_character: Character = get_character(character)
        self.state: Optional[SessionState] = None
        self.machine = SessionMachine(self)

    # ----------------------------
    # Transitions
    # ----------------------------

    def select_character(self, key: str) -> Character:
        self.selected_character = get_character(key)
        return self.selected_character

    def start_game(self, character: Optional[str] = None) -> SessionState:
        # unknown keys are rejected before any state changes
        chosen = get_character(character) if character is not None else self.selected_character
        previous, self.selected_character = self.selected_character, chosen
        try:
            self.machine.start_game()
        except TransitionNotAllowed:
            self.selected_character = previous
            raise
        return self.state

    def restart_game(self) -> None:
        self.machine.restart_game()
        # the finished game is no longer shown on the start screen
        self.state = None
        logger.info("Back to start screen")

    def _begin(self) -> None:
        self.state = SessionState.new(
            self.selected_character,
            width=self.width,
            height=self.height,
            tick_rate=self.tick_rate,
            rng=self.rng,
            events=self.events,
            particle_capacity=self.particle_capacity,
            star_count=self.star_count,
        )
        logger.info("Session started as %s", self.selected_character.name)

    def _finish(self) -> None:
        logger.info("Game over: score %d, stage %d after %d ticks",
                    self.state.score, self.state.stage, self.state.tick)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def tick(self, snapshot: InputSnapshot = NO_INPUT) -> bool:
        """Run one simulation tick; returns False when the session is not playing"""
        if not self.is_playing:
            return False

        step(self.state, snapshot)
        self._push_hud()
        if self.state.game_over:
            self.machine.end_game()
        return True

    def _push_hud(self) -> None:
        if self.hud_sink is None:
            return
        try:
            self.hud_sink(self.hud())
        except Exception:
            logger.warning("HUD sink failed, detaching it", exc_info=True)
            self.hud_sink = None

    # ----------------------------
    # Read-only views
    # ----------------------------

    @property
    def phase(self) -> str:
        return self.machine.current_state.value

    @property
    def is_playing(self) -> bool:
        return self.phase == "playing"

    @property
    def is_game_over(self) -> bool:
        return self.phase == "gameOver"

    def hud(self) -> HudSnapshot:
        s = self.state
        if s is None:
            return HudSnapshot(0, START_LIVES, MAX_HEALTH, 1, self.selected_character.name, ())
        return HudSnapshot(
            score=s.score,
            lives=s.lives,
            health=s.health,
            stage=s.stage,
            character_name=s.character.name,
            active_powerups=tuple(s.active_powerups.active_names()),
        )

    def draw(self, canvas: Canvas) -> None:
        """Hand every live entity to the render sink, back to front"""
        s = self.state
        if s is None:
            return
        s.starfield.draw(canvas)
        s.player.draw(canvas)
        for b in s.bullets:
            b.draw(canvas)
        for e in s.enemies:
            e.draw(canvas)
        s.particles.draw(canvas)
        for p in s.pickups:
            p.draw(canvas)
