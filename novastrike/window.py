"""
Arcade front end: render sink, sound sink and the interactive game window
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

import arcade

from .canvas import hex_to_rgb
from .controls import Action, snapshot
from .entities import CHARACTERS
from .events import SoundEvent
from .session import GameSession

logger = logging.getLogger(__name__)

KEY_BINDINGS: Dict[int, Action] = {
    arcade.key.LEFT: Action.LEFT,
    arcade.key.A: Action.LEFT,
    arcade.key.RIGHT: Action.RIGHT,
    arcade.key.D: Action.RIGHT,
    arcade.key.UP: Action.UP,
    arcade.key.W: Action.UP,
    arcade.key.DOWN: Action.DOWN,
    arcade.key.S: Action.DOWN,
    arcade.key.SPACE: Action.FIRE,
}

CHARACTER_KEYS: Dict[int, str] = {
    arcade.key.KEY_1: "nova",
    arcade.key.KEY_2: "blaze",
    arcade.key.KEY_3: "viper",
}

SOUND_RESOURCES: Dict[SoundEvent, str] = {
    SoundEvent.SHOOT: ":resources:sounds/laser1.wav",
    SoundEvent.ENEMY_HIT: ":resources:sounds/hit1.wav",
    SoundEvent.PLAYER_HIT: ":resources:sounds/hurt1.wav",
    SoundEvent.POWERUP: ":resources:sounds/coin1.wav",
    SoundEvent.EXPLOSION: ":resources:sounds/explosion1.wav",
}


def _rgba(color: str, alpha: float = 1.0):
    r, g, b = hex_to_rgb(color)
    return r, g, b, int(255 * max(0.0, min(1.0, alpha)))


class ArcadeCanvas:
    """Canvas implementation that flips canvas space (y down) into Arcade's y-up space"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def clear(self) -> None:
        pass  # the window clears itself before drawing

    def fill_rect(self, cx, cy, w, h, color, alpha=1.0):
        y = self.height - cy
        arcade.draw_lrbt_rectangle_filled(
            cx - w / 2, cx + w / 2, y - h / 2, y + h / 2, _rgba(color, alpha)
        )

    def fill_circle(self, cx, cy, r, color, alpha=1.0):
        arcade.draw_circle_filled(cx, self.height - cy, r, _rgba(color, alpha))

    def fill_polygon(self, points, color, alpha=1.0):
        flipped = [(x, self.height - y) for x, y in points]
        arcade.draw_polygon_filled(flipped, _rgba(color, alpha))


class ArcadeAudio:
    """Plays Arcade's bundled sounds for the game's sound triggers"""

    def __init__(self, volume: float = 0.3):
        self.volume = volume
        self._sounds: Dict[SoundEvent, arcade.Sound] = {}
        for event, path in SOUND_RESOURCES.items():
            try:
                self._sounds[event] = arcade.load_sound(path)
            except OSError as exc:
                logger.warning("Sound %s unavailable (%s), continuing without it",
                               event.value, exc)

    def __call__(self, event: SoundEvent) -> None:
        sound = self._sounds.get(event)
        if sound is not None:
            arcade.play_sound(sound, volume=self.volume)


class ShooterWindow(arcade.Window):
    """Arcade window that draws a game session"""

    def __init__(self, session: GameSession, width: int, height: int,
                 title: str = "NovaStrike"):
        super().__init__(width, height, title, update_rate=1 / session.tick_rate)
        self.session = session
        self.canvas = ArcadeCanvas(width, height)

        # Colors
        self.BG = (18, 18, 22)
        self.HUD_C = (220, 220, 220)
        self.HEALTH_C = (80, 200, 120)

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        arcade.set_background_color(self.BG)
        self.session.draw(self.canvas)
        self.draw_hud()

    def draw_hud(self):
        hud = self.session.hud()

        # Health bar
        bar_w, bar_h = 180, 10
        x0, y0 = 12, self.height - 22
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, (60, 60, 60))
        fill = bar_w * hud.health_percent / 100
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, self.HEALTH_C)

        txt = (f"Score: {hud.score}  Lives: {hud.lives}  Stage: {hud.stage}  "
               f"Pilot: {hud.character_name}")
        arcade.draw_text(txt, 12, self.height - 42, self.HUD_C, 14)
        if hud.active_powerups:
            arcade.draw_text("Active: " + ", ".join(hud.active_powerups),
                             12, self.height - 62, self.HUD_C, 12)


class GameWindow(ShooterWindow):
    """Interactive host: polls keys into input snapshots and ticks at a fixed rate"""

    MAX_CATCH_UP_TICKS = 5

    def __init__(self, session: GameSession, width: int, height: int,
                 title: str = "NovaStrike", sound: bool = True):
        super().__init__(session, width, height, title)
        self.held: Set[Action] = set()
        self._accum = 0.0
        self._tick_len = 1.0 / session.tick_rate
        self._audio: Optional[ArcadeAudio] = None
        if sound:
            self._audio = ArcadeAudio()
            session.events.subscribe(self._audio)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in KEY_BINDINGS:
            self.held.add(KEY_BINDINGS[symbol])
        elif symbol == arcade.key.ESCAPE:
            self.close()
        elif self.session.phase == "start":
            if symbol in CHARACTER_KEYS:
                self.session.select_character(CHARACTER_KEYS[symbol])
            elif symbol == arcade.key.ENTER:
                self.session.start_game()
                self._accum = 0.0
        elif self.session.is_game_over and symbol == arcade.key.ENTER:
            self.session.restart_game()

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action is not None:
            self.held.discard(action)

    def on_update(self, delta_time: float):
        if not self.session.is_playing:
            return
        self._accum = min(self._accum + delta_time, self._tick_len * self.MAX_CATCH_UP_TICKS)
        while self._accum >= self._tick_len and self.session.is_playing:
            self.session.tick(snapshot(self.held))
            self._accum -= self._tick_len

    def on_draw(self):
        super().on_draw()
        cx, cy = self.width / 2, self.height / 2
        phase = self.session.phase
        if phase == "start":
            names = "  ".join(f"[{i}] {c.name}" for i, c in enumerate(CHARACTERS.values(), 1))
            arcade.draw_text("NOVASTRIKE", cx, cy + 60, self.HUD_C, 36, anchor_x="center")
            arcade.draw_text(names, cx, cy, self.HUD_C, 16, anchor_x="center")
            arcade.draw_text(f"Selected: {self.session.selected_character.name} - ENTER to start",
                             cx, cy - 40, self.HUD_C, 14, anchor_x="center")
        elif phase == "gameOver":
            hud = self.session.hud()
            arcade.draw_text("GAME OVER", cx, cy + 40, self.HUD_C, 36, anchor_x="center")
            arcade.draw_text(f"Final score: {hud.score}  Stage: {hud.stage}",
                             cx, cy, self.HUD_C, 16, anchor_x="center")
            arcade.draw_text("ENTER to continue", cx, cy - 40, self.HUD_C, 14, anchor_x="center")


def run_window(session: GameSession, title: str = "NovaStrike", sound: bool = True):
    """Open the interactive window and block until it is closed"""
    GameWindow(session, int(session.width), int(session.height), title=title, sound=sound)
    arcade.run()
