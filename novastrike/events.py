"""
Fire-and-forget sound triggers emitted by the simulation core
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class SoundEvent(str, Enum):
    SHOOT = "shoot"
    ENEMY_HIT = "enemyHit"
    PLAYER_HIT = "playerHit"
    POWERUP = "powerup"
    EXPLOSION = "explosion"


Listener = Callable[[SoundEvent], None]


class EventBus:
    """
    Synchronous, best-effort dispatch of sound triggers.

    With no listeners attached every emit is a no-op. A listener that raises
    is logged and detached; the tick that emitted the event carries on.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: SoundEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("Dropping sound listener %r after it failed on %s",
                               listener, event.value, exc_info=True)
                self.unsubscribe(listener)

    def __len__(self) -> int:
        return len(self._listeners)
