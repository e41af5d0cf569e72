"""
Active Powerup Registry - timed buffs keyed by kind
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

POWERUP_DURATION_TICKS = 600  # 10s at 60 ticks/sec


class PowerupKind(str, Enum):
    TRIPLE_SHOT = "tripleShot"
    RAPID_FIRE = "rapidFire"
    POWER_SHOT = "powerShot"
    SHIELD = "shield"


POWERUP_KINDS: List[PowerupKind] = list(PowerupKind)


class PowerupRegistry:
    """
    Countdown per active powerup kind.

    Collecting a kind (re)sets its countdown to the full duration, it never
    stacks. Entries are dropped as soon as they reach zero, so the registry
    never holds a non-positive countdown.
    """

    def __init__(self, duration: int = POWERUP_DURATION_TICKS):
        assert duration > 0, "duration must be positive"
        self.duration = duration
        self._remaining: Dict[PowerupKind, int] = {}

    def activate(self, kind: PowerupKind) -> None:
        # Re-insert so that display order follows the latest pickup.
        self._remaining.pop(kind, None)
        self._remaining[kind] = self.duration

    def is_active(self, kind: PowerupKind) -> bool:
        return kind in self._remaining

    def remaining(self, kind: PowerupKind) -> int:
        return self._remaining.get(kind, 0)

    def tick(self) -> List[PowerupKind]:
        """Age every entry by one tick; returns the kinds that expired"""
        expired = []
        for kind in list(self._remaining):
            self._remaining[kind] -= 1
            if self._remaining[kind] <= 0:
                expired.append(kind)
        for kind in expired:
            del self._remaining[kind]
        return expired

    def clear(self) -> None:
        self._remaining.clear()

    def active_names(self) -> List[str]:
        return [kind.value for kind in self._remaining]

    def __contains__(self, kind: PowerupKind) -> bool:
        return self.is_active(kind)

    def __len__(self) -> int:
        return len(self._remaining)
