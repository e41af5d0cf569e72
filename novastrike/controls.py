"""
Logical input actions and the per-tick key-state snapshot
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable


class Action(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    FIRE = "fire"


# Level-triggered: the set of actions held down during this tick.
InputSnapshot = FrozenSet[Action]

NO_INPUT: InputSnapshot = frozenset()


def snapshot(actions: Iterable[Action] = ()) -> InputSnapshot:
    return frozenset(Action(a) for a in actions)
