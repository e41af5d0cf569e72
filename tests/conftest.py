from __future__ import annotations

from typing import Iterable, List

import pytest

from novastrike.entities import get_character
from novastrike.events import SoundEvent
from novastrike.state import SessionState
from novastrike.utils import make_rng


class ScriptedRng:
    """Stand-in for numpy's Generator that replays queued values.

    ``random()`` pops queued rolls and falls back to ``default`` (0.999 makes
    every chance-based event fail, so the world stays quiet). ``uniform``
    returns the midpoint and ``integers`` the lowest value unless queued.
    """

    def __init__(self, rolls: Iterable[float] = (), default: float = 0.999):
        self.rolls: List[float] = list(rolls)
        self.default = default
        self.choices: List[int] = []

    def random(self, size=None):
        assert size is None, "scripted rng only serves scalar rolls"
        return self.rolls.pop(0) if self.rolls else self.default

    def uniform(self, low=0.0, high=1.0, size=None):
        assert size is None, "scripted rng only serves scalar rolls"
        return (low + high) / 2

    def integers(self, low, high=None, size=None):
        if self.choices:
            return self.choices.pop(0)
        return 0 if high is None else low


@pytest.fixture()
def quiet_rng() -> ScriptedRng:
    return ScriptedRng()


@pytest.fixture()
def state(quiet_rng) -> SessionState:
    """A fresh nova session where no random event fires unless scripted"""
    s = SessionState.new(get_character("nova"), rng=make_rng(0))
    s.rng = quiet_rng
    return s


@pytest.fixture()
def sounds(state) -> List[SoundEvent]:
    heard: List[SoundEvent] = []
    state.events.subscribe(heard.append)
    return heard
