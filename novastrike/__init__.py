"""NovaStrike - vertical arcade shooter simulation core"""

from .controls import Action, InputSnapshot, snapshot
from .entities import CHARACTERS, UnknownCharacterError, get_character
from .session import GameSession, HudSnapshot
from .shooter_env import ShooterEnv, run_random_episode
from .simulation import step
from .state import SessionState

__all__ = [
    'Action', 'InputSnapshot', 'snapshot',
    'CHARACTERS', 'UnknownCharacterError', 'get_character',
    'GameSession', 'HudSnapshot', 'SessionState', 'step',
    'ShooterEnv', 'run_random_episode',
]
