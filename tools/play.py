"""
Play NovaStrike in an Arcade window, or run a scripted session headless

    python -m tools.play --character viper
    python -m tools.play --headless --ticks 3600 --seed 7
"""

import argparse
import logging
from typing import Optional

from novastrike import CHARACTERS, Action, GameSession, snapshot
from tools.configs.game_config import GAME_CONFIG, HEADLESS_CONFIG, WINDOW_CONFIG


def scripted_input(tick: int, strafe_period: int):
    """Sweep left and right across the screen while holding fire"""
    direction = Action.LEFT if (tick // strafe_period) % 2 else Action.RIGHT
    return snapshot([direction, Action.FIRE])


def run_headless(
    character: str,
    ticks: int,
    seed: Optional[int] = None,
    strafe_period: int = HEADLESS_CONFIG["strafe_period"],
):
    """Run one session with scripted input; stops at game over or after ``ticks``"""
    session = GameSession(seed=seed, character=character, **GAME_CONFIG)
    session.start_game()

    for t in range(ticks):
        if not session.tick(scripted_input(t, strafe_period)):
            break

    hud = session.hud()
    stats = session.state.stats
    print(f"\n{'='*50}")
    print(f"Pilot: {hud.character_name}  Phase: {session.phase}")
    print(f"Score: {hud.score}  Stage: {hud.stage}  Lives: {hud.lives}  Health: {hud.health}")
    print(f"Ticks: {session.state.tick}  Shots: {stats.shots_fired}  "
          f"Kills: {stats.kills}  Pickups: {stats.pickups}")
    print(f"{'='*50}")
    return session


def main():
    parser = argparse.ArgumentParser(description="Play NovaStrike")
    parser.add_argument(
        "--character",
        type=str,
        default=WINDOW_CONFIG["character"],
        choices=sorted(CHARACTERS),
        help="Pilot archetype (default: nova)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: unseeded)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run a scripted session without a window",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=HEADLESS_CONFIG["ticks"],
        help="Tick limit for headless runs (default: 3600)",
    )
    parser.add_argument(
        "--no-sound",
        action="store_true",
        help="Disable sound effects",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log session events",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.headless:
        run_headless(args.character, args.ticks, seed=args.seed)
        return

    # Arcade is only needed for the windowed game
    from novastrike.window import run_window

    session = GameSession(seed=args.seed, character=args.character, **GAME_CONFIG)
    run_window(session, title=WINDOW_CONFIG["title"],
               sound=WINDOW_CONFIG["sound"] and not args.no_sound)


if __name__ == "__main__":
    main()
