"""
Random-policy evaluation of the NovaStrike Gymnasium environment
"""

import argparse
import csv
import os
import time
from typing import Optional

import numpy as np

from novastrike import ShooterEnv
from tools.configs.game_config import ENV_CONFIG, REWARD_CONFIG

CSV_FIELDS = ["episode", "reward", "length", "score", "stage", "kills", "lives", "terminated"]


def evaluate_random(
    n_episodes: int = 10,
    seed: Optional[int] = None,
    render: bool = False,
    csv_path: Optional[str] = None,
):
    """
    Run a uniformly random policy and report episode statistics

    Args:
        n_episodes: Number of episodes to run
        seed: Base seed; episode i is reset with seed + i
        render: Whether to open an Arcade window
        csv_path: Optional path to write per-episode metrics
    """
    env = ShooterEnv(render_mode="human" if render else None,
                     reward_config=REWARD_CONFIG, **ENV_CONFIG)
    if seed is not None:
        env.action_space.seed(seed)

    rows = []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1
            if render:
                time.sleep(1.0 / env.metadata["render_fps"])

        rows.append({
            "episode": episode,
            "reward": total_reward,
            "length": steps,
            "score": info["score"],
            "stage": info["stage"],
            "kills": info["kills"],
            "lives": info["lives"],
            "terminated": terminated,
        })
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Score = {info['score']}, Stage = {info['stage']}")

    env.close()

    rewards = np.array([r["reward"] for r in rows])
    lengths = np.array([r["length"] for r in rows])
    scores = np.array([r["score"] for r in rows])

    print("\n" + "="*50)
    print(f"Random Policy Results ({n_episodes} episodes):")
    print(f"Mean Reward: {rewards.mean():.2f} ± {rewards.std():.2f}")
    print(f"Mean Episode Length: {lengths.mean():.1f}")
    print(f"Mean Score: {scores.mean():.1f} (max {scores.max()})")
    print("="*50)

    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            writer.writerows(rows)
        print(f"Metrics written to {csv_path}")

    return {
        "mean_reward": float(rewards.mean()),
        "std_reward": float(rewards.std()),
        "mean_length": float(lengths.mean()),
        "mean_score": float(scores.mean()),
        "episodes": rows,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate a random policy on NovaStrike")
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render episodes in an Arcade window",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write per-episode metrics to this CSV file",
    )

    args = parser.parse_args()

    evaluate_random(
        n_episodes=args.n_episodes,
        seed=args.seed,
        render=args.render,
        csv_path=args.csv,
    )


if __name__ == "__main__":
    main()
