# src/autopilot/run.py
from __future__ import annotations
import argparse
import csv
import logging
import os
from typing import Optional, Sequence, Tuple

from autopilot.env import SnakeEnv
from autopilot.policies import POLICIES

logger = logging.getLogger(__name__)


# --------------------------
# Episode loop
# --------------------------
def run_episode(env: SnakeEnv, policy: str, epsilon: float = 0.1,
                max_steps: int = 10_000) -> Tuple[int, float, int]:
    """
    Run a single episode with one of the fixed policies:
    - random
    - greedy
    - eps-greedy

    Returns:
        steps: number of steps taken
        total: total return (sum of rewards)
        score: final game score
    """
    try:
        choose = POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown policy: {policy}") from None

    obs = env.reset()
    total = 0.0
    steps = 0
    score = 0

    while True:
        a = choose(obs, env, epsilon)
        obs, r, done, info = env.step(a)
        total += r
        steps += 1
        score = info.get("score", score)

        if done or steps >= max_steps:
            break

    return steps, total, score


def run_episodes(env: SnakeEnv, policy: str, episodes: int, epsilon: float,
                 out_csv: Optional[str] = None):
    rows = [("ep", "steps", "return", "score")]
    print("ep,steps,return,score")
    for ep in range(1, episodes + 1):
        steps, ret, score = run_episode(env, policy, epsilon)
        print(f"{ep},{steps},{ret:.3f},{score}")
        rows.append((ep, steps, float(f"{ret:.6f}"), score))

    if out_csv:
        with open(out_csv, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(rows)
        logger.info("Saved results → %s", out_csv)
    return rows


# --------------------------
# Main
# --------------------------
def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Run headless snake episodes with a fixed policy.")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="greedy", choices=sorted(POLICIES))
    parser.add_argument("--epsilon", type=float, default=0.1, help="epsilon for eps-greedy")
    parser.add_argument("--board", type=int, nargs=2, default=(20, 20), metavar=("W", "H"),
                        help="board size in cells")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--outdir", type=str, default="data/runs", help="CSV is saved here")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"autopilot_{args.policy}.csv")

    env = SnakeEnv(board_w=args.board[0], board_h=args.board[1], seed_value=args.seed)
    logger.info("Running %d episode(s) with policy=%s ε=%s", args.episodes, args.policy, args.epsilon)
    return run_episodes(env, args.policy, args.episodes, args.epsilon, out_csv)


if __name__ == "__main__":
    main()
