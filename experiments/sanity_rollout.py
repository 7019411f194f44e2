# /experiments/sanity_rollout.py
"""
Sanity rollouts for MotoEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis (one summary row per episode)

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds, chatty logging:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --log-level INFO

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
import logging
from collections import Counter
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from motocross.env.moto_env import MotoEnv
from motocross.game.config import TRACK_WIDTH, MAX_SPEED, TURBO_SPEED_FACTOR

logger = logging.getLogger("sanity_rollout")


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> np.ndarray:
        a = rng.randint(0, 2, size=5).astype(np.int8)
        a[0] = 0          # never brake, it only makes rollouts boring
        return a
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule:
      - always hold the throttle,
      - jump when the nearest blocking piece is within ~7 ticks of travel,
      - leave ramps alone (they launch the bike by themselves).
    """
    top_speed = MAX_SPEED * TURBO_SPEED_FACTOR
    def act(obs: np.ndarray) -> np.ndarray:
        speed = float(obs[0]) * top_speed
        jumping = obs[2] > 0.5
        dist_px = float(obs[5]) * TRACK_WIDTH
        is_ramp = obs[7] > 0.5
        jump = (not jumping) and (not is_ramp) and obs[6] > 0.0 and dist_px < speed * 7
        return np.array([0, 1, int(jump), 0, 0], dtype=np.int8)
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int) -> Tuple[int, float, float, int, bool, bool, Optional[str], Counter]:
    """
    Returns: (ep_len, ret_sum, distance_px, score, terminated, truncated, death_cause, event_counts)
    """
    env = MotoEnv(frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    ret_sum = 0.0
    ep_len = 0
    events: Counter = Counter()
    term = trunc = False
    info: dict = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            obs, r, term, trunc, info = env.step(policy(obs))
            ret_sum += float(r)
            ep_len += 1
            events.update(info.get("events", []))
            if term or trunc:
                break
    finally:
        env.close()

    return (ep_len, ret_sum, float(info.get("distance_px", 0.0)), int(info.get("score", 0)),
            bool(term), bool(trunc), info.get("death_cause"), events)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim frames per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv")
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(name)s %(levelname)s %(message)s")

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "distance_px", "score",
        "terminated", "truncated", "death_cause",
        "dodges", "ramp_jumps", "landings", "special_combos",
    ]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, dist, score, terminated, truncated, cause, ev = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
            )
            row = [
                policy_name, seed, args.frame_skip,
                ep_len, f"{ret_sum:.2f}", f"{dist:.1f}", score,
                int(terminated), int(truncated), (cause or ""),
                ev["dodged"], ev["rampJump"], ev["landed"], ev["specialCombo"],
            ]
            write_episode_row(episodes_csv, header, row)
            print(f"[{policy_name}] seed={seed}  len={ep_len}  dist={dist:.1f}  score={score}  "
                  f"term={terminated} trunc={truncated}  cause={cause}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
