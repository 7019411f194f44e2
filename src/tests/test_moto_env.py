# src/tests/test_moto_env.py
"""
Quick tests for MotoEnv (Gymnasium environment).

Usage (from repo root):
  pytest src/tests/test_moto_env.py
  python -m tests.test_moto_env --render          # with src/ on PYTHONPATH
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from motocross.env.moto_env import MotoEnv


def run_api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = MotoEnv(frame_skip=frame_skip)
    try:
        check_env(env, warn=True)
    finally:
        env.close()


def run_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: obs in space, reward type, proper terminations."""
    env = MotoEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        env.action_space.seed(seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["score"] == 0

        for t in range(steps):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            assert set(info) >= {"distance_px", "score", "difficulty", "events", "death_cause"}
            if term:
                assert info["death_cause"] is not None
                assert r <= -1.0 + info["score"] / 100.0
            if term or trunc:
                break
    finally:
        env.close()


def rollout(seed: int, actions: np.ndarray, frame_skip: int = 4) -> List[Tuple[np.ndarray, float, bool, bool]]:
    env = MotoEnv(frame_skip=frame_skip)
    traj: List[Tuple[np.ndarray, float, bool, bool]] = []
    try:
        env.reset(seed=seed)
        for a in actions:
            obs, r, term, trunc, _ = env.step(a)
            traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
            if term or trunc:
                break
    finally:
        env.close()
    return traj


def run_determinism(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    rng = np.random.RandomState(42)
    actions = rng.randint(0, 2, size=(steps, 5)).astype(np.int8)

    t1 = rollout(seed, actions, frame_skip)
    t2 = rollout(seed, actions, frame_skip)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.allclose(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


# ---- pytest entry points ----

def test_api_check():
    run_api_check()


def test_smoke_rollout():
    run_smoke()


def test_determinism():
    run_determinism()


def test_time_limit_truncates():
    env = MotoEnv(frame_skip=4, time_limit_seconds=1.0)
    try:
        env.reset(seed=0)
        noop = np.zeros(5, dtype=np.int8)
        for step in range(1, 16):
            _, _, term, trunc, _ = env.step(noop)
            assert not term
            assert trunc == (step == 15)
    finally:
        env.close()


def test_rgb_array_render():
    env = MotoEnv(render_mode="rgb_array")
    try:
        env.reset(seed=1)
        frame = env.render()
        assert frame.shape == (400, 800, 3)
    finally:
        env.close()


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and hold the throttle so you can visually verify behavior."""
    env = MotoEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _, _, term, trunc, _ = env.step(np.array([0, 1, 0, 0, 0], dtype=np.int8))
            if term or trunc:
                break
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    args = ap.parse_args()

    try:
        run_api_check(frame_skip=args.frame_skip)
        print("✓ API check ok")
        run_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Smoke test ok")
        run_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Determinism ok")
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
