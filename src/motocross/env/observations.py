# src/motocross/env/observations.py
from __future__ import annotations
from typing import Iterable, List, Tuple
import numpy as np

from ..game.config import TRACK_WIDTH, VEHICLE_W, MAX_SPEED, TURBO_SPEED_FACTOR, JUMP_FORCE
from ..game.simulation import ObstacleView, Snapshot

# How many upcoming pieces the vector describes
LOOKAHEAD_SLOTS: int = 3
# Tallest piece on the track (fence), used to scale heights
MAX_OBSTACLE_H: float = 70.0
OBS_SIZE: int = 5 + 3 * LOOKAHEAD_SLOTS


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float, vy_max: float = abs(JUMP_FORCE)) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max


def _upcoming(obstacles: Iterable[ObstacleView], front_x: float, n: int) -> List[ObstacleView]:
    """Pieces not yet cleared whose right edge is still ahead of the bike's rear."""
    ahead = [o for o in obstacles if not o.passed and o.x + o.width >= front_x - VEHICLE_W]
    ahead.sort(key=lambda o: o.x)
    return ahead[:n]


def build_observation(snapshot: Snapshot, slots: int = LOOKAHEAD_SLOTS) -> np.ndarray:
    """
    Returns a fixed (5 + 3*slots,) float32 vector:
      [ speed_norm, vy_norm, jumping, crouching, turbo,
        dist@1, height@1, ramp@1,
        dist@2, height@2, ramp@2,
        dist@3, height@3, ramp@3 ]
    - speed_norm in [0,1] (fraction of turbo top speed)
    - vy_norm    in [-1,1]
    - dist: gap from the bike's front to the piece, / TRACK_WIDTH, clipped to [0,1]
      sentinel 1.0 when the slot is empty
    - height: piece height / tallest piece; 0.0 when empty
    - ramp: 1.0 for ramps
    """
    v = snapshot.vehicle
    feats: List[float] = [
        _clamp01(v.speed / (MAX_SPEED * TURBO_SPEED_FACTOR)),
        _norm_vy(v.vy),
        float(v.jumping),
        float(v.crouching),
        float(v.turbo_active),
    ]

    front_x = v.x + VEHICLE_W
    ahead = _upcoming(snapshot.obstacles, front_x, slots)
    for i in range(slots):
        if i < len(ahead):
            o = ahead[i]
            feats.extend([
                _clamp01((o.x - front_x) / float(TRACK_WIDTH)),
                _clamp01(o.height / MAX_OBSTACLE_H),
                1.0 if o.is_ramp else 0.0,
            ])
        else:
            feats.extend([1.0, 0.0, 0.0])

    return np.asarray(feats, dtype=np.float32)


def observation_bounds(slots: int = LOOKAHEAD_SLOTS) -> Tuple[np.ndarray, np.ndarray]:
    low = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0] * slots, dtype=np.float32)
    high = np.array([1.0] * (5 + 3 * slots), dtype=np.float32)
    return low, high
