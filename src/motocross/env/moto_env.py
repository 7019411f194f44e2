# src/motocross/env/moto_env.py
from __future__ import annotations
from typing import Optional, Dict, Any, List
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import WIDTH, HEIGHT, FPS
from ..game.events import EventKind
from ..game.render import draw_snapshot
from ..game.simulation import Simulation
from ..game.vehicle import Controls
from .observations import build_observation, observation_bounds


class MotoEnv(gym.Env):
    """
    Motocross runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal, fixed 1000/60 ms per tick).
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Action: MultiBinary(5) = [left, right, jump, crouch, turbo], held for the step.
    - Observation: shape (14,), float32 (see observations.build_observation).
    - Reward: score gained during the step / 100, and -1 on crash.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = FPS
        self.dt_ms = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.MultiBinary(5)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Track seed follows the env's RNG so reset(seed=s) is reproducible
        track_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.sim = Simulation(track_seed)

        self.timestep = 0
        self.death_cause = None
        self.current_seed = self.sim.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "distance_px": 0.0, "score": 0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int8)), f"Invalid action {action}"
        assert self.sim is not None

        a = [bool(x) for x in np.asarray(action).ravel()]
        controls = Controls(left=a[0], right=a[1], jump=a[2], crouch=a[3], turbo=a[4])

        score_before = self.sim.combo.score
        kinds: List[str] = []
        crashed = False

        for _ in range(self.frame_skip):
            frame = self.sim.tick(self.dt_ms, controls)
            kinds.extend(e.kind.value for e in frame)
            crash = frame.of_kind(EventKind.CRASH)
            if crash:
                crashed = True
                self.death_cause = crash[0].data.get("obstacle")
                break

        reward = (self.sim.combo.score - score_before) / 100.0
        if crashed:
            reward -= 1.0

        self.timestep += 1
        terminated = not self.sim.alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "distance_px": self.sim.distance,
            "score": self.sim.combo.score,
            "difficulty": self.sim.difficulty,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "events": kinds,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Motocross — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        draw_snapshot(self.screen, self.sim.snapshot())

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
