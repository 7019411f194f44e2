# src/motocross/game/simulation.py
"""
Simulation context: owns one run (bike, track, resolver, combo engine) and
advances it one frame at a time.

    sim = Simulation(seed=123)
    frame = sim.tick(16.7, Controls(right=True))
    snap = sim.snapshot()

Every piece of mutable state lives on the instance, so several runs can be
simulated side by side (tests, headless agents).
"""
from __future__ import annotations
import math
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
from .config import MAX_TICK_MS, DIFFICULTY_STEP_PX, DIFFICULTY_STEP, DISTANCE_SCORE_DIV
from .collision import CollisionResolver
from .combo import ComboEngine, ComboView
from .events import EventKind, FrameEvent, FrameEvents
from .track import TrackGenerator
from .vehicle import Controls, Vehicle

logger = logging.getLogger(__name__)


class SimState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def difficulty_for(distance: float) -> float:
    """+0.2 every 5000 px travelled, starting at 1."""
    return 1.0 + math.floor(distance / DIFFICULTY_STEP_PX) * DIFFICULTY_STEP


@dataclass(frozen=True)
class VehicleView:
    x: float
    y: float
    speed: float
    vy: float
    jumping: bool
    crouching: bool
    turbo_active: bool
    wheel_rotation: float
    suspension: float


@dataclass(frozen=True)
class ObstacleView:
    kind: str
    x: float
    y: float
    width: int
    height: int
    passed: bool
    is_ramp: bool


@dataclass(frozen=True)
class Snapshot:
    vehicle: VehicleView
    obstacles: Tuple[ObstacleView, ...]
    combo: ComboView
    score: int
    difficulty: float
    distance: float
    time_ms: float
    state: SimState


class Simulation:
    def __init__(self, seed: int | None = None):
        self.vehicle = Vehicle()
        self.track = TrackGenerator(seed)
        self.resolver = CollisionResolver()
        self.combo = ComboEngine()
        self.state = SimState.RUNNING
        self.time_ms = 0.0
        self.distance = 0.0
        self.difficulty = 1.0

    @property
    def seed(self) -> int:
        return self.track.seed

    @property
    def alive(self) -> bool:
        return self.state is not SimState.GAME_OVER

    # --- lifecycle ---

    def reset(self, seed: int | None = None):
        """Back to run-start values. seed=None draws a new track seed."""
        self.vehicle.reset()
        self.track.reset(seed)
        self.combo.clear()
        self.state = SimState.RUNNING
        self.time_ms = 0.0
        self.distance = 0.0
        self.difficulty = 1.0
        logger.info("run reset (seed=%s)", self.track.seed)

    def pause(self) -> bool:
        if self.state is not SimState.RUNNING:
            return False
        self.state = SimState.PAUSED
        self.vehicle.enabled = False
        return True

    def resume(self) -> bool:
        if self.state is not SimState.PAUSED:
            return False
        self.state = SimState.RUNNING
        self.vehicle.enabled = True
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def _game_over(self):
        self.state = SimState.GAME_OVER
        self.vehicle.enabled = False
        self.combo.reset()
        logger.info("game over: score=%d distance=%.0f t=%.0fms",
                    self.combo.score, self.distance, self.time_ms)

    # --- frame ---

    def _apply_controls(self, controls: Controls, now_ms: float) -> List[FrameEvent]:
        v = self.vehicle
        if controls.jump:
            v.jump()
        if controls.crouch:
            v.crouch()
        elif v.crouching:
            v.stand()
        if controls.turbo and not v.turbo_active:
            v.activate_turbo(now_ms)
        elif not controls.turbo and v.turbo_active:
            return v.deactivate_turbo(now_ms)
        return []

    def tick(self, delta_ms: float, controls: Optional[Controls] = None) -> FrameEvents:
        """
        Advance one frame. Returns the ordered events of the frame; empty when
        paused or after game over (those frames do not advance the run clock).
        """
        frame = FrameEvents()
        if self.state is not SimState.RUNNING:
            return frame
        if controls is None:
            controls = Controls()

        dt = min(max(0.0, float(delta_ms)), MAX_TICK_MS)
        self.time_ms += dt
        now = self.time_ms
        v = self.vehicle

        events: List[FrameEvent] = self._apply_controls(controls, now)

        # 1) bike physics
        events += v.update(controls, now)
        self.distance += v.speed
        self.difficulty = difficulty_for(self.distance)

        # 2) track: spawn, scroll, dodges
        self.track.generate(now, v.speed, self.difficulty)
        events += self.track.update(v.speed, v.x, now)

        # 3) collisions
        events += self.resolver.check(v, self.track.obstacles, now)
        crashed = any(e.kind == EventKind.CRASH for e in events)

        # 4) scoring
        events += self.combo.consume(events, now)
        self.combo.credit_distance(int(self.distance // DISTANCE_SCORE_DIV))
        self.combo.update(now)

        if crashed:
            self._game_over()

        frame.extend(events)
        return frame

    def snapshot(self) -> Snapshot:
        v = self.vehicle
        return Snapshot(
            vehicle=VehicleView(
                x=v.x, y=v.y, speed=v.speed, vy=v.vy, jumping=v.jumping,
                crouching=v.crouching, turbo_active=v.turbo_active,
                wheel_rotation=v.wheel_rotation, suspension=v.suspension,
            ),
            obstacles=tuple(
                ObstacleView(kind=o.kind.tag, x=o.x, y=o.y, width=o.width, height=o.height,
                             passed=o.passed, is_ramp=o.kind.is_ramp)
                for o in self.track.obstacles
            ),
            combo=self.combo.view(),
            score=self.combo.score,
            difficulty=self.difficulty,
            distance=self.distance,
            time_ms=self.time_ms,
            state=self.state,
        )
