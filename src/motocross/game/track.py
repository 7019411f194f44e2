# src/motocross/game/track.py
from __future__ import annotations
import random
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import pygame
from .config import (
    TRACK_WIDTH, GROUND_Y, MAX_SPEED, BASE_SPAWN_INTERVAL_MS,
    OBSTACLE_SPAWN_P, RAMP_SPAWN_P, RAMP_SPACING_MULT,
    PATTERN_SPAWN_P, PATTERN_SPACING_MULT, PATTERN_MIN_DIFFICULTY,
    CLEARANCE_OBSTACLE_PX, CLEARANCE_RAMP_PX, CLEARANCE_PATTERN_PX,
)
from .events import EventKind, FrameEvent

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    """
    Closed set of track pieces. Each member carries its static size and how
    collision treats it:
      (tag, width, height, inset_x, shrink_w, shrink_h, jump_over, ramp)
    - inset_x/shrink_*: hitbox trimmed to the irregular silhouette
    - jump_over     : ignored while the bike is airborne
    - ramp          : sloped, boards the bike instead of blocking it
    """
    ROCK = ("rock", 40, 30, 5, 10, 5, False, False)
    LOG = ("log", 35, 25, 5, 10, 5, False, False)
    WALL = ("wall", 60, 40, 0, 0, 0, False, False)
    PUDDLE = ("puddle", 55, 35, 0, 0, 0, True, False)
    BIGROCK = ("bigrock", 80, 50, 0, 0, 0, False, False)
    HIGHWALL = ("highwall", 70, 45, 0, 0, 0, False, False)
    MUD = ("mud", 120, 30, 0, 0, 0, False, False)
    SAND = ("sand", 110, 25, 0, 0, 0, False, False)
    FENCE = ("fence", 50, 70, 0, 0, 0, False, False)
    SIGN = ("sign", 45, 65, 0, 0, 0, False, False)
    RAMP = ("ramp", 70, 30, 0, 0, 0, False, True)

    def __init__(self, tag, width, height, inset_x, shrink_w, shrink_h, jump_over, ramp):
        self.tag = tag
        self.width = width
        self.height = height
        self.inset_x = inset_x
        self.shrink_w = shrink_w
        self.shrink_h = shrink_h
        self.jump_over = jump_over
        self.is_ramp = ramp


# Kinds the plain spawner picks from (ramps have their own path)
BLOCKING_KINDS: Tuple[ObstacleKind, ...] = tuple(k for k in ObstacleKind if not k.is_ramp)


@dataclass
class Obstacle:
    kind: ObstacleKind
    x: float
    passed: bool = False   # set once, when the bike has cleared it

    @property
    def width(self) -> int:
        return self.kind.width

    @property
    def height(self) -> int:
        return self.kind.height

    @property
    def y(self) -> float:
        """Top edge; every piece rests on the ground line."""
        return float(GROUND_Y - self.kind.height)

    @property
    def right(self) -> float:
        return self.x + self.kind.width

    def collision_rect(self) -> pygame.Rect:
        k = self.kind
        return pygame.Rect(int(self.x) + k.inset_x, int(self.y),
                           k.width - k.shrink_w, k.height - k.shrink_h)

    def slope_y_at(self, x: float) -> float:
        """Ramp surface: straight line from (x, bottom) up to (x+w, top)."""
        m = -self.height / self.width
        b = self.y - m * (self.x + self.width)
        return m * x + b


# --- Patterns (offsets from the spawn edge) ---
PATTERNS: Tuple[Tuple[Tuple[ObstacleKind, int], ...], ...] = (
    # ramp then a tall fence to clear
    ((ObstacleKind.RAMP, 0), (ObstacleKind.FENCE, 150)),
    # three low rocks in a row
    ((ObstacleKind.ROCK, 0), (ObstacleKind.ROCK, 100), (ObstacleKind.ROCK, 200)),
    # alternating types
    ((ObstacleKind.ROCK, 0), (ObstacleKind.LOG, 120), (ObstacleKind.PUDDLE, 240)),
)


class TrackGenerator:
    """
    Endless ribbon of obstacles and ramps scrolling left under the bike.
    Spawning is paced in run time (ms) and scaled by speed and difficulty.
    """
    def __init__(self, seed: int | None = None, rng: Optional[random.Random] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng_injected = rng is not None
        self.rng = rng if rng is not None else random.Random(seed)
        self.obstacles: List[Obstacle] = []
        self.last_spawn_ms = 0.0

    def reset(self, seed: int | None = None):
        """
        Empty track, spawn clock back to 0.
        - seed given: fresh Random(seed)
        - seed None : an injected rng is kept as is, otherwise a new random seed
        """
        if seed is not None:
            self.seed = seed
            self.rng = random.Random(seed)
            self.rng_injected = False
        elif not self.rng_injected:
            self.seed = random.randrange(0, 2**32 - 1)
            self.rng = random.Random(self.seed)
        self.obstacles = []
        self.last_spawn_ms = 0.0

    # --- spawning ---

    def _edge_clear(self, clearance: int) -> bool:
        """True if nothing sits within `clearance` px of the spawn edge."""
        limit = TRACK_WIDTH - clearance
        return all(o.x <= limit for o in self.obstacles)

    def _spawn(self, pieces: Sequence[Tuple[ObstacleKind, int]], now_ms: float) -> List[Obstacle]:
        spawned = [Obstacle(kind=kind, x=float(TRACK_WIDTH + dx)) for kind, dx in pieces]
        self.obstacles.extend(spawned)
        self.obstacles.sort(key=lambda o: o.x)
        self.last_spawn_ms = now_ms
        return spawned

    def generate(self, now_ms: float, speed: float, difficulty: float = 1.0) -> List[Obstacle]:
        """
        Roll the three spawn paths for this tick. Returns what was spawned.
        All paths share one `elapsed` read so a tick can spawn at most one
        piece per path, and the edge-clearance checks keep them from stacking.
        """
        elapsed = now_ms - self.last_spawn_ms
        speed_factor = speed / MAX_SPEED
        min_interval = BASE_SPAWN_INTERVAL_MS * (1 - speed_factor * 0.5)
        spawned: List[Obstacle] = []

        # 1) plain obstacle
        if elapsed > min_interval and self.rng.random() < OBSTACLE_SPAWN_P * speed_factor * difficulty:
            kind = self.rng.choice(BLOCKING_KINDS)
            if self._edge_clear(CLEARANCE_OBSTACLE_PX):
                spawned += self._spawn(((kind, 0),), now_ms)
                logger.debug("spawn %s at t=%.0f", kind.tag, now_ms)

        # 2) ramp, independent and rarer
        if elapsed > min_interval * RAMP_SPACING_MULT and self.rng.random() < RAMP_SPAWN_P * speed_factor:
            if self._edge_clear(CLEARANCE_RAMP_PX):
                spawned += self._spawn(((ObstacleKind.RAMP, 0),), now_ms)
                logger.debug("spawn ramp at t=%.0f", now_ms)

        # 3) multi-piece pattern once the run gets harder
        if (difficulty > PATTERN_MIN_DIFFICULTY
                and elapsed > min_interval * PATTERN_SPACING_MULT
                and self.rng.random() < PATTERN_SPAWN_P):
            spawned += self._generate_pattern(now_ms)

        return spawned

    def _generate_pattern(self, now_ms: float) -> List[Obstacle]:
        if not self._edge_clear(CLEARANCE_PATTERN_PX):
            return []
        idx = self.rng.randrange(len(PATTERNS))
        pieces = self._spawn(PATTERNS[idx], now_ms)
        logger.debug("spawn pattern %d (%s) at t=%.0f", idx,
                     ",".join(k.tag for k, _ in PATTERNS[idx]), now_ms)
        return pieces

    # --- scrolling ---

    def update(self, speed: float, vehicle_x: float, now_ms: float = 0.0) -> List[FrameEvent]:
        """
        Scroll everything left by the bike's speed, drop what left the screen,
        and mark pieces the bike has cleared. Each non-ramp piece yields
        exactly one dodge event, on the tick its `passed` flag flips.
        """
        events: List[FrameEvent] = []
        for o in self.obstacles:
            o.x -= speed

        self.obstacles = [o for o in self.obstacles if o.right >= 0]

        for o in self.obstacles:
            if not o.passed and o.right < vehicle_x:
                o.passed = True
                if not o.kind.is_ramp:
                    events.append(FrameEvent(
                        EventKind.DODGED, now_ms,
                        data={"obstacle": o.kind.tag, "speed": speed},
                    ))
        return events
