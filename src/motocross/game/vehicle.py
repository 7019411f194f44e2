# src/motocross/game/vehicle.py
from __future__ import annotations
import math
import logging
import pygame
from dataclasses import dataclass
from typing import List, Optional
from .config import (
    VEHICLE_X, VEHICLE_W, VEHICLE_H, GROUND_Y, MAX_SPEED, TURBO_SPEED_FACTOR,
    ACCELERATION, DECELERATION, GRAVITY, JUMP_FORCE, SUSPENSION_LANDING,
    SUSPENSION_RECOVERY, WHEEL_SPIN, TURBO_MASTER_MS, HITBOX_MARGIN_X,
    CROUCH_HEIGHT_FACTOR,
)
from .events import EventKind, FrameEvent

logger = logging.getLogger(__name__)

GROUNDED_Y = float(GROUND_Y - VEHICLE_H)
TOP_SPEED = MAX_SPEED * TURBO_SPEED_FACTOR


@dataclass
class Controls:
    """Control snapshot for one tick (what the keyboard layer hands us)."""
    left: bool = False
    right: bool = False
    jump: bool = False
    crouch: bool = False
    turbo: bool = False


@dataclass
class Vehicle:
    """
    Motocross bike, fixed x (the track scrolls left under it).
    - y is the TOP of the bike, screen coords (grows downward)
    - speed is px/tick in [0, MAX_SPEED * 1.5]
    - vy only matters while jumping
    """
    x: float = float(VEHICLE_X)
    y: float = GROUNDED_Y
    speed: float = 0.0
    vy: float = 0.0
    jumping: bool = False
    crouching: bool = False
    turbo_active: bool = False
    jump_initiated: bool = False            # a jump() happened since the last landing
    turbo_start_ms: Optional[float] = None
    wheel_rotation: float = 0.0             # cosmetic, [0, 2pi)
    suspension: float = 0.0                 # cosmetic landing bounce
    enabled: bool = True                    # False while paused / game over

    @property
    def grounded(self) -> bool:
        return not self.jumping

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), VEHICLE_W, VEHICLE_H)

    def hitbox(self) -> pygame.Rect:
        """Collision box: side skin removed, lower and shorter when crouching."""
        r = self.rect
        r.inflate_ip(-2 * HITBOX_MARGIN_X, 0)
        if self.crouching:
            r.height = int(VEHICLE_H * CROUCH_HEIGHT_FACTOR)
            r.y = int(self.y + VEHICLE_H * (1.0 - CROUCH_HEIGHT_FACTOR))
        return r

    def reset(self):
        self.x = float(VEHICLE_X)
        self.y = GROUNDED_Y
        self.speed = 0.0
        self.vy = 0.0
        self.jumping = False
        self.crouching = False
        self.turbo_active = False
        self.jump_initiated = False
        self.turbo_start_ms = None
        self.wheel_rotation = 0.0
        self.suspension = 0.0
        self.enabled = True

    # --- controls ---

    def jump(self) -> bool:
        """Jump only if grounded, standing and enabled. Returns True if performed."""
        if not self.enabled or self.jumping or self.crouching:
            return False
        self.jumping = True
        self.jump_initiated = True
        self.vy = JUMP_FORCE
        return True

    def force_jump(self) -> bool:
        """Ramp launch: like jump() but a crouching rider is stood up first."""
        if not self.enabled or self.jumping:
            return False
        self.crouching = False
        return self.jump()

    def crouch(self) -> bool:
        if not self.enabled or self.jumping:
            return False
        self.crouching = True
        return True

    def stand(self) -> bool:
        if not self.enabled or self.jumping:
            return False
        self.crouching = False
        return True

    def activate_turbo(self, now_ms: float) -> bool:
        if not self.enabled or self.turbo_active:
            return False
        self.turbo_active = True
        self.turbo_start_ms = now_ms
        return True

    def deactivate_turbo(self, now_ms: float) -> List[FrameEvent]:
        """Release turbo; a hold longer than TURBO_MASTER_MS yields turboMastered."""
        events: List[FrameEvent] = []
        if not self.enabled or not self.turbo_active:
            return events
        if self.turbo_start_ms is not None:
            duration = now_ms - self.turbo_start_ms
            if duration > TURBO_MASTER_MS:
                events.append(FrameEvent(
                    EventKind.TURBO_MASTERED, now_ms,
                    data={"duration": duration, "speed": self.speed},
                ))
                logger.debug("turbo held %.0f ms at speed %.2f", duration, self.speed)
        self.turbo_active = False
        self.turbo_start_ms = None
        return events

    # --- physics ---

    def update(self, controls: Controls, now_ms: float = 0.0) -> List[FrameEvent]:
        """Advance one tick: gravity/landing, then speed, then wheel phase."""
        events: List[FrameEvent] = []
        if not self.enabled:
            return events

        if self.jumping:
            self.vy += GRAVITY
            self.y += self.vy
            if self.y >= GROUNDED_Y:
                self.y = GROUNDED_Y
                self.jumping = False
                self.vy = 0.0
                self.suspension = SUSPENSION_LANDING
                if self.jump_initiated:
                    self.jump_initiated = False
                    events.append(FrameEvent(EventKind.LANDED, now_ms))
        elif self.suspension > 0.0:
            self.suspension = max(0.0, self.suspension - SUSPENSION_RECOVERY)

        # asymmetric rates: turbo and braking are twice the base acceleration
        if self.turbo_active and self.speed < TOP_SPEED:
            self.speed += ACCELERATION * 2
        elif controls.right and self.speed < MAX_SPEED:
            self.speed += ACCELERATION
        elif controls.left and self.speed > 0.0:
            self.speed -= ACCELERATION * 2
        elif self.speed > 0.0:
            self.speed -= DECELERATION

        self.speed = max(0.0, min(self.speed, TOP_SPEED))

        self.wheel_rotation = (self.wheel_rotation + self.speed * WHEEL_SPIN) % (2 * math.pi)
        return events
