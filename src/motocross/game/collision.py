# src/motocross/game/collision.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Iterable, List, Tuple
from .config import (
    VEHICLE_W, VEHICLE_H, RAMP_TOLERANCE_PX, FRONT_WHEEL_FRAC, REAR_WHEEL_FRAC,
)
from .events import EventKind, FrameEvent
from .track import Obstacle
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class Contact(Enum):
    NONE = "none"
    RAMP = "ramp"      # a wheel sits on the ramp surface
    CRASH = "crash"


def wheel_points(vehicle: Vehicle) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """(front, rear) wheel contact points, both on the bottom edge of the bike."""
    bottom = vehicle.y + VEHICLE_H
    front = (vehicle.x + VEHICLE_W * FRONT_WHEEL_FRAC, bottom)
    rear = (vehicle.x + VEHICLE_W * REAR_WHEEL_FRAC, bottom)
    return front, rear


def wheel_on_ramp(ramp: Obstacle, wx: float, wy: float,
                  tolerance: float = RAMP_TOLERANCE_PX) -> bool:
    """Wheel inside the ramp's horizontal span and within `tolerance` of its slope."""
    if not (ramp.x <= wx <= ramp.x + ramp.width):
        return False
    return abs(wy - ramp.slope_y_at(wx)) < tolerance


def on_ramp(vehicle: Vehicle, ramp: Obstacle, tolerance: float = RAMP_TOLERANCE_PX) -> bool:
    return any(wheel_on_ramp(ramp, wx, wy, tolerance) for wx, wy in wheel_points(vehicle))


class CollisionResolver:
    """
    Vehicle vs track pieces, once per tick.
    - rectangular pieces: inset AABB test, overlap = crash
    - ramps: sloped line, a wheel on it launches the bike (never a crash)
    """
    def __init__(self, ramp_tolerance: float = RAMP_TOLERANCE_PX):
        self.ramp_tolerance = ramp_tolerance

    def classify(self, vehicle: Vehicle, obstacle: Obstacle) -> Contact:
        kind = obstacle.kind
        if kind.is_ramp:
            return Contact.RAMP if on_ramp(vehicle, obstacle, self.ramp_tolerance) else Contact.NONE
        # low pieces (puddle) are cleared by any jump
        if kind.jump_over and vehicle.jumping:
            return Contact.NONE
        if vehicle.hitbox().colliderect(obstacle.collision_rect()):
            return Contact.CRASH
        return Contact.NONE

    def check(self, vehicle: Vehicle, obstacles: Iterable[Obstacle], now_ms: float = 0.0) -> List[FrameEvent]:
        """
        Resolve every piece the bike has not cleared yet. Stops at the first
        crash; ramp contacts while grounded force a jump and report rampJump.
        """
        events: List[FrameEvent] = []
        for o in obstacles:
            if o.passed:
                continue
            contact = self.classify(vehicle, o)
            if contact is Contact.RAMP:
                if vehicle.grounded and vehicle.force_jump():
                    events.append(FrameEvent(EventKind.RAMP_JUMP, now_ms, data={"obstacle": o.kind.tag}))
            elif contact is Contact.CRASH:
                logger.info("crash into %s at x=%.1f speed=%.2f", o.kind.tag, o.x, vehicle.speed)
                events.append(FrameEvent(
                    EventKind.CRASH, now_ms,
                    data={"obstacle": o.kind.tag, "speed": vehicle.speed},
                ))
                break
        return events
