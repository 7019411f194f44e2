# src/tests/test_vehicle.py
"""
Unit tests for the bike physics and controls.

Usage (from repo root):
  pytest src/tests/test_vehicle.py
"""
from __future__ import annotations
import math

import pygame

from motocross.game.config import MAX_SPEED, ACCELERATION, DECELERATION, JUMP_FORCE
from motocross.game.events import EventKind
from motocross.game.vehicle import Controls, Vehicle, GROUNDED_Y, TOP_SPEED


def ride_until_landed(v: Vehicle, max_ticks: int = 200):
    events = []
    for _ in range(max_ticks):
        events += v.update(Controls())
        if not v.jumping:
            break
    return events


def test_jump_only_from_ground():
    v = Vehicle()
    assert v.jump()
    assert v.jumping and v.vy == JUMP_FORCE
    assert not v.jump(), "second jump while airborne must be a no-op"


def test_landing_fires_once_and_clamps_to_ground():
    v = Vehicle()
    v.jump()
    events = ride_until_landed(v)
    assert [e.kind for e in events] == [EventKind.LANDED]
    assert v.y == GROUNDED_Y and v.vy == 0.0
    assert v.suspension > 0.0

    # staying on the ground never lands again
    more = []
    for _ in range(30):
        more += v.update(Controls())
    assert more == []
    assert v.suspension == 0.0


def test_crouch_blocks_jump_and_only_toggles_on_ground():
    v = Vehicle()
    assert v.crouch()
    assert not v.jump()
    assert v.stand()
    assert v.jump()
    assert not v.crouch(), "no crouching mid-air"
    assert not v.crouching


def test_force_jump_stands_rider_up():
    v = Vehicle()
    v.crouch()
    assert v.force_jump()
    assert v.jumping and not v.crouching


def test_speed_stays_in_bounds():
    v = Vehicle()
    v.activate_turbo(0.0)
    for _ in range(100):
        v.update(Controls())
        assert 0.0 <= v.speed <= TOP_SPEED
    # at the cap the bike alternates between the cap and one roll-off step
    assert v.speed >= TOP_SPEED - DECELERATION - 1e-9

    v.deactivate_turbo(100.0)
    for _ in range(100):
        v.update(Controls(left=True))
        assert 0.0 <= v.speed <= TOP_SPEED
    assert v.speed == 0.0


def test_throttle_caps_near_max_speed():
    v = Vehicle()
    for _ in range(200):
        v.update(Controls(right=True))
    assert MAX_SPEED - DECELERATION - 1e-9 <= v.speed < MAX_SPEED + ACCELERATION


def test_passive_deceleration():
    v = Vehicle(speed=5.0)
    v.update(Controls())
    assert math.isclose(v.speed, 4.85)


def test_turbo_mastered_needs_more_than_two_seconds():
    v = Vehicle(speed=20.0)
    v.activate_turbo(1000.0)
    assert v.deactivate_turbo(3000.0) == [], "exactly 2s is not enough"

    v.activate_turbo(1000.0)
    events = v.deactivate_turbo(3500.0)
    assert len(events) == 1
    ev = events[0]
    assert ev.kind == EventKind.TURBO_MASTERED
    assert ev.data["duration"] == 2500.0
    assert ev.data["speed"] == 20.0
    assert not v.turbo_active and v.turbo_start_ms is None


def test_controls_are_noops_when_disabled():
    v = Vehicle(enabled=False)
    assert not v.jump()
    assert not v.crouch()
    assert not v.activate_turbo(0.0)
    assert v.update(Controls(right=True)) == []
    assert v.speed == 0.0


def test_wheel_phase_wraps():
    v = Vehicle(speed=15.0)
    for _ in range(50):
        v.update(Controls(right=True))
        assert 0.0 <= v.wheel_rotation < 2 * math.pi


def test_hitbox_insets_and_crouch():
    v = Vehicle()
    assert v.hitbox() == pygame.Rect(110, 260, 60, 50)
    v.crouch()
    assert v.hitbox() == pygame.Rect(110, 275, 60, 35)


def test_reset_restores_start_values():
    v = Vehicle()
    v.activate_turbo(0.0)
    v.jump()
    for _ in range(5):
        v.update(Controls())
    v.reset()
    assert v == Vehicle()
