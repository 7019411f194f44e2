# src/tests/test_collision.py
"""Collision geometry: inset AABBs, the puddle jump-over rule, and sloped ramps."""
from __future__ import annotations
import math

from motocross.game.collision import CollisionResolver, Contact, on_ramp, wheel_on_ramp, wheel_points
from motocross.game.events import EventKind
from motocross.game.track import Obstacle, ObstacleKind
from motocross.game.vehicle import Vehicle


def test_ramp_geometry():
    ramp = Obstacle(ObstacleKind.RAMP, x=100.0)
    assert ramp.y == 280.0
    assert math.isclose(ramp.slope_y_at(100.0), 310.0)
    assert math.isclose(ramp.slope_y_at(170.0), 280.0)
    assert math.isclose(ramp.slope_y_at(135.0), 295.0)


def test_ramp_board_vs_clear_air():
    # ramp spans x in [100, 170], top 280, bottom 310
    ramp = Obstacle(ObstacleKind.RAMP, x=100.0)
    resolver = CollisionResolver()

    v = Vehicle(x=79.0, y=259.0)
    (fx, fy), _ = wheel_points(v)
    assert math.isclose(fx, 135.0) and math.isclose(fy, 309.0)
    assert on_ramp(v, ramp)
    assert resolver.classify(v, ramp) is Contact.RAMP

    high = Vehicle(x=79.0, y=200.0)
    assert math.isclose(wheel_points(high)[0][1], 250.0)
    assert resolver.classify(high, ramp) is Contact.NONE


def test_wheel_must_be_within_ramp_span():
    ramp = Obstacle(ObstacleKind.RAMP, x=100.0)
    assert wheel_on_ramp(ramp, 103.0, 309.0)
    assert not wheel_on_ramp(ramp, 99.0, 310.0)
    assert not wheel_on_ramp(ramp, 171.0, 280.0)


def test_ramp_contact_launches_instead_of_crashing():
    ramp = Obstacle(ObstacleKind.RAMP, x=120.0)
    v = Vehicle()
    events = CollisionResolver().check(v, [ramp], now_ms=42.0)
    assert [e.kind for e in events] == [EventKind.RAMP_JUMP]
    assert events[0].time_ms == 42.0
    assert v.jumping and v.jump_initiated


def test_ramp_contact_while_airborne_is_nothing():
    ramp = Obstacle(ObstacleKind.RAMP, x=120.0)
    v = Vehicle()
    v.jumping = True
    assert CollisionResolver().check(v, [ramp]) == []


def test_rect_crash():
    v = Vehicle()
    rock = Obstacle(ObstacleKind.ROCK, x=150.0)
    resolver = CollisionResolver()
    assert resolver.classify(v, rock) is Contact.CRASH
    events = resolver.check(v, [rock], now_ms=7.0)
    assert len(events) == 1
    assert events[0].kind == EventKind.CRASH
    assert events[0].data["obstacle"] == "rock"


def test_rock_inset_matches_silhouette():
    # bike hitbox right edge is 170; the rock's collision box starts 5 px in
    v = Vehicle()
    resolver = CollisionResolver()
    assert resolver.classify(v, Obstacle(ObstacleKind.ROCK, x=166.0)) is Contact.NONE
    assert resolver.classify(v, Obstacle(ObstacleKind.WALL, x=166.0)) is Contact.CRASH


def test_side_margin_on_bike():
    # the bike's raw rect reaches 180, its hitbox only 170
    v = Vehicle()
    assert CollisionResolver().classify(v, Obstacle(ObstacleKind.WALL, x=172.0)) is Contact.NONE


def test_puddle_is_cleared_by_any_jump():
    puddle = Obstacle(ObstacleKind.PUDDLE, x=150.0)
    resolver = CollisionResolver()
    v = Vehicle()
    assert resolver.classify(v, puddle) is Contact.CRASH
    v.jumping = True
    assert resolver.classify(v, puddle) is Contact.NONE


def test_high_enough_jump_clears_obstacles():
    v = Vehicle(y=150.0, jumping=True)
    assert CollisionResolver().classify(v, Obstacle(ObstacleKind.FENCE, x=120.0)) is Contact.NONE


def test_check_skips_passed_and_stops_at_first_crash():
    v = Vehicle()
    behind = Obstacle(ObstacleKind.WALL, x=120.0, passed=True)
    first = Obstacle(ObstacleKind.LOG, x=130.0)
    second = Obstacle(ObstacleKind.SIGN, x=140.0)
    events = CollisionResolver().check(v, [behind, first, second])
    assert len(events) == 1
    assert events[0].data["obstacle"] == "log"
