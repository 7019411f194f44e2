# src/motocross/game/render.py
"""Plain-rectangle drawing of a Snapshot. Used by the pygame harness and the env."""
from __future__ import annotations
import math
import pygame

from .config import (
    WIDTH, HEIGHT, GROUND_Y, VEHICLE_W, VEHICLE_H,
    COLOR_SKY, COLOR_GROUND, COLOR_BIKE, COLOR_BIKE_TURBO, COLOR_OBSTACLE,
    COLOR_RAMP, COLOR_DANGER,
)
from .simulation import SimState, Snapshot


def draw_snapshot(surf: pygame.Surface, snap: Snapshot):
    surf.fill(COLOR_SKY)
    pygame.draw.rect(surf, COLOR_GROUND, pygame.Rect(0, GROUND_Y, WIDTH, HEIGHT - GROUND_Y))

    for o in snap.obstacles:
        if o.is_ramp:
            # slope rises to the right
            pts = ((o.x, o.y + o.height), (o.x + o.width, o.y), (o.x + o.width, o.y + o.height))
            pygame.draw.polygon(surf, COLOR_RAMP, pts)
        else:
            pygame.draw.rect(surf, COLOR_OBSTACLE, pygame.Rect(int(o.x), int(o.y), o.width, o.height))

    v = snap.vehicle
    if snap.state is SimState.GAME_OVER:
        color = COLOR_DANGER
    elif v.turbo_active:
        color = COLOR_BIKE_TURBO
    else:
        color = COLOR_BIKE
    h = int(VEHICLE_H * 0.7) if v.crouching else VEHICLE_H
    body = pygame.Rect(int(v.x), int(v.y + v.suspension + (VEHICLE_H - h)), VEHICLE_W, h)
    pygame.draw.rect(surf, color, body, border_radius=6)

    # wheels, with a spoke showing the rotation phase
    r = 11
    for frac in (0.3, 0.7):
        cx, cy = int(v.x + VEHICLE_W * frac), int(v.y + VEHICLE_H - r + v.suspension)
        pygame.draw.circle(surf, (30, 30, 30), (cx, cy), r)
        sx = cx + int(math.cos(v.wheel_rotation) * (r - 2))
        sy = cy + int(math.sin(v.wheel_rotation) * (r - 2))
        pygame.draw.line(surf, (200, 200, 200), (cx, cy), (sx, sy), 2)
