# src/motocross/game/combo.py
"""
Combo / multiplier scoring.

One long-lived streak (reset by a timeout) drives a tiered multiplier.
Alongside it, a handful of special combos watch the recent action history
(or a direct event) and pay a fixed bonus when their pattern shows up.
Special combos never touch the streak.
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple
from .config import (
    COMBO_TIMEOUT_MS, HISTORY_CAPACITY, POINTS_JUMP_LAND, POINTS_DODGE,
    POINTS_RAMP_JUMP, POINTS_TURBO_MASTER, SPEED_DEMON_MIN_SPEED,
    PERFECT_LANDING_WINDOW_MS, SPEED_DEMON_WINDOW_MS, AIR_MASTER_WINDOW_MS,
    SLALOM_WINDOW_MS, SLALOM_MIN_KINDS,
)
from .events import EventKind, FrameEvent

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    JUMP_LAND = "jumpLand"
    DODGE = "dodge"
    RAMP_JUMP = "rampJump"
    TURBO_MASTER = "turboMaster"


# streak -> multiplier, checked top down
_TIERS: Tuple[Tuple[int, float], ...] = (
    (15, 5.0),
    (10, 4.0),
    (5, 3.0),
    (4, 2.5),
    (3, 2.0),
    (2, 1.5),
)


def multiplier_for(streak: int) -> float:
    for lo, mult in _TIERS:
        if streak >= lo:
            return mult
    return 1.0


@dataclass
class Action:
    kind: ActionKind
    time_ms: float
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SpecialCombo:
    name: str
    threshold: int
    bonus: int
    count: int = 0
    since_ms: Optional[float] = None   # history-driven rules only count actions after this


# name: (threshold, bonus)
SPECIAL_COMBOS: Dict[str, Tuple[int, int]] = {
    "perfectLanding": (3, 100),
    "speedDemon": (5, 200),
    "airMaster": (4, 150),
    "obstacleSlalom": (6, 250),
    "turboMaster": (1, 180),    # fires on every turboMastered event
}

# which action each gameplay event scores as, and for how much
EVENT_ACTIONS: Dict[EventKind, Tuple[ActionKind, int]] = {
    EventKind.LANDED: (ActionKind.JUMP_LAND, POINTS_JUMP_LAND),
    EventKind.DODGED: (ActionKind.DODGE, POINTS_DODGE),
    EventKind.RAMP_JUMP: (ActionKind.RAMP_JUMP, POINTS_RAMP_JUMP),
    EventKind.TURBO_MASTERED: (ActionKind.TURBO_MASTER, POINTS_TURBO_MASTER),
}


@dataclass(frozen=True)
class ComboView:
    streak: int
    multiplier: float
    score: int
    history_len: int
    specials: Tuple[Tuple[str, int, int, int], ...]   # (name, count, threshold, bonus)


class ComboEngine:
    def __init__(self, timeout_ms: float = COMBO_TIMEOUT_MS, capacity: int = HISTORY_CAPACITY):
        self.timeout_ms = timeout_ms
        self.streak = 0
        self.multiplier = 1.0
        self.score = 0
        self.last_action_ms: Optional[float] = None
        self.history: Deque[Action] = deque(maxlen=capacity)
        self.specials: Dict[str, SpecialCombo] = {
            name: SpecialCombo(name, threshold, bonus)
            for name, (threshold, bonus) in SPECIAL_COMBOS.items()
        }
        self._outbox: List[FrameEvent] = []

    # --- streak ---

    def _stale(self, now_ms: float) -> bool:
        return self.last_action_ms is None or (now_ms - self.last_action_ms) > self.timeout_ms

    def add_action(self, kind: ActionKind | str, base_points: int = 10,
                   context: Optional[Dict[str, Any]] = None, now_ms: float = 0.0) -> int:
        """
        Score one action. Returns the points awarded for it (bonuses from
        special combos it triggers are added to the score separately and
        queued as specialCombo events, see drain_events()).
        """
        kind = ActionKind(kind)
        context = dict(context or {})
        if self._stale(now_ms):
            self.streak = 0

        self.streak += 1
        self.last_action_ms = now_ms
        self.multiplier = multiplier_for(self.streak)
        self.history.append(Action(kind, now_ms, context))

        self._check_specials(kind, context, now_ms)

        points = int(base_points * self.multiplier)
        self.score += points
        return points

    # --- special combos ---

    def _recent(self, kind: ActionKind, now_ms: float, window_ms: float,
                since_ms: Optional[float] = None) -> List[Action]:
        return [a for a in self.history
                if a.kind == kind and now_ms - a.time_ms < window_ms
                and (since_ms is None or a.time_ms > since_ms)]

    def _check_specials(self, kind: ActionKind, context: Dict[str, Any], now_ms: float):
        if kind == ActionKind.JUMP_LAND:
            perfect = self.specials["perfectLanding"]
            landings = self._recent(ActionKind.JUMP_LAND, now_ms, PERFECT_LANDING_WINDOW_MS, perfect.since_ms)
            perfect.count = len(landings)
            if perfect.count >= perfect.threshold:
                self._trigger("perfectLanding", now_ms)

        if kind == ActionKind.DODGE:
            if context.get("speed", 0.0) > SPEED_DEMON_MIN_SPEED:
                demon = self.specials["speedDemon"]
                demon.count += 1
                if demon.count >= demon.threshold:
                    self._trigger("speedDemon", now_ms)

            slalom = self.specials["obstacleSlalom"]
            dodges = self._recent(ActionKind.DODGE, now_ms, SLALOM_WINDOW_MS, slalom.since_ms)
            kinds = {a.context.get("obstacle") for a in dodges}
            slalom.count = len(dodges)
            if len(kinds) >= SLALOM_MIN_KINDS and len(dodges) >= slalom.threshold:
                self._trigger("obstacleSlalom", now_ms)

        if kind == ActionKind.RAMP_JUMP:
            air = self.specials["airMaster"]
            air.count += 1
            if air.count >= air.threshold:
                self._trigger("airMaster", now_ms)

        if kind == ActionKind.TURBO_MASTER:
            self.specials["turboMaster"].count += 1
            self._trigger("turboMaster", now_ms)

    def _trigger(self, name: str, now_ms: float):
        special = self.specials[name]
        self.score += special.bonus
        special.count = 0
        special.since_ms = now_ms
        self._outbox.append(FrameEvent(
            EventKind.SPECIAL_COMBO, now_ms, points=special.bonus, data={"combo": name},
        ))
        logger.info("special combo %s +%d", name, special.bonus)

    def drain_events(self) -> List[FrameEvent]:
        out, self._outbox = self._outbox, []
        return out

    # --- per tick ---

    def update(self, now_ms: float):
        """Time-driven resets; must run every tick, new actions or not."""
        if self.streak > 0 and self._stale(now_ms):
            self.streak = 0
            self.multiplier = 1.0

        fast_dodges = [a for a in self._recent(ActionKind.DODGE, now_ms, SPEED_DEMON_WINDOW_MS)
                       if a.context.get("speed", 0.0) > SPEED_DEMON_MIN_SPEED]
        if not fast_dodges:
            self.specials["speedDemon"].count = 0

        if not self._recent(ActionKind.RAMP_JUMP, now_ms, AIR_MASTER_WINDOW_MS):
            self.specials["airMaster"].count = 0

    def consume(self, events: Iterable[FrameEvent], now_ms: float) -> List[FrameEvent]:
        """
        Score the tick's gameplay events in order. Writes the awarded points
        onto each scored event and returns the specialCombo events raised.
        """
        for ev in events:
            mapped = EVENT_ACTIONS.get(ev.kind)
            if mapped is None:
                continue
            action, points = mapped
            ev.points = self.add_action(action, points, ev.data, now_ms)
        return self.drain_events()

    def credit_distance(self, points: int):
        """Distance score floor: the score never sits below distance-earned points."""
        if points > self.score:
            self.score = points

    def reset(self):
        """Crash / restart: clears the streak and every counter, keeps the score."""
        self.streak = 0
        self.multiplier = 1.0
        self.last_action_ms = None
        self.history.clear()
        for special in self.specials.values():
            special.count = 0
            special.since_ms = None
        self._outbox = []

    def clear(self):
        self.reset()
        self.score = 0

    def view(self) -> ComboView:
        return ComboView(
            streak=self.streak,
            multiplier=self.multiplier,
            score=self.score,
            history_len=len(self.history),
            specials=tuple((s.name, s.count, s.threshold, s.bonus) for s in self.specials.values()),
        )
