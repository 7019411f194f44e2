# src/motocross/game/events.py
"""
Discrete gameplay events produced during one simulation tick.

Renderers and audio layers read these after `Simulation.tick` returns;
the combo engine reads them inside the tick to award points.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List


class EventKind(Enum):
    LANDED = "landed"
    DODGED = "dodged"
    RAMP_JUMP = "rampJump"
    TURBO_MASTERED = "turboMastered"
    SPECIAL_COMBO = "specialCombo"
    CRASH = "crash"


@dataclass
class FrameEvent:
    """
    One event of a tick.
    - time_ms: run clock when it happened
    - points : filled in by the combo engine once the event is scored
    - data   : kind-specific payload (obstacle kind, speed, combo name, ...)
    """
    kind: EventKind
    time_ms: float
    points: int = 0
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FrameEvents:
    """Ordered events of one tick."""
    events: List[FrameEvent] = field(default_factory=list)

    def extend(self, more: List[FrameEvent]):
        self.events.extend(more)

    def of_kind(self, kind: EventKind) -> List[FrameEvent]:
        return [e for e in self.events if e.kind == kind]

    @property
    def crashed(self) -> bool:
        return any(e.kind == EventKind.CRASH for e in self.events)

    def __iter__(self) -> Iterator[FrameEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)
