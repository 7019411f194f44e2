"""Motocross runner: side-scrolling arcade simulation core."""
from .game.simulation import Simulation, SimState, Snapshot
from .game.vehicle import Controls
from .game.events import EventKind, FrameEvent, FrameEvents

__version__ = "0.1.0"
