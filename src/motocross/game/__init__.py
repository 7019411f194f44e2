from .simulation import Simulation, SimState, Snapshot, difficulty_for
from .vehicle import Controls, Vehicle
from .track import Obstacle, ObstacleKind, TrackGenerator
from .collision import CollisionResolver, Contact
from .combo import ActionKind, ComboEngine, multiplier_for
from .events import EventKind, FrameEvent, FrameEvents
