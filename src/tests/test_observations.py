# src/tests/test_observations.py
import numpy as np

from motocross.env.observations import OBS_SIZE, build_observation, observation_bounds
from motocross.game.simulation import Simulation
from motocross.game.track import Obstacle, ObstacleKind
from motocross.game.vehicle import Controls


def test_empty_track_vector():
    obs = build_observation(Simulation(seed=1).snapshot())
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (14,), "Shape/dtype mismatch"
    assert OBS_SIZE == 14
    assert obs[:5].tolist() == [0.0, 0.0, 0.0, 0.0, 0.0]
    # empty lookahead slots: [far, flat, not a ramp]
    for i in range(3):
        assert obs[5 + 3 * i: 8 + 3 * i].tolist() == [1.0, 0.0, 0.0]


def test_lookahead_slots_in_track_order():
    sim = Simulation(seed=1)
    sim.track.obstacles = [
        Obstacle(ObstacleKind.WALL, x=20.0, passed=True),      # behind the bike
        Obstacle(ObstacleKind.FENCE, x=400.0),
        Obstacle(ObstacleKind.RAMP, x=600.0),
    ]
    obs = build_observation(sim.snapshot())

    # gap from the bike's front (100 + 80) to the fence, over the track width
    assert np.isclose(obs[5], 220.0 / 800.0)
    assert obs[6] == 1.0 and obs[7] == 0.0
    assert np.isclose(obs[8], 420.0 / 800.0)
    assert np.isclose(obs[9], 30.0 / 70.0) and obs[10] == 1.0
    assert obs[11:14].tolist() == [1.0, 0.0, 0.0]


def test_observation_stays_in_bounds():
    low, high = observation_bounds()
    sim = Simulation(seed=8)
    for i in range(1200):
        sim.tick(1000.0 / 60.0, Controls(right=True, jump=(i % 25 == 0), turbo=True))
        obs = build_observation(sim.snapshot())
        assert np.all(obs >= low) and np.all(obs <= high), f"frame {i}: {obs}"
        if not sim.alive:
            break
