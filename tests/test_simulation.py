import unittest
import numpy as np
from planet_generator.gravity import GravitySolver
from planet_generator.settings import PlanetConfig
from planet_generator.runtime import (
    ConvexHullColliderBuilder,
    MeshStore,
    PlanetLifecycle,
    SemiImplicitEulerIntegrator,
    Simulation,
    SimulationClock,
)

class RecordingLifecycle:
    def __init__(self, events):
        self.events = events

    def update(self, config):
        self.events.append('lifecycle')
        return False

    def destroy(self):
        self.events.append('destroy')

class RecordingIntegrator(SemiImplicitEulerIntegrator):
    def __init__(self, events):
        self.events = events
        self.forces_seen = []

    def advance(self, bodies, dt):
        self.events.append('advance')
        self.forces_seen.append([b.force.copy() for b in bodies])
        super().advance(bodies, dt)

def _clock():
    return SimulationClock({'fixed_timestep': 0.25, 'max_steps_per_frame': 10})

class TestSimulationOrdering(unittest.TestCase):

    def setUp(self):
        self.events = []
        self.integrator = RecordingIntegrator(self.events)
        self.simulation = Simulation(RecordingLifecycle(self.events), GravitySolver(), self.integrator, _clock())

    def test_lifecycle_runs_before_steps(self):
        steps = self.simulation.update(0.5, PlanetConfig())
        self.assertEqual(steps, 2)
        self.assertEqual(self.events, ['lifecycle', 'advance', 'advance'])

    def test_lifecycle_runs_even_without_steps(self):
        self.simulation.set_game_speed(0.0)
        self.assertEqual(self.simulation.update(0.5, PlanetConfig()), 0)
        self.assertEqual(self.events, ['lifecycle'])

    def test_forces_are_fresh_when_integrating(self):
        a = self.simulation.add_body([0, 0, 0], 1.0, name="a")
        self.simulation.add_body([2, 0, 0], 4.0, name="b")
        self.simulation.step()
        np.testing.assert_array_almost_equal(self.integrator.forces_seen[0][0], [1.0, 0, 0])
        self.assertGreater(a.velocity[0], 0)

    def test_add_and_remove_body(self):
        body = self.simulation.add_body([1, 2, 3], 0.5, velocity=(0, 1, 0), name="probe")
        self.assertEqual(self.simulation.bodies, (body,))
        np.testing.assert_array_equal(body.velocity, [0, 1, 0])
        self.simulation.remove_body(body)
        self.assertEqual(self.simulation.bodies, ())

    def test_shutdown_destroys_lifecycle(self):
        self.simulation.shutdown()
        self.assertEqual(self.events, ['destroy'])

class TestSimulationWithPlanet(unittest.TestCase):

    def setUp(self):
        solver = GravitySolver()
        self.store = MeshStore()
        lifecycle = PlanetLifecycle(solver, self.store, ConvexHullColliderBuilder())
        self.simulation = Simulation(lifecycle, solver, SemiImplicitEulerIntegrator(), _clock())
        self.config = PlanetConfig(resolution=6)

    def test_moon_falls_toward_planet(self):
        moon = self.simulation.add_body([3.0, 0.0, 0.0], 0.01, name="moon")
        self.simulation.update(1.0, self.config)
        planet = self.simulation.lifecycle.body
        self.assertEqual(len(self.simulation.bodies), 2)
        self.assertLess(moon.velocity[0], 0)
        self.assertGreater(planet.velocity[0], 0)
        # Momentum is conserved by the pairwise forces.
        momentum = moon.mass * moon.velocity + planet.mass * planet.velocity
        np.testing.assert_array_almost_equal(momentum, np.zeros(3))

    def test_regeneration_keeps_single_planet_body(self):
        self.simulation.update(0.25, self.config)
        self.simulation.update(0.25, self.config.with_changes(seed=99))
        self.simulation.update(0.25, self.config.with_changes(seed=99))
        self.assertEqual(len(self.simulation.bodies), 1)
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.simulation.lifecycle.generation_count, 2)

    def test_shutdown_releases_planet(self):
        self.simulation.update(0.25, self.config)
        self.simulation.shutdown()
        self.assertEqual(len(self.simulation.bodies), 0)
        self.assertEqual(len(self.store), 0)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
