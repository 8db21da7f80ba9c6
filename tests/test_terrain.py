import unittest
import numpy as np
from planet_generator import noise, terrain
from planet_generator.settings import PlanetConfig

def _unit_directions(count, seed=0):
    rng = np.random.default_rng(seed)
    d = rng.normal(size=(count, 3))
    return d / np.linalg.norm(d, axis=1, keepdims=True)

class TestAccumulateOctaves(unittest.TestCase):

    def setUp(self):
        self.p = noise.generate_permutation_table(1337)
        self.directions = _unit_directions(500)

    def test_single_layer_ignores_roughness_and_persistence(self):
        a = PlanetConfig(layers=1, roughness=2.0, persistence=0.5)
        b = PlanetConfig(layers=1, roughness=3.7, persistence=0.1)
        np.testing.assert_array_equal(
            terrain.accumulate_octaves(self.p, self.directions, a),
            terrain.accumulate_octaves(self.p, self.directions, b)
        )

    def test_single_layer_depends_on_base_roughness(self):
        a = PlanetConfig(layers=1, base_roughness=1.0)
        b = PlanetConfig(layers=1, base_roughness=2.5)
        self.assertFalse(np.allclose(
            terrain.accumulate_octaves(self.p, self.directions, a),
            terrain.accumulate_octaves(self.p, self.directions, b)
        ))

    def test_octave_sum_bounds(self):
        settings = PlanetConfig(layers=3, persistence=0.5)
        h = terrain.accumulate_octaves(self.p, self.directions, settings)
        # Each octave contributes a value in roughly [0, amplitude].
        self.assertTrue(np.all(h > -0.05))
        self.assertTrue(np.all(h < 1.75 + 0.05))

    def test_single_layer_matches_remapped_noise(self):
        settings = PlanetConfig(layers=1, base_roughness=1.5, centre=(0.25, -0.5, 1.0))
        expected = (noise.sample_points(self.p, self.directions * 1.5 + np.array([0.25, -0.5, 1.0])) + 1) * 0.5
        np.testing.assert_array_almost_equal(
            terrain.accumulate_octaves(self.p, self.directions, settings), expected
        )

class TestElevationScale(unittest.TestCase):

    def test_height_above_minimum_has_no_effect(self):
        settings = PlanetConfig(minimum=0.5, strength=2.0)
        np.testing.assert_array_equal(terrain.elevation_scale(np.array([0.5, 0.9, 3.0]), settings), np.ones(3))

    def test_height_below_minimum_lowers_surface(self):
        settings = PlanetConfig(minimum=1.0, strength=0.5)
        np.testing.assert_array_almost_equal(
            terrain.elevation_scale(np.array([0.0, 0.5, 0.8]), settings),
            np.array([0.5, 0.75, 0.9])
        )

class TestDisplace(unittest.TestCase):

    def setUp(self):
        self.p = noise.generate_permutation_table(4)
        self.directions = _unit_directions(300, seed=1)

    def test_zero_strength_gives_sphere_of_radius(self):
        settings = PlanetConfig(strength=0.0, radius=2.5)
        points = terrain.displace(self.p, self.directions, settings)
        np.testing.assert_array_almost_equal(np.linalg.norm(points, axis=1), np.full(300, 2.5))

    def test_displacement_is_radial(self):
        settings = PlanetConfig(strength=0.4)
        points = terrain.displace(self.p, self.directions, settings)
        unit = points / np.linalg.norm(points, axis=1, keepdims=True)
        np.testing.assert_array_almost_equal(unit, self.directions)

    def test_surface_never_rises_above_radius(self):
        settings = PlanetConfig(strength=0.3, radius=1.0)
        points = terrain.displace(self.p, self.directions, settings)
        self.assertTrue(np.all(np.linalg.norm(points, axis=1) <= 1.0 + 1e-12))

    def test_height_matches_displace(self):
        settings = PlanetConfig(seed=4, strength=0.3)
        direction = self.directions[7]
        scale = terrain.height(direction, settings)
        point = terrain.displace(self.p, direction, settings)[0]
        self.assertAlmostEqual(np.linalg.norm(point), scale)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
