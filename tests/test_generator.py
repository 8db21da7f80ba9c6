import logging
import unittest
import numpy as np
from planet_generator.generator import PlanetGenerator
from planet_generator.cube_face import CubeFace
from planet_generator.settings import PlanetConfig, ConfigurationError
from planet_generator import noise

LOGGER = logging.getLogger("test_generator")

class TestPlanetGenerator(unittest.TestCase):

    def test_resolution_three_counts(self):
        mesh = PlanetGenerator(PlanetConfig(resolution=3), LOGGER).assemble()
        self.assertEqual(mesh.vertex_count, 54)
        self.assertEqual(len(mesh.indices), 144)
        self.assertEqual(mesh.triangle_count, 48)

    def test_counts_follow_resolution(self):
        for resolution in (2, 5, 8):
            with self.subTest(resolution=resolution):
                generator = PlanetGenerator(PlanetConfig(resolution=resolution), LOGGER)
                mesh = generator.assemble()
                self.assertEqual(mesh.vertex_count, 6 * resolution ** 2)
                self.assertEqual(mesh.vertex_count, generator.vertex_count)
                self.assertEqual(mesh.triangle_count, generator.triangle_count)
                self.assertEqual(len(mesh.indices) % 3, 0)
                self.assertLess(int(mesh.indices.max()), 6 * resolution ** 2)

    def test_faces_are_laid_out_in_order(self):
        resolution = 4
        generator = PlanetGenerator(PlanetConfig(resolution=resolution), LOGGER)
        mesh = generator.assemble()
        per_face = resolution * resolution
        for face in CubeFace:
            block = mesh.positions[int(face) * per_face:(int(face) + 1) * per_face]
            np.testing.assert_array_equal(block, generator.build_face(face).positions)

    def test_same_config_is_byte_identical(self):
        config = PlanetConfig(resolution=6, seed=21)
        a = PlanetGenerator(config, LOGGER).assemble()
        b = PlanetGenerator(config, LOGGER).assemble()
        self.assertEqual(a.content_hash(), b.content_hash())

    def test_different_seed_changes_positions(self):
        a = PlanetGenerator(PlanetConfig(resolution=6, seed=1), LOGGER).assemble()
        b = PlanetGenerator(PlanetConfig(resolution=6, seed=2), LOGGER).assemble()
        self.assertFalse(np.array_equal(a.positions, b.positions))
        np.testing.assert_array_equal(a.indices, b.indices)

    def test_threaded_build_matches_serial(self):
        generator = PlanetGenerator(PlanetConfig(resolution=6), LOGGER)
        serial = generator.assemble()
        threaded = generator.assemble(max_workers=3)
        self.assertEqual(serial.content_hash(), threaded.content_hash())

    def test_accepts_dict_config(self):
        generator = PlanetGenerator({'resolution': 3, 'seed': 8}, LOGGER)
        self.assertEqual(generator.settings, PlanetConfig(resolution=3, seed=8))

    def test_injected_permutation_table_is_used(self):
        p = noise.generate_permutation_table(77)
        injected = PlanetGenerator(PlanetConfig(resolution=4, seed=1), LOGGER, permutation_table=p)
        seeded = PlanetGenerator(PlanetConfig(resolution=4, seed=77), LOGGER)
        self.assertIs(injected.permutation_table, p)
        np.testing.assert_array_equal(injected.assemble().positions, seeded.assemble().positions)

    def test_height_matches_surface(self):
        config = PlanetConfig(resolution=3, radius=2.0)
        generator = PlanetGenerator(config, LOGGER)
        mesh = generator.assemble()
        direction = mesh.positions[4].astype(np.float64)
        direction /= np.linalg.norm(direction)
        # Centre vertex of the first face; height is relative to the radius.
        self.assertAlmostEqual(generator.height(direction) * config.radius,
                               float(np.linalg.norm(mesh.positions[4])), places=5)

    def test_invalid_config_raises_before_generation(self):
        for config in (PlanetConfig(resolution=1), PlanetConfig(layers=0), PlanetConfig(strength=float('nan'))):
            with self.subTest(config=config):
                with self.assertRaises(ConfigurationError):
                    PlanetGenerator(config, LOGGER)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
