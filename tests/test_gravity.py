import unittest
import numpy as np
from planet_generator.gravity import Body, GravitySolver, PhysicsError, compute_forces

class TestComputeForces(unittest.TestCase):

    def test_no_bodies_and_single_body(self):
        self.assertEqual(compute_forces(np.zeros((0, 3)), np.zeros(0)).shape, (0, 3))
        np.testing.assert_array_equal(compute_forces([[1.0, 2.0, 3.0]], [5.0]), np.zeros((1, 3)))

    def test_two_bodies_inverse_square(self):
        forces = compute_forces([[0, 0, 0], [2, 0, 0]], [3.0, 4.0])
        np.testing.assert_array_almost_equal(forces, [[3.0, 0, 0], [-3.0, 0, 0]])

    def test_pair_forces_are_equal_and_opposite(self):
        rng = np.random.default_rng(5)
        forces = compute_forces(rng.uniform(-5, 5, size=(2, 3)), rng.uniform(0.1, 3, size=2))
        np.testing.assert_array_equal(forces[0], -forces[1])

    def test_net_force_of_system_vanishes(self):
        rng = np.random.default_rng(6)
        forces = compute_forces(rng.uniform(-5, 5, size=(12, 3)), rng.uniform(0.1, 3, size=12))
        np.testing.assert_array_almost_equal(forces.sum(axis=0), np.zeros(3))

    def test_coincident_bodies_are_skipped(self):
        forces = compute_forces([[1, 1, 1], [1, 1, 1], [4, 1, 1]], [1.0, 1.0, 1.0])
        self.assertTrue(np.all(np.isfinite(forces)))
        # Only the third body pulls on the coincident pair.
        np.testing.assert_array_almost_equal(forces[0], [1 / 9, 0, 0])
        np.testing.assert_array_almost_equal(forces[1], [1 / 9, 0, 0])
        np.testing.assert_array_almost_equal(forces[2], [-2 / 9, 0, 0])

    def test_gravitational_constant_scales_forces(self):
        base = compute_forces([[0, 0, 0], [0, 1, 0]], [1.0, 2.0])
        scaled = compute_forces([[0, 0, 0], [0, 1, 0]], [1.0, 2.0], gravitational_constant=2.5)
        np.testing.assert_array_almost_equal(scaled, base * 2.5)

    def test_length_mismatch_raises(self):
        with self.assertRaises(PhysicsError):
            compute_forces([[0, 0, 0], [1, 0, 0]], [1.0])

class TestGravitySolver(unittest.TestCase):

    def setUp(self):
        self.solver = GravitySolver()
        self.a = Body(position=[0, 0, 0], mass=1.0, name="a")
        self.b = Body(position=[0, 0, 1], mass=1.0, name="b")

    def test_step_writes_forces(self):
        self.solver.register(self.a)
        self.solver.register(self.b)
        self.solver.step()
        np.testing.assert_array_almost_equal(self.a.force, [0, 0, 1])
        np.testing.assert_array_almost_equal(self.b.force, [0, 0, -1])

    def test_lone_body_has_zero_force(self):
        self.a.force[:] = 7.0
        self.solver.register(self.a)
        self.solver.step()
        np.testing.assert_array_equal(self.a.force, np.zeros(3))

    def test_step_does_not_move_bodies(self):
        self.solver.register(self.a)
        self.solver.register(self.b)
        self.solver.step()
        np.testing.assert_array_equal(self.b.position, [0, 0, 1])

    def test_register_twice_raises(self):
        self.solver.register(self.a)
        with self.assertRaises(PhysicsError):
            self.solver.register(self.a)

    def test_invalid_mass_raises(self):
        with self.assertRaises(PhysicsError):
            self.solver.register(Body(position=[0, 0, 0], mass=-1.0))
        with self.assertRaises(PhysicsError):
            self.solver.register(Body(position=[0, 0, 0], mass=float('nan')))

    def test_deregister(self):
        self.solver.register(self.a)
        self.solver.deregister(self.a)
        self.assertEqual(len(self.solver), 0)
        with self.assertRaises(PhysicsError):
            self.solver.deregister(self.a)

    def test_replace_keeps_slot(self):
        c = Body(position=[5, 0, 0], mass=2.0, name="c")
        self.solver.register(self.a)
        self.solver.register(self.b)
        self.solver.replace(self.a, c)
        self.assertEqual(self.solver.bodies, (c, self.b))
        self.assertNotIn(self.a, self.solver)
        with self.assertRaises(PhysicsError):
            self.solver.replace(self.a, Body(position=[0, 0, 0], mass=1.0))

    def test_replace_with_registered_body_raises(self):
        self.solver.register(self.a)
        self.solver.register(self.b)
        with self.assertRaises(PhysicsError):
            self.solver.replace(self.a, self.b)
        self.assertEqual(self.solver.bodies, (self.a, self.b))

    def test_membership_is_by_identity(self):
        twin = Body(position=[0, 0, 0], mass=1.0, name="a")
        self.solver.register(self.a)
        self.assertIn(self.a, self.solver)
        self.assertNotIn(twin, self.solver)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
