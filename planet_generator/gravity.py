# planet_generator/gravity.py

"""
================================================================================
N-BODY GRAVITY SOLVER
================================================================================
Computes the net gravitational force on every registered body, once per
simulation tick.

Data Contract:
---------------
- Inputs: Body positions (N, 3) and masses (N,). Read-only during a pass.
- Outputs: Net force per body (N, 3), written into each Body.force.
- Side Effects: None beyond the force accumulators. The solver never moves
  a body; integration belongs to the rigid-body integrator.
- Invariants:
    - Forces are pairwise equal and opposite.
    - With 0 or 1 bodies every force is zero.
    - Coincident bodies contribute nothing to each other, so no NaN or Inf
      can reach the integrator.
================================================================================
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from numba import njit

from . import config as DEFAULTS

class PhysicsError(Exception):
    """Custom exception for physics-related errors, including numerical issues."""
    pass

def _vector3() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)

@dataclass(eq=False)
class Body:
    """A massive body. Identity, not value, decides equality."""
    position: np.ndarray
    mass: float
    force: np.ndarray = field(default_factory=_vector3)
    velocity: np.ndarray = field(default_factory=_vector3)
    name: str = "body"

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64).reshape(3).copy()
        self.force = np.asarray(self.force, dtype=np.float64).reshape(3).copy()
        self.velocity = np.asarray(self.velocity, dtype=np.float64).reshape(3).copy()
        self.mass = float(self.mass)

@njit
def _pairwise_forces(positions, masses, min_distance_sq):
    """Symmetric O(n^2) accumulation: each unordered pair is visited once."""
    n = positions.shape[0]
    forces = np.zeros((n, 3))

    for i in range(n):
        for j in range(i + 1, n):
            rx = positions[j, 0] - positions[i, 0]
            ry = positions[j, 1] - positions[i, 1]
            rz = positions[j, 2] - positions[i, 2]
            dist_sq = rx * rx + ry * ry + rz * rz
            if dist_sq < min_distance_sq:
                continue

            # normalize(r) * m_i * m_j / |r|^2
            inv_dist = 1.0 / np.sqrt(dist_sq)
            magnitude = masses[i] * masses[j] / dist_sq
            fx = rx * inv_dist * magnitude
            fy = ry * inv_dist * magnitude
            fz = rz * inv_dist * magnitude

            forces[i, 0] += fx
            forces[i, 1] += fy
            forces[i, 2] += fz
            forces[j, 0] -= fx
            forces[j, 1] -= fy
            forces[j, 2] -= fz

    return forces

def compute_forces(positions, masses,
                   gravitational_constant: float = DEFAULTS.GRAVITATIONAL_CONSTANT,
                   min_distance_sq: float = DEFAULTS.COINCIDENT_DISTANCE_SQ) -> np.ndarray:
    """
    Returns the net force on each body as an (N, 3) array.

    Args:
        positions: (N, 3) body positions.
        masses: (N,) body masses.
        gravitational_constant (float): Overall force scale. Defaults to 1,
            i.e. the constant is folded into the mass units.
        min_distance_sq (float): Pairs closer than this are skipped.
    """
    positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 3)
    masses = np.ascontiguousarray(masses, dtype=np.float64).reshape(-1)
    if len(positions) != len(masses):
        raise PhysicsError(f"Got {len(positions)} positions but {len(masses)} masses.")
    if len(positions) < 2:
        return np.zeros((len(positions), 3))

    return _pairwise_forces(positions, masses, min_distance_sq) * gravitational_constant

class GravitySolver:
    """
    Owns the list of bodies subject to gravity and refreshes their force
    accumulators once per tick.
    """
    def __init__(self, gravitational_constant: float = DEFAULTS.GRAVITATIONAL_CONSTANT,
                 min_distance_sq: float = DEFAULTS.COINCIDENT_DISTANCE_SQ):
        self.logger = logging.getLogger(__name__)
        self.gravitational_constant = gravitational_constant
        self.min_distance_sq = min_distance_sq
        self._bodies = []

    @property
    def bodies(self) -> tuple:
        return tuple(self._bodies)

    def __len__(self):
        return len(self._bodies)

    def __contains__(self, body: Body):
        return any(b is body for b in self._bodies)

    def register(self, body: Body) -> Body:
        """Adds a body. Its force accumulator starts at zero."""
        if body.mass < 0 or not np.isfinite(body.mass):
            raise PhysicsError(f"Body '{body.name}' has invalid mass {body.mass}.")
        if body in self:
            raise PhysicsError(f"Body '{body.name}' is already registered.")
        body.force[:] = 0.0
        self._bodies.append(body)
        self.logger.debug(f"Registered body '{body.name}' (mass {body.mass:.4g}).")
        return body

    def deregister(self, body: Body):
        """Removes a body. Removing an unknown body is an error."""
        for i, b in enumerate(self._bodies):
            if b is body:
                del self._bodies[i]
                self.logger.debug(f"Deregistered body '{body.name}'.")
                return
        raise PhysicsError(f"Body '{body.name}' is not registered.")

    def replace(self, old: Body, new: Body):
        """
        Swaps `old` for `new` in one step, keeping its slot in the body order.
        Both bodies are never registered at the same time.
        """
        if new.mass < 0 or not np.isfinite(new.mass):
            raise PhysicsError(f"Body '{new.name}' has invalid mass {new.mass}.")
        if new in self:
            raise PhysicsError(f"Body '{new.name}' is already registered.")
        for i, b in enumerate(self._bodies):
            if b is old:
                new.force[:] = 0.0
                self._bodies[i] = new
                self.logger.debug(f"Replaced body '{old.name}' with '{new.name}'.")
                return
        raise PhysicsError(f"Body '{old.name}' is not registered.")

    def step(self) -> np.ndarray:
        """Computes and stores the net force of every body. Returns the (N, 3) forces."""
        if not self._bodies:
            return np.zeros((0, 3))

        positions = np.array([b.position for b in self._bodies])
        masses = np.array([b.mass for b in self._bodies])
        forces = compute_forces(positions, masses, self.gravitational_constant, self.min_distance_sq)

        if not np.all(np.isfinite(forces)):
            raise PhysicsError("Gravity pass produced non-finite forces.")

        for body, force in zip(self._bodies, forces):
            body.force[:] = force
        return forces
