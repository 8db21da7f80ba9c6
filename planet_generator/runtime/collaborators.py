# planet_generator/runtime/collaborators.py

"""
================================================================================
EXTERNAL COLLABORATORS
================================================================================
The planet runtime talks to a renderer and a physics engine only through the
small protocols below. Any object with these methods can be plugged in.

Reference implementations are included so the runtime can be used (and
tested) without a host engine:
    - MeshStore: keeps meshes in an in-memory handle table.
    - ConvexHullColliderBuilder: builds a convex collider with SciPy.
    - SemiImplicitEulerIntegrator: advances bodies from their accumulated forces.
================================================================================
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from ..gravity import Body
from ..mesh import MeshBuffer

class ColliderConstructionError(Exception):
    """Raised when a collision shape cannot be built from a mesh."""
    pass

class Collider(Protocol):
    """Anything with a volume can serve as a collider for mass calculation."""
    volume: float

class MeshConsumer(Protocol):
    """
    A protocol for the renderer side. `add` returns an opaque handle the
    runtime hands back to `remove` and never inspects.
    """
    def add(self, mesh: MeshBuffer) -> object: ...
    def remove(self, handle: object) -> None: ...

class ColliderBuilder(Protocol):
    """A protocol for the physics engine's collision-shape factory."""
    def build(self, mesh: MeshBuffer, scale: float) -> Collider: ...

class RigidBodyIntegrator(Protocol):
    """A protocol for the physics engine's integrator."""
    def advance(self, bodies: Sequence[Body], dt: float) -> None: ...

class MeshStore:
    """A minimal mesh consumer that keeps meshes by integer handle."""
    def __init__(self):
        self._meshes = {}
        self._next_handle = itertools.count(1)

    def add(self, mesh: MeshBuffer) -> int:
        handle = next(self._next_handle)
        self._meshes[handle] = mesh
        return handle

    def remove(self, handle: int) -> None:
        del self._meshes[handle]

    def get(self, handle: int) -> MeshBuffer:
        return self._meshes[handle]

    def __len__(self):
        return len(self._meshes)

@dataclass(frozen=True)
class ConvexCollider:
    """The convex hull of a scaled mesh."""
    vertices: np.ndarray
    simplices: np.ndarray
    volume: float

class ConvexHullColliderBuilder:
    """
    Builds a convex collider from the mesh vertices. Degenerate input (too
    few points, flat or zero-volume geometry) fails with
    ColliderConstructionError.
    """
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def build(self, mesh: MeshBuffer, scale: float) -> ConvexCollider:
        points = np.asarray(mesh.positions, dtype=np.float64) * scale
        if len(points) < 4:
            raise ColliderConstructionError(f"A collider needs at least 4 vertices, got {len(points)}.")
        if not np.all(np.isfinite(points)):
            raise ColliderConstructionError("Mesh contains non-finite vertex positions.")

        try:
            hull = ConvexHull(points)
        except QhullError as e:
            raise ColliderConstructionError(f"Convex hull construction failed: {e}") from e

        if not hull.volume > 0:
            raise ColliderConstructionError(f"Collider has non-positive volume {hull.volume}.")

        self.logger.debug(f"Built convex collider with {len(hull.vertices)} hull vertices, volume {hull.volume:.4g}.")
        return ConvexCollider(
            vertices=points[hull.vertices],
            simplices=hull.simplices,
            volume=float(hull.volume),
        )

class SemiImplicitEulerIntegrator:
    """
    v += F / m * dt, then x += v * dt. Bodies with zero mass have no inertia
    to speak of and are left where they are.
    """
    def advance(self, bodies: Sequence[Body], dt: float) -> None:
        for body in bodies:
            if body.mass <= 0:
                continue
            body.velocity += body.force / body.mass * dt
            body.position += body.velocity * dt
