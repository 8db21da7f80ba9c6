# planet_generator/cube_face.py

"""
================================================================================
CUBE-FACE MESH BUILDER
================================================================================
Builds the displaced grid for one of the six faces of a cube-sphere.

Data Contract:
---------------
- Inputs:
    - face (CubeFace): Which face to build. Its value is the face order.
    - settings (PlanetConfig): A validated configuration.
    - p: The permutation table of the planet's seed.
- Outputs:
    - A MeshBuffer with resolution^2 vertices and 2 * (resolution - 1)^2
      triangles whose indices lie in [order * res^2, (order + 1) * res^2).
- Side Effects: None. Faces share no state and can be built in any order.
- Invariants: Faces are generated independently and share no vertices along
  their borders, so small cracks can appear at the cube edges.
================================================================================
"""

from enum import IntEnum

import numpy as np

from . import terrain
from .mesh import MeshBuffer
from .settings import PlanetConfig

class CubeFace(IntEnum):
    """The six faces in their fixed generation order. The value is the face order."""
    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    @property
    def local_up(self) -> np.ndarray:
        return _LOCAL_UP[self].copy()

    def basis(self) -> tuple:
        """Returns (local_up, axis_a, axis_b) for this face."""
        return face_basis(self.local_up)

_LOCAL_UP = {
    CubeFace.POS_X: np.array([1.0, 0.0, 0.0]),
    CubeFace.NEG_X: np.array([-1.0, 0.0, 0.0]),
    CubeFace.POS_Y: np.array([0.0, 1.0, 0.0]),
    CubeFace.NEG_Y: np.array([0.0, -1.0, 0.0]),
    CubeFace.POS_Z: np.array([0.0, 0.0, 1.0]),
    CubeFace.NEG_Z: np.array([0.0, 0.0, -1.0]),
}

def face_basis(local_up: np.ndarray) -> tuple:
    """
    Derives the tangent axes of a face from its outward axis. axis_a is the
    cyclic permutation (y, z, x) of local_up and axis_b = local_up x axis_a,
    which keeps (axis_a, axis_b, local_up) right-handed on every face.
    """
    local_up = np.asarray(local_up, dtype=np.float64)
    axis_a = np.array([local_up[1], local_up[2], local_up[0]])
    axis_b = np.cross(local_up, axis_a)
    return local_up, axis_a, axis_b

def grid_directions(face: CubeFace, resolution: int) -> np.ndarray:
    """Unit sphere directions of the face grid in row-major (z, x) order."""
    local_up, axis_a, axis_b = face.basis()
    t = np.arange(resolution) / (resolution - 1) * 2 - 1
    z_scaled, x_scaled = np.meshgrid(t, t, indexing='ij')

    points = (
        local_up
        + axis_a * x_scaled.reshape(-1, 1)
        + axis_b * z_scaled.reshape(-1, 1)
    )
    return points / np.linalg.norm(points, axis=1, keepdims=True)

def grid_indices(resolution: int, offset: int = 0) -> np.ndarray:
    """
    Two triangles per grid cell, (i, i+res+1, i+res) and (i, i+1, i+res+1),
    for every cell except the last row and column.
    """
    cells = np.arange(resolution - 1)
    z, x = np.meshgrid(cells, cells, indexing='ij')
    i = (z * resolution + x).ravel()

    triangles = np.stack([
        i, i + resolution + 1, i + resolution,
        i, i + 1, i + resolution + 1,
    ], axis=1)
    return (triangles.ravel() + offset).astype(np.uint32)

def build_face(face: CubeFace, settings: PlanetConfig, p: np.ndarray) -> MeshBuffer:
    """Builds one face's partial buffer with globally offset indices."""
    resolution = settings.resolution
    directions = grid_directions(face, resolution)
    positions = terrain.displace(p, directions, settings).astype(np.float32)

    return MeshBuffer(
        positions=positions,
        # The displaced position stands in for the surface normal.
        normals=positions.copy(),
        uvs=positions[:, :2].copy(),
        indices=grid_indices(resolution, offset=int(face) * resolution * resolution),
    )
