# planet_generator/mesh.py

"""
================================================================================
MESH BUFFER
================================================================================
A plain container for triangle-list geometry, as handed to a renderer or a
collider builder.

Data Contract:
---------------
- positions (N, 3) float32, normals (N, 3) float32, uvs (N, 2) float32.
- indices (M,) uint32 where M is a multiple of 3, every value < N.
- Side Effects: None. Buffers are transient; the generator does not keep them.
================================================================================
"""

import hashlib
from dataclasses import dataclass

import numpy as np

class MeshError(Exception):
    """Raised when a mesh buffer breaks one of its structural invariants."""
    pass

@dataclass
class MeshBuffer:
    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> 'MeshBuffer':
        return cls(
            positions=np.zeros((0, 3), dtype=np.float32),
            normals=np.zeros((0, 3), dtype=np.float32),
            uvs=np.zeros((0, 2), dtype=np.float32),
            indices=np.zeros(0, dtype=np.uint32),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def triangles(self) -> np.ndarray:
        """The index array viewed as (triangle_count, 3)."""
        return self.indices.reshape(-1, 3)

    def validate(self, index_limit: int = None) -> 'MeshBuffer':
        """
        Checks the buffer invariants. `index_limit` overrides the vertex count
        as the exclusive upper bound for indices, which is needed for a single
        face whose indices are already offset into the full planet range.
        """
        count = len(self.positions)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise MeshError(f"positions must have shape (N, 3), got {self.positions.shape}")
        if self.normals.shape != self.positions.shape:
            raise MeshError(f"normals shape {self.normals.shape} does not match positions {self.positions.shape}")
        if self.uvs.shape != (count, 2):
            raise MeshError(f"uvs must have shape ({count}, 2), got {self.uvs.shape}")
        if self.indices.ndim != 1 or len(self.indices) % 3 != 0:
            raise MeshError(f"index count must be a multiple of 3, got {len(self.indices)}")

        limit = count if index_limit is None else index_limit
        if len(self.indices) and int(self.indices.max()) >= limit:
            raise MeshError(f"index {int(self.indices.max())} out of range for {limit} vertices")
        return self

    def content_hash(self) -> str:
        """A SHA-256 digest of every array, used to detect identical meshes."""
        digest = hashlib.sha256()
        for array in (self.positions, self.normals, self.uvs, self.indices):
            digest.update(np.ascontiguousarray(array).tobytes())
        return digest.hexdigest()

def concatenate(buffers) -> MeshBuffer:
    """
    Joins buffers in the given order. Indices are copied as-is, so each buffer
    must already carry its global offset.
    """
    buffers = list(buffers)
    if not buffers:
        return MeshBuffer.empty()
    return MeshBuffer(
        positions=np.concatenate([b.positions for b in buffers]),
        normals=np.concatenate([b.normals for b in buffers]),
        uvs=np.concatenate([b.uvs for b in buffers]),
        indices=np.concatenate([b.indices for b in buffers]),
    )
