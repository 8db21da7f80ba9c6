# planet_generator/terrain.py

"""
================================================================================
FRACTAL TERRAIN HEIGHT
================================================================================
Turns unit direction vectors into displaced surface points by summing
several octaves of 3D noise.

Data Contract:
---------------
- Inputs:
    - p: The permutation table of the planet's seed.
    - directions: (N, 3) array of unit vectors.
    - settings: A validated PlanetConfig.
- Outputs:
    - Octave sums h (N,), displacement scales (N,) or displaced points (N, 3).
- Side Effects: None.
- Invariants: Only the part of h below `minimum` moves the surface. Positive
  excess height is clamped to no effect (a one-sided floor).
================================================================================
"""

import numpy as np

from . import noise
from .settings import PlanetConfig

def accumulate_octaves(p: np.ndarray, directions: np.ndarray, settings: PlanetConfig) -> np.ndarray:
    """Sums `layers` octaves of noise remapped to [0, 1]."""
    directions = np.asarray(directions, dtype=np.float64).reshape(-1, 3)
    centre = np.asarray(settings.centre, dtype=np.float64)

    h = np.zeros(len(directions))
    frequency = settings.base_roughness
    amplitude = 1.0

    for _ in range(settings.layers):
        v = noise.sample_points(p, directions * frequency + centre)
        h += (v + 1) * 0.5 * amplitude
        frequency *= settings.roughness
        amplitude *= settings.persistence

    return h

def elevation_scale(h: np.ndarray, settings: PlanetConfig) -> np.ndarray:
    """1 + min(h - minimum, 0) * strength"""
    return 1.0 + np.minimum(h - settings.minimum, 0.0) * settings.strength

def displace(p: np.ndarray, directions: np.ndarray, settings: PlanetConfig) -> np.ndarray:
    """Returns the displaced surface points for unit `directions`, scaled by the radius."""
    directions = np.asarray(directions, dtype=np.float64).reshape(-1, 3)
    scale = elevation_scale(accumulate_octaves(p, directions, settings), settings)
    return directions * (scale * settings.radius)[:, np.newaxis]

def height(direction, settings: PlanetConfig, p: np.ndarray = None) -> float:
    """
    The displacement scale for a single direction. The permutation table is
    derived from the seed unless one is passed in.
    """
    if p is None:
        p = noise.generate_permutation_table(settings.seed)
    h = accumulate_octaves(p, np.asarray(direction, dtype=np.float64), settings)
    return float(elevation_scale(h, settings)[0])
