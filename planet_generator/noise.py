# planet_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides functions for generating 3D Perlin noise. It is designed
to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array, 512 entries).
    - x, y, z: 1D NumPy arrays of sample coordinates.
    - seed: An integer used to derive a permutation table.
- Outputs:
    - A NumPy array of noise values (approximately in the range [-1, 1]).
- Side Effects: None.
- Invariants: The same (point, seed) pair always yields the same value. The
  shape of the output array matches the shape of the input coordinates.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# The 12 edge-midpoint gradients of a cube, padded to 16 so that a 4-bit hash
# can index them without a modulo bias.
_GRADIENT_VECTORS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    [1, 1, 0], [-1, 1, 0], [0, -1, 1], [0, -1, -1],
], dtype=np.float64)

def generate_permutation_table(seed: int) -> np.ndarray:
    """
    Builds the doubled permutation table for a seed. Different seeds shuffle
    the lattice differently and therefore produce different noise fields.
    """
    p = np.arange(DEFAULTS.PERMUTATION_SIZE, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y, z):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h & 15]
    return g[0] * x + g[1] * y + g[2] * z

@njit(nogil=True)
def perlin_noise_3d(p, x, y, z):
    """
    Generate 3D Perlin noise for flat coordinate arrays using a pre-computed
    permutation table. JIT-compiled with Numba; the explicit loop compiles to
    efficient machine code and releases the GIL.
    """
    n = x.shape[0]
    out = np.zeros(n)

    for i in range(n):
        xi = int(np.floor(x[i]))
        yi = int(np.floor(y[i]))
        zi = int(np.floor(z[i]))

        xf = x[i] - xi
        yf = y[i] - yi
        zf = z[i] - zi

        u = _fade(xf)
        v = _fade(yf)
        w = _fade(zf)

        X = xi & 255
        Y = yi & 255
        Z = zi & 255

        a = p[X] + Y
        aa = p[a] + Z
        ab = p[a + 1] + Z
        b = p[X + 1] + Y
        ba = p[b] + Z
        bb = p[b + 1] + Z

        x1 = _lerp(_gradient(p[aa], xf, yf, zf), _gradient(p[ba], xf - 1, yf, zf), u)
        x2 = _lerp(_gradient(p[ab], xf, yf - 1, zf), _gradient(p[bb], xf - 1, yf - 1, zf), u)
        y1 = _lerp(x1, x2, v)

        x1 = _lerp(_gradient(p[aa + 1], xf, yf, zf - 1), _gradient(p[ba + 1], xf - 1, yf, zf - 1), u)
        x2 = _lerp(_gradient(p[ab + 1], xf, yf - 1, zf - 1), _gradient(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
        y2 = _lerp(x1, x2, v)

        out[i] = _lerp(y1, y2, w)

    return out

def sample_points(p: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Samples noise for an (N, 3) array of points."""
    points = np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 3)
    return perlin_noise_3d(p, points[:, 0].copy(), points[:, 1].copy(), points[:, 2].copy())

def sample(point, seed: int) -> float:
    """Samples the noise field of `seed` at a single 3D point."""
    p = generate_permutation_table(seed)
    return float(sample_points(p, np.asarray(point, dtype=np.float64))[0])
