# planet_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to PlanetConfig.from_dict().
================================================================================
"""

# --- Noise Generation ---
DEFAULT_SEED = 1337
# Size of the gradient-noise lattice permutation. The table is stored twice
# (512 entries) so that nested lookups never need a modulo.
PERMUTATION_SIZE = 256

# --- Planet Shape ---
DEFAULT_RADIUS = 1.0
# Vertices along one edge of a cube face. 2 is the smallest grid that still
# forms a quad (two triangles).
DEFAULT_RESOLUTION = 32
MIN_RESOLUTION = 2

# --- Fractal Terrain ---
DEFAULT_LAYERS = 4
MIN_LAYERS = 1
DEFAULT_BASE_ROUGHNESS = 1.0
DEFAULT_ROUGHNESS = 2.0
DEFAULT_PERSISTENCE = 0.5
DEFAULT_STRENGTH = 0.2
# The summed octave height below which terrain is pushed inwards. With the
# defaults above the octave sum lies in [0, 1.875], so 1.0 carves basins
# into roughly half of the surface.
DEFAULT_MINIMUM = 1.0
DEFAULT_CENTRE = (0.0, 0.0, 0.0)

# --- Placement ---
DEFAULT_POSITION = (0.0, 0.0, 0.0)
DEFAULT_SCALE = 1.0

# --- Physics ---
# Mass of a generated planet is density * collider volume (in scaled units).
DEFAULT_DENSITY = 1.0
# Gravity is expressed in "mass units": the constant is folded into the masses.
GRAVITATIONAL_CONSTANT = 1.0
# Squared distance below which two bodies are treated as coincident.
COINCIDENT_DISTANCE_SQ = 1e-12

# --- Simulation Clock ---
FIXED_TIMESTEP_SECONDS = 1.0 / 60.0
INITIAL_TIME_SCALE = 1.0
# Upper bound on fixed steps per rendered frame, so a long stall cannot
# trigger an unbounded catch-up loop.
MAX_STEPS_PER_FRAME = 5
