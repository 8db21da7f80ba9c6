# planet_generator/__init__.py

# This file makes the 'planet_generator' directory a Python package.
# The core modules are imported by name, e.g.
#   from planet_generator.generator import PlanetGenerator

from .settings import PlanetConfig, ConfigurationError
from .generator import PlanetGenerator
from .mesh import MeshBuffer, MeshError
from .gravity import Body, GravitySolver, PhysicsError

__all__ = [
    "PlanetConfig",
    "ConfigurationError",
    "PlanetGenerator",
    "MeshBuffer",
    "MeshError",
    "Body",
    "GravitySolver",
    "PhysicsError",
]
