# planet_generator/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# We can also use it to define the public API of the package.

from .simulation import Simulation
from .clock import SimulationClock
from .lifecycle import LifecycleState, PlanetInstance, PlanetLifecycle
from .collaborators import (
    ColliderConstructionError,
    ConvexHullColliderBuilder,
    MeshStore,
    SemiImplicitEulerIntegrator,
)

__all__ = [
    "Simulation",
    "SimulationClock",
    "LifecycleState",
    "PlanetInstance",
    "PlanetLifecycle",
    "ColliderConstructionError",
    "ConvexHullColliderBuilder",
    "MeshStore",
    "SemiImplicitEulerIntegrator",
]
