# planet_generator/runtime/lifecycle.py

"""
================================================================================
PLANET LIFECYCLE
================================================================================
Keeps exactly one generated planet alive for the current configuration. On
every tick the manager compares the incoming config with the one it last
generated; only a change triggers work.

A planet instance is the bundle (mesh handle, collider, gravity body). The
replacement for a changed config is built completely before the running
instance is touched, then swapped in. If building fails, the running planet
stays active and the error goes to the caller.

States: ABSENT -> GENERATING -> ACTIVE -> REGENERATING -> ACTIVE ... -> DESTROYED
================================================================================
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .. import config as DEFAULTS
from ..generator import PlanetGenerator
from ..gravity import Body, GravitySolver
from ..settings import PlanetConfig, ConfigurationError
from .collaborators import Collider, ColliderBuilder, MeshConsumer

class LifecycleState(Enum):
    ABSENT = "absent"
    GENERATING = "generating"
    ACTIVE = "active"
    REGENERATING = "regenerating"
    DESTROYED = "destroyed"

@dataclass
class PlanetInstance:
    """Everything the runtime owns for one generated planet."""
    config: PlanetConfig
    mesh_handle: object
    collider: Collider
    body: Body

class PlanetLifecycle:
    """Regenerates the planet whenever its configuration changes."""

    def __init__(self, solver: GravitySolver, mesh_consumer: MeshConsumer,
                 collider_builder: ColliderBuilder, density: float = DEFAULTS.DEFAULT_DENSITY,
                 name: str = "planet", max_workers: int = None):
        """
        Args:
            solver (GravitySolver): Where the planet's body is registered.
            mesh_consumer (MeshConsumer): Receives each generated mesh.
            collider_builder (ColliderBuilder): Builds the collision shape.
            density (float): Planet mass is density times collider volume.
            name (str): Used for the body name and in log messages.
            max_workers (int, optional): Thread count for face generation.
        """
        if not np.isfinite(density) or density < 0:
            raise ConfigurationError(f"density must be a finite, non-negative number, got {density}")

        self.logger = logging.getLogger(__name__)
        self.solver = solver
        self.mesh_consumer = mesh_consumer
        self.collider_builder = collider_builder
        self.density = density
        self.name = name
        self.max_workers = max_workers

        self.state = LifecycleState.ABSENT
        self.instance = None
        self.generation_count = 0
        # (config, exception) of the last failed attempt.
        self._failed = None

    @property
    def body(self) -> Body:
        return self.instance.body if self.instance else None

    @property
    def last_config(self) -> PlanetConfig:
        """The config of the active planet, used purely for change detection."""
        return self.instance.config if self.instance else None

    @property
    def last_error(self) -> Exception:
        """The error of the last failed attempt, cleared by the next success."""
        return self._failed[1] if self._failed else None

    def update(self, config: PlanetConfig) -> bool:
        """
        Called once per tick. Generates the planet on first use and rebuilds it
        when `config` differs from the last generated one.

        Returns:
            bool: True if a planet was (re)generated during this call.
            A config that already failed once is not retried; it returns False
            until a different config arrives.

        Raises:
            ConfigurationError: The new config is invalid.
            ColliderConstructionError: The new mesh could not get a collider.
        """
        if self.state is LifecycleState.DESTROYED:
            raise RuntimeError(f"Lifecycle for '{self.name}' has been destroyed.")
        if self.instance is not None and config == self.instance.config:
            return False
        if self._failed is not None and config == self._failed[0]:
            return False

        previous_state = self.state
        self.state = LifecycleState.GENERATING if self.instance is None else LifecycleState.REGENERATING
        self.logger.info(f"Planet '{self.name}': {self.state.value} (seed {config.seed}, resolution {config.resolution}).")

        try:
            replacement = self._build_instance(config)
        except Exception as e:
            self.state = previous_state
            self._failed = (config, e)
            if self.instance is not None:
                self.logger.error(f"Regeneration of '{self.name}' failed; keeping the previous planet.")
            raise

        self._swap(replacement)
        self._failed = None
        self.state = LifecycleState.ACTIVE
        self.generation_count += 1
        self.logger.info(
            f"Planet '{self.name}' active: mass {replacement.body.mass:.4g}, "
            f"generation #{self.generation_count}."
        )
        return True

    def destroy(self):
        """Releases the active planet's mesh and removes its body from gravity."""
        if self.instance is not None:
            self.solver.deregister(self.instance.body)
            self.mesh_consumer.remove(self.instance.mesh_handle)
            self.instance = None
        self.state = LifecycleState.DESTROYED
        self.logger.info(f"Planet '{self.name}' destroyed.")

    def _build_instance(self, config: PlanetConfig) -> PlanetInstance:
        generator = PlanetGenerator(config, logger=self.logger)
        mesh = generator.assemble(max_workers=self.max_workers)
        collider = self.collider_builder.build(mesh, config.scale)

        body = Body(
            position=np.array(config.position, dtype=np.float64),
            mass=self.density * collider.volume,
            name=self.name,
        )
        # The mesh goes to the renderer last, so a failure above leaves
        # nothing behind that would need cleaning up.
        mesh_handle = self.mesh_consumer.add(mesh)
        return PlanetInstance(config=config, mesh_handle=mesh_handle, collider=collider, body=body)

    def _swap(self, replacement: PlanetInstance):
        old = self.instance
        if old is None:
            self.solver.register(replacement.body)
        else:
            self.solver.replace(old.body, replacement.body)
            self.mesh_consumer.remove(old.mesh_handle)
        self.instance = replacement
