# planet_generator/runtime/simulation.py

"""
================================================================================
SIMULATION
================================================================================
This module provides the user-facing `Simulation` class, the frame-stepped
driver that ties the planet lifecycle, the gravity solver and a rigid-body
integrator together.

Per frame:
    1. The lifecycle checks the configuration and regenerates on change.
    2. The clock converts the frame time into fixed steps.
    3. For each step the solver refreshes all forces, then the integrator
       advances the bodies.
================================================================================
"""

import logging

import numpy as np

from ..gravity import Body, GravitySolver
from ..settings import PlanetConfig
from .clock import SimulationClock
from .collaborators import RigidBodyIntegrator
from .lifecycle import PlanetLifecycle

class Simulation:
    """The main runtime class. Single-threaded; each update runs to completion."""

    def __init__(self, lifecycle: PlanetLifecycle, solver: GravitySolver,
                 integrator: RigidBodyIntegrator, clock: SimulationClock = None):
        self.logger = logging.getLogger(__name__)
        self.lifecycle = lifecycle
        self.solver = solver
        self.integrator = integrator
        self.clock = clock or SimulationClock()

    @property
    def bodies(self) -> tuple:
        return self.solver.bodies

    def add_body(self, position, mass: float, velocity=(0.0, 0.0, 0.0), name: str = "body") -> Body:
        """Registers an extra massive body, such as a moon or a probe."""
        body = Body(position=position, mass=mass, velocity=np.asarray(velocity, dtype=np.float64), name=name)
        self.solver.register(body)
        self.logger.info(f"Added body '{name}' with mass {mass:.4g}.")
        return body

    def remove_body(self, body: Body):
        self.solver.deregister(body)
        self.logger.info(f"Removed body '{body.name}'.")

    def step(self):
        """Runs one fixed physics step."""
        self.solver.step()
        self.integrator.advance(self.solver.bodies, self.clock.fixed_timestep)

    def update(self, real_delta_time: float, config: PlanetConfig) -> int:
        """
        Updates the simulation. Should be called once per frame.

        Args:
            real_delta_time (float): The real-world time elapsed since the last frame, in seconds.
            config (PlanetConfig): The current planet configuration.

        Returns:
            int: The number of physics steps that were run.
        """
        self.lifecycle.update(config)

        steps = self.clock.update(real_delta_time)
        for _ in range(steps):
            self.step()
        return steps

    def set_game_speed(self, new_scale: float):
        """
        Sets the speed of simulated time.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.clock.set_speed(new_scale)
        self.logger.info(f"Simulation speed set to {new_scale}x.")

    def shutdown(self):
        self.lifecycle.destroy()
