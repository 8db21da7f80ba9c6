# planet_generator/generator.py

"""
================================================================================
CORE PLANET GENERATOR
================================================================================
This module contains the main PlanetGenerator class, responsible for turning
a PlanetConfig into a single cube-sphere mesh.

Data Contract:
---------------
- Inputs (on initialization):
    - config (PlanetConfig or dict): The generation parameters. A dict is
      consolidated with the internal defaults.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - MeshBuffer objects (one per face, or the assembled planet).
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed and configuration, the output is
  byte-for-byte deterministic. The assembled mesh always holds
  6 * res^2 vertices and 6 * 2 * (res - 1)^2 triangles.
================================================================================
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from . import noise
from . import terrain
from .cube_face import CubeFace, build_face
from .mesh import MeshBuffer, concatenate
from .settings import PlanetConfig

class PlanetGenerator:
    """
    Generates the mesh of a procedurally displaced cube-sphere planet.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config, logger: logging.Logger, permutation_table: np.ndarray = None):
        """
        Initializes the planet generator.

        Args:
            config (PlanetConfig | dict): Generation parameters.
            logger (logging.Logger): The logger instance for all output.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table. If None, one will be generated from the seed.

        Raises:
            ConfigurationError: If the configuration is invalid. No mesh data
                is produced in that case.
        """
        self.logger = logger
        if not isinstance(config, PlanetConfig):
            config = PlanetConfig.from_dict(config)
        self.settings = config.validate()
        self.seed = self.settings.seed

        # --- Initialize Noise ---
        if permutation_table is not None:
            self._p = permutation_table
            self.logger.debug("Initialized with injected permutation table.")
        else:
            self.logger.debug("No permutation table provided, generating new one from seed.")
            self._p = noise.generate_permutation_table(self.seed)

        # --- Expose the permutation table for baking ---
        self.permutation_table = self._p

        self.logger.info(
            f"PlanetGenerator initialized with seed: {self.seed} "
            f"(resolution {self.settings.resolution}, {self.settings.layers} layers)"
        )

    @property
    def vertex_count(self) -> int:
        return 6 * self.settings.resolution ** 2

    @property
    def triangle_count(self) -> int:
        return 6 * 2 * (self.settings.resolution - 1) ** 2

    def height(self, direction) -> float:
        """The displacement scale at a unit direction."""
        return terrain.height(direction, self.settings, p=self._p)

    def build_face(self, face: CubeFace) -> MeshBuffer:
        """Builds the partial buffer of one face."""
        mesh = build_face(face, self.settings, self._p)
        self.logger.debug(f"Built face {face.name}: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles.")
        return mesh

    def assemble(self, max_workers: int = None) -> MeshBuffer:
        """
        Builds all six faces and concatenates them in CubeFace order.

        Args:
            max_workers (int, optional): When greater than 1, faces are built
                on a thread pool. The result is identical to a serial build.
        """
        start_time = time.time()

        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                # map() yields results in submission order, not completion order.
                faces = list(pool.map(self.build_face, CubeFace))
        else:
            faces = [self.build_face(face) for face in CubeFace]

        mesh = concatenate(faces).validate()

        elapsed = time.time() - start_time
        self.logger.info(
            f"Assembled planet mesh: {mesh.vertex_count} vertices, "
            f"{mesh.triangle_count} triangles in {elapsed:.3f} seconds."
        )
        return mesh
