# planet_generator/baker.py

"""
================================================================================
PLANET BAKER
================================================================================
Writes a generated planet to a portable package on disk and loads it back.

Package layout:
    <output_dir>/
        mesh.npz                 positions, normals, uvs, indices
        manifest.json            name, counts and the mesh content hash
        generation_config.json   the PlanetConfig that produced the mesh

Data Contract:
---------------
- bake_planet(generator, output_dir, logger) -> manifest (dict)
- load_baked_planet(package_path) -> (MeshBuffer, PlanetConfig, manifest)
- Side Effects: Creates files under output_dir.
- Invariants: Loading verifies the content hash, so a package that loads is
  byte-identical to what was baked.
================================================================================
"""

import json
import logging
import os
import time

import numpy as np

from .generator import PlanetGenerator
from .mesh import MeshBuffer, MeshError
from .settings import PlanetConfig

MESH_FILENAME = "mesh.npz"
MANIFEST_FILENAME = "manifest.json"
GENERATION_CONFIG_FILENAME = "generation_config.json"

def bake_planet(generator: PlanetGenerator, output_dir: str, logger: logging.Logger,
                planet_name: str = None) -> dict:
    """
    Generates the full planet mesh and saves it as a package.

    Returns:
        dict: The manifest that was written.
    """
    start_time = time.time()

    # 1. Create directory structure
    os.makedirs(output_dir, exist_ok=True)
    logger.info(f"Output directory set to '{output_dir}'")

    # 2. Generate the mesh
    mesh = generator.assemble()
    content_hash = mesh.content_hash()

    # 3. Save the mesh arrays
    np.savez_compressed(
        os.path.join(output_dir, MESH_FILENAME),
        positions=mesh.positions,
        normals=mesh.normals,
        uvs=mesh.uvs,
        indices=mesh.indices,
    )

    # 4. Save the manifest file
    manifest = {
        "planet_name": planet_name or f"Planet_Seed{generator.seed}",
        "resolution": generator.settings.resolution,
        "vertex_count": mesh.vertex_count,
        "triangle_count": mesh.triangle_count,
        "content_hash": content_hash,
    }
    with open(os.path.join(output_dir, MANIFEST_FILENAME), 'w') as f:
        json.dump(manifest, f, indent=4)

    # 5. Save the "birth certificate" generation_config.json
    with open(os.path.join(output_dir, GENERATION_CONFIG_FILENAME), 'w') as f:
        json.dump(generator.settings.to_dict(), f, indent=4)

    logger.info("--- Bake Complete ---")
    logger.info(f"Vertices: {mesh.vertex_count}, triangles: {mesh.triangle_count}")
    logger.info(f"Content hash: {content_hash}")
    logger.info(f"Total time: {time.time() - start_time:.2f} seconds.")
    return manifest

def load_baked_planet(package_path: str) -> tuple:
    """
    Loads a baked planet package.

    Raises:
        FileNotFoundError: A required file is missing.
        MeshError: The stored mesh does not match the manifest.
    """
    mesh_path = os.path.join(package_path, MESH_FILENAME)
    manifest_path = os.path.join(package_path, MANIFEST_FILENAME)
    config_path = os.path.join(package_path, GENERATION_CONFIG_FILENAME)

    for path in (mesh_path, manifest_path, config_path):
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Could not find '{os.path.basename(path)}' in '{package_path}'")

    with open(manifest_path, 'r') as f:
        manifest = json.load(f)
    with open(config_path, 'r') as f:
        config = PlanetConfig.from_dict(json.load(f))

    with np.load(mesh_path) as data:
        mesh = MeshBuffer(
            positions=data['positions'],
            normals=data['normals'],
            uvs=data['uvs'],
            indices=data['indices'],
        )
    mesh.validate()

    if mesh.content_hash() != manifest.get("content_hash"):
        raise MeshError(f"Mesh in '{package_path}' does not match its manifest hash.")
    return mesh, config, manifest
