# bake_planet.py

"""
================================================================================
OFFLINE PLANET BAKER SCRIPT
================================================================================
This script is a command-line tool for generating planet meshes ahead of time
and saving each one as a portable package ("baking"). One package is written
per seed.

Usage:
    python bake_planet.py --config path/to/your/config.json
    python bake_planet.py --config config.json --seeds 1 2 3 --output baked_planets
================================================================================
"""
import os
import sys
import json
import logging
import argparse
from tqdm import tqdm

# Add project root to Python path to allow importing from planet_generator
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from planet_generator.generator import PlanetGenerator
from planet_generator.settings import PlanetConfig, ConfigurationError
from planet_generator.baker import bake_planet
from planet_generator import config as DEFAULTS

def bake_planets(config_path: str, output_root: str, seeds: list = None) -> bool:
    """
    Loads a configuration and bakes one planet package per seed.
    Returns True if every package was written.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Baker")

    # 2. --- Load Configuration ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return False

    planet_params = config.get('planet_generation_parameters', {})
    try:
        base_config = PlanetConfig.from_dict(planet_params).validate()
    except ConfigurationError as e:
        logger.critical(f"Invalid planet configuration: {e}")
        return False

    if not seeds:
        seeds = [planet_params.get('seed', DEFAULTS.DEFAULT_SEED)]

    # 3. --- Main Baking Loop ---
    logger.info(f"Baking {len(seeds)} planet(s) into '{output_root}'...")
    for seed in tqdm(seeds, desc="Baking Planets"):
        output_dir = os.path.join(output_root, f"seed_{seed}")
        try:
            generator = PlanetGenerator(base_config.with_changes(seed=seed), logger=logger)
            bake_planet(generator, output_dir, logger)
        except ConfigurationError as e:
            logger.critical(f"Seed {seed} rejected: {e}")
            return False

    logger.info(f"Baked planet packages saved to: {output_root}")
    return True

# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Offline Planet Baker for the procedural planet generator.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON configuration file for the planet to be baked."
    )
    parser.add_argument(
        "--output",
        type=str,
        default="baked_planets",
        help="Directory that receives one package per seed."
    )
    parser.add_argument(
        "--seeds",
        type=int,
        nargs="*",
        help="Bake one planet per seed instead of the seed in the config file."
    )
    args = parser.parse_args()

    success = bake_planets(args.config, args.output, args.seeds)
    sys.exit(0 if success else 1)
