# planet_generator/settings.py

"""
================================================================================
PLANET CONFIGURATION
================================================================================
This module defines PlanetConfig, the immutable record that drives one
generation pass. A config is typically built from a user dictionary (a JSON
file, a settings panel) and falls back to the internal defaults for any key
that is not provided.

Data Contract:
---------------
- Inputs: A mapping of user parameters (any subset of the PlanetConfig fields).
- Outputs: A frozen, hashable PlanetConfig. Two configs compare equal exactly
  when every field is equal, which is what change detection relies on.
- Side Effects: None.
- Invariants: A config that passed validate() has resolution >= 2,
  layers >= 1 and only finite scalars.
================================================================================
"""

import math
import numbers
from dataclasses import dataclass, asdict, replace

from . import config as DEFAULTS

class ConfigurationError(Exception):
    """Raised when planet settings are invalid and generation must not start.

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass

def _as_vector(name: str, value) -> tuple:
    try:
        vector = tuple(float(component) for component in value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' must be a sequence of three numbers, got {value!r}")
    if len(vector) != 3:
        raise ConfigurationError(f"'{name}' must have exactly three components, got {len(vector)}")
    return vector

@dataclass(frozen=True)
class PlanetConfig:
    """Parameters of one planet generation pass."""
    radius: float = DEFAULTS.DEFAULT_RADIUS
    resolution: int = DEFAULTS.DEFAULT_RESOLUTION
    seed: int = DEFAULTS.DEFAULT_SEED
    layers: int = DEFAULTS.DEFAULT_LAYERS
    base_roughness: float = DEFAULTS.DEFAULT_BASE_ROUGHNESS
    roughness: float = DEFAULTS.DEFAULT_ROUGHNESS
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE
    strength: float = DEFAULTS.DEFAULT_STRENGTH
    minimum: float = DEFAULTS.DEFAULT_MINIMUM
    centre: tuple = DEFAULTS.DEFAULT_CENTRE
    position: tuple = DEFAULTS.DEFAULT_POSITION
    scale: float = DEFAULTS.DEFAULT_SCALE

    def __post_init__(self):
        # Vectors are stored as float tuples so the record stays hashable.
        object.__setattr__(self, 'centre', _as_vector('centre', self.centre))
        object.__setattr__(self, 'position', _as_vector('position', self.position))

    @classmethod
    def from_dict(cls, user_config: dict) -> 'PlanetConfig':
        """
        Consolidates a user dictionary with the internal defaults.

        Raises:
            ConfigurationError: If a value cannot be converted to its field type.
        """
        try:
            return cls(
                radius=float(user_config.get('radius', DEFAULTS.DEFAULT_RADIUS)),
                resolution=int(user_config.get('resolution', DEFAULTS.DEFAULT_RESOLUTION)),
                seed=int(user_config.get('seed', DEFAULTS.DEFAULT_SEED)),
                layers=int(user_config.get('layers', DEFAULTS.DEFAULT_LAYERS)),
                base_roughness=float(user_config.get('base_roughness', DEFAULTS.DEFAULT_BASE_ROUGHNESS)),
                roughness=float(user_config.get('roughness', DEFAULTS.DEFAULT_ROUGHNESS)),
                persistence=float(user_config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE)),
                strength=float(user_config.get('strength', DEFAULTS.DEFAULT_STRENGTH)),
                minimum=float(user_config.get('minimum', DEFAULTS.DEFAULT_MINIMUM)),
                centre=user_config.get('centre', DEFAULTS.DEFAULT_CENTRE),
                position=user_config.get('position', DEFAULTS.DEFAULT_POSITION),
                scale=float(user_config.get('scale', DEFAULTS.DEFAULT_SCALE)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid planet configuration value: {e}") from e

    def to_dict(self) -> dict:
        """Returns a JSON-serialisable copy of the settings."""
        settings = asdict(self)
        settings['centre'] = list(self.centre)
        settings['position'] = list(self.position)
        return settings

    def with_changes(self, **changes) -> 'PlanetConfig':
        """Returns a copy of this config with some fields replaced."""
        return replace(self, **changes)

    def validate(self) -> 'PlanetConfig':
        """
        Checks every invariant a generation pass depends on. Returns self so
        it can be chained, and raises ConfigurationError on the first problem.
        """
        for name in ('resolution', 'layers', 'seed'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")

        if self.resolution < DEFAULTS.MIN_RESOLUTION:
            raise ConfigurationError(
                f"resolution must be >= {DEFAULTS.MIN_RESOLUTION} to form a triangle, got {self.resolution}"
            )
        if self.layers < DEFAULTS.MIN_LAYERS:
            raise ConfigurationError(f"layers must be >= {DEFAULTS.MIN_LAYERS}, got {self.layers}")
        if self.seed < 0:
            raise ConfigurationError(f"seed must be a non-negative integer, got {self.seed}")

        scalars = {
            'radius': self.radius,
            'base_roughness': self.base_roughness,
            'roughness': self.roughness,
            'persistence': self.persistence,
            'strength': self.strength,
            'minimum': self.minimum,
            'scale': self.scale,
        }
        for name, value in scalars.items():
            if not math.isfinite(value):
                raise ConfigurationError(f"'{name}' must be finite, got {value}")
        for name, vector in (('centre', self.centre), ('position', self.position)):
            if not all(math.isfinite(c) for c in vector):
                raise ConfigurationError(f"'{name}' must be three finite numbers, got {vector}")

        if self.radius <= 0:
            raise ConfigurationError(f"radius must be positive, got {self.radius}")
        if self.scale <= 0:
            raise ConfigurationError(f"scale must be positive, got {self.scale}")
        return self
