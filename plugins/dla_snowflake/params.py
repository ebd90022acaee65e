"""
Growth Parameters

Named configuration for the crystal growth engine. Values are plain
numbers (colors are float RGB arrays); nothing is range-checked, so odd
values produce odd geometry rather than errors.
"""

import numpy as np

from .gradients import hsl, parse_color
from .symmetry import get_symmetry


# Parameters whose change only requires a size pass over existing points
SIZE_KEYS = ("inner_size_multiplier", "outer_size_multiplier")
# Parameters whose change only requires a color pass over existing points
COLOR_KEYS = ("inner_color", "outer_color")

COLLISION_MODES = ("scan", "kdtree")

DEFAULTS = {
    "particle_radius": 0.08,
    "inner_size_multiplier": 0.6,
    "outer_size_multiplier": 1.0,
    "inner_color": hsl(0.6, 0.8, 0.5),   # blue
    "outer_color": (1.0, 1.0, 1.0),      # to white
    "randomness": 0.9,
    "vertical_factor": 0.8,              # < 1 flattens the flake
    "spawn_radius": 10.0,
    "step_size": 0.02,
    "max_active": 50,
    "max_particles": 5000,
    "symmetry": "six_fold",
    "max_walker_age": 0,                 # 0 = walkers never expire
    "collision": "scan",                 # "scan" or "kdtree"
}


class GrowthParameters:
    """Configuration for `CrystalGrowthEngine`.

    Attribute names match the keys of DEFAULTS. Colors are stored as
    float RGB arrays regardless of how they were given.
    """

    __slots__ = tuple(DEFAULTS.keys())

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown growth parameters: {sorted(unknown)}")
        for key, default in DEFAULTS.items():
            self._assign(key, kwargs.get(key, default))

    @staticmethod
    def _convert(key, value):
        """Normalize one field value; raises ValueError for bad names."""
        if key in COLOR_KEYS:
            return parse_color(value)
        if key in ("max_active", "max_particles", "max_walker_age"):
            return int(value)
        if key == "symmetry":
            get_symmetry(value)
            return value
        if key == "collision":
            if value not in COLLISION_MODES:
                raise ValueError(f"Unknown collision mode: {value!r}. "
                                 f"Available: {list(COLLISION_MODES)}")
            return value
        return float(value)

    def _assign(self, key, value):
        object.__setattr__(self, key, self._convert(key, value))

    def __setattr__(self, key, value):
        if key not in DEFAULTS:
            raise AttributeError(f"GrowthParameters has no field {key!r}")
        self._assign(key, value)

    def update(self, **kwargs):
        """Set known fields; unknown keys and None values are skipped.

        All values are converted first, so a bad value leaves every field
        untouched. Returns the set of keys whose value actually changed.
        """
        staged = {key: self._convert(key, value) for key, value in kwargs.items()
                  if key in DEFAULTS and value is not None}
        changed = set()
        for key, value in staged.items():
            if not _same(getattr(self, key), value):
                object.__setattr__(self, key, value)
                changed.add(key)
        return changed

    def copy(self):
        return GrowthParameters(**self.as_dict())

    def as_dict(self):
        """Plain dict snapshot (colors as float RGB tuples)."""
        out = {}
        for key in DEFAULTS:
            value = getattr(self, key)
            if key in COLOR_KEYS:
                value = tuple(float(c) for c in value)
            out[key] = value
        return out

    def __eq__(self, other):
        if not isinstance(other, GrowthParameters):
            return NotImplemented
        return all(_same(getattr(self, k), getattr(other, k)) for k in DEFAULTS)

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"GrowthParameters({fields})"


def _same(a, b):
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return a == b
