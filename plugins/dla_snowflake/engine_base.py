"""
Abstract Base Class for Growth Engines

Growth engines own a point cloud that only ever grows, plus whatever
transient state drives the growth. Shells (simulator, CLI, renderers)
talk to engines through this interface only.
"""

from abc import ABC, abstractmethod


class GrowthEngine(ABC):
    """Base class for point-cloud growth engines."""

    engine_name = ""   # e.g. "dla"
    engine_label = ""  # e.g. "DLA Snowflake"

    def __init__(self):
        self.generation = 0

    @abstractmethod
    def step(self):
        """Advance one tick. Returns the number of points committed."""

    def step_n(self, n):
        """Advance n ticks. Returns total points committed."""
        added = 0
        for _ in range(n):
            added += self.step()
        return added

    @abstractmethod
    def set_params(self, **params):
        """Update engine parameters."""

    @abstractmethod
    def get_params(self):
        """Return dict of current parameter values."""

    @abstractmethod
    def reset(self):
        """Return to the freshly seeded state."""

    @abstractmethod
    def clear(self):
        """Drop all points without reseeding."""

    @property
    @abstractmethod
    def structure_count(self):
        """Number of committed points."""

    @property
    @abstractmethod
    def capacity(self):
        """Maximum number of committed points."""

    @property
    def is_full(self):
        return self.structure_count >= self.capacity

    @property
    def stats(self):
        """Return current growth statistics."""
        return {
            "generation": self.generation,
            "points": self.structure_count,
            "capacity": self.capacity,
            "fill_pct": self.structure_count / self.capacity * 100 if self.capacity else 100.0,
        }

    @classmethod
    @abstractmethod
    def get_slider_defs(cls):
        """Return list of tunable parameter definitions.

        Each entry is a dict:
            {"key": "randomness", "label": "Randomness", "section": "WALK",
             "min": 0.0, "max": 2.0, "default": 0.9,
             "fmt": ".2f", "step": None}
        """
