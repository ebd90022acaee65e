"""
GrowthSimulator - Headless frame driver for crystal growth

Runs a fixed number of engine ticks per rendered frame and lays out the
per-instance buffers a renderer uploads: committed structure first,
then the live walkers, then unused slots parked far off screen.

Usage:
    from dla_snowflake.simulator import GrowthSimulator
    sim = GrowthSimulator('snowflake', seed=7)
    positions, scales, colors, visible = sim.step()
"""

import numpy as np

from .dla import CrystalGrowthEngine
from .gradients import get_palette
from .params import GrowthParameters
from .presets import PRESET_ORDER, engine_params, get_preset

DEFAULT_TICKS_PER_FRAME = 10

# Where unused instances are parked (outside any sensible view)
HIDDEN_POSITION = 999.0

WALKER_SCALE = 1.0


class GrowthSimulator:
    """Owns one engine and the instance buffers derived from it.

    Args:
        preset_key: Initial preset name (e.g. 'snowflake', 'plate')
        ticks_per_frame: Engine steps per `step()` call; None = preset's
            value or DEFAULT_TICKS_PER_FRAME
        seed: Seed for the engine's random generator
        max_particles: Structure capacity override
    """

    def __init__(self, preset_key="snowflake", ticks_per_frame=None, seed=None,
                 max_particles=None):
        self.seed = seed
        self.max_particles = max_particles
        self._ticks_override = ticks_per_frame
        self.ticks_per_frame = DEFAULT_TICKS_PER_FRAME
        self.frame = 0
        self.engine = None
        self.preset_key = None

        self._positions = None
        self._scales = None
        self._colors = None

        self._apply_preset(preset_key)

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def apply_preset(self, key):
        """Public preset switch (restarts growth)."""
        self._apply_preset(key)

    def set_runtime_params(self, **kwargs):
        """Set runtime parameters.

        Supported keys:
            preset: Switch to named preset
            ticks_per_frame: Engine steps per frame
            palette: Named inner/outer color pair
            reset: Any truthy value restarts growth from the seed
            anything else: forwarded to the engine's set_params
        """
        engine_kwargs = {}
        for key, val in kwargs.items():
            if key == "preset":
                self.apply_preset(val)
            elif key == "ticks_per_frame":
                self.ticks_per_frame = max(0, int(val))
            elif key == "palette":
                inner, outer = get_palette(val)
                engine_kwargs["inner_color"] = inner
                engine_kwargs["outer_color"] = outer
            elif key == "reset":
                if val:
                    self.reset()
            else:
                engine_kwargs[key] = val
        if engine_kwargs:
            self.engine.set_params(**engine_kwargs)

    def reset(self):
        """Restart growth from the seed point with current parameters."""
        self.engine.reset()
        self.frame = 0
        self._allocate_buffers()

    def step(self):
        """Advance one rendered frame.

        Returns:
            Tuple of (positions, scales, colors, visible_count); the arrays
            are reused between frames
        """
        self.engine.step_n(self.ticks_per_frame)
        self.frame += 1
        return self.instance_buffers()

    def run(self, frames):
        """Advance `frames` frames, stopping early once the structure is full."""
        for _ in range(frames):
            if self.engine.is_full:
                break
            self.step()
        return self.instance_buffers()

    def instance_buffers(self):
        """Lay out structure + walkers + hidden slots.

        Returns:
            (positions (C, 3), scales (C,), colors (C, 3), visible_count)
        """
        eng = self.engine
        cap = eng.capacity
        n = eng.structure_count

        self._positions[:n] = eng.structure_positions
        self._scales[:n] = eng.scales
        self._colors[:n] = eng.colors

        walkers = eng.active_positions[:max(0, cap - n)]
        end = n + len(walkers)
        self._positions[n:end] = walkers
        self._scales[n:end] = WALKER_SCALE
        self._colors[n:end] = eng.params.outer_color

        self._positions[end:] = HIDDEN_POSITION
        self._scales[end:] = 0.0
        self._colors[end:] = 0.0

        eng.dirty = False
        return self._positions, self._scales, self._colors, end

    @property
    def stats(self):
        stats = self.engine.stats
        stats["frame"] = self.frame
        stats["preset"] = self.preset_key
        return stats

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _allocate_buffers(self):
        cap = self.engine.capacity
        if self._positions is None or len(self._positions) != cap:
            self._positions = np.zeros((cap, 3), dtype=np.float32)
            self._scales = np.zeros(cap, dtype=np.float32)
            self._colors = np.zeros((cap, 3), dtype=np.float32)

    def _create_engine(self, preset):
        """Create a new engine instance from a preset."""
        kwargs = engine_params(preset)
        if self.max_particles is not None:
            kwargs["max_particles"] = self.max_particles
        if "palette" in preset and "inner_color" not in kwargs:
            kwargs["inner_color"], kwargs["outer_color"] = get_palette(preset["palette"])
        return CrystalGrowthEngine(GrowthParameters(**kwargs), seed=self.seed)

    def _apply_preset(self, key):
        """Apply a preset: new engine, new buffers, frame counter reset."""
        preset = get_preset(key)
        if preset is None:
            raise ValueError(f"Unknown preset: {key!r}. Available: {PRESET_ORDER}")

        self.preset_key = key
        self.engine = self._create_engine(preset)
        if self._ticks_override is not None:
            self.ticks_per_frame = self._ticks_override
        else:
            self.ticks_per_frame = preset.get("ticks_per_frame", DEFAULT_TICKS_PER_FRAME)
        self.frame = 0
        self._allocate_buffers()
