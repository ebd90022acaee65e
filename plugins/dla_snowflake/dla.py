"""
DLA Snowflake - Symmetric Diffusion-Limited Aggregation in 3D

Walkers spawn on a (vertically squashed) sphere and drift toward the
origin with a biased random walk. When a walker comes within three
particle radii of the structure it sticks: the point is expanded by the
symmetry group and every image is committed. The structure only grows,
and growth stops silently once the store is full.

Distances are anisotropic: the Y component is divided by
`vertical_factor` before measuring, so a flattened flake collides the
same way it was spawned.
"""

import math
import numpy as np
from scipy.spatial import cKDTree

from .engine_base import GrowthEngine
from .gradients import lerp, lerp_colors
from .params import GrowthParameters, SIZE_KEYS, COLOR_KEYS
from .symmetry import get_symmetry

ORIGIN = np.zeros(3, dtype=np.float64)


class CrystalGrowthEngine(GrowthEngine):

    engine_name = "dla"
    engine_label = "DLA Snowflake"

    def __init__(self, params=None, seed=None, **overrides):
        """
        Args:
            params: GrowthParameters (copied); defaults when None
            seed: Seed for the walk's random generator (None = fresh entropy)
            **overrides: Individual GrowthParameters fields applied on top
        """
        super().__init__()
        self.params = params.copy() if params is not None else GrowthParameters()
        if overrides:
            self.params.update(**overrides)
        self.rng = np.random.default_rng(seed)
        self._load_symmetry()
        self._init_state()

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def _init_state(self):
        cap = max(0, self.params.max_particles)
        self._capacity = cap
        self._positions = np.zeros((cap, 3), dtype=np.float64)
        self._scales = np.zeros(cap, dtype=np.float64)
        self._colors = np.zeros((cap, 3), dtype=np.float64)
        self._count = 0
        self._active = np.zeros((0, 3), dtype=np.float64)
        self._ages = np.zeros(0, dtype=np.int64)
        self._tree = None
        self._tree_count = 0
        self.generation = 0
        # Set whenever stored points change; the renderer clears it after upload
        self.dirty = True
        self.add_point(ORIGIN)

    def reset(self):
        """Drop everything and reseed with the origin, exactly as on construction.

        A changed `max_particles` takes effect here.
        """
        self._init_state()

    def clear(self):
        """Empty structure and walkers without reseeding."""
        self._count = 0
        self._positions[:] = 0.0
        self._scales[:] = 0.0
        self._colors[:] = 0.0
        self._active = np.zeros((0, 3), dtype=np.float64)
        self._ages = np.zeros(0, dtype=np.int64)
        self._tree = None
        self._tree_count = 0
        self.generation = 0
        self.dirty = True

    def _load_symmetry(self):
        self._symmetry, self.images_per_point = get_symmetry(self.params.symmetry)

    # -----------------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------------

    def symmetry_images(self, point):
        """Image set of `point` under the configured symmetry group."""
        return self._symmetry(point)

    def add_point(self, point):
        """Commit `point` and all its symmetry images.

        Images that do not fit are dropped silently.

        Returns:
            Number of images actually appended
        """
        images = self._symmetry(point)
        room = self._capacity - self._count
        n = min(len(images), max(0, room))
        if n == 0:
            return 0

        start = self._count
        end = start + n
        self._positions[start:end] = images[:n]
        r = np.arange(start, end, dtype=np.float64) / self._capacity
        self._scales[start:end] = lerp(self.params.inner_size_multiplier,
                                       self.params.outer_size_multiplier, r)
        self._colors[start:end] = lerp_colors(self.params.inner_color,
                                              self.params.outer_color, r)
        self._count = end
        self.dirty = True
        return n

    def recompute_sizes(self):
        """Recompute every stored scale from its index and current params."""
        r = self.radial_parameters
        self._scales[:self._count] = lerp(self.params.inner_size_multiplier,
                                          self.params.outer_size_multiplier, r)
        self.dirty = True

    def recompute_colors(self):
        """Recompute every stored color from its index and current params."""
        r = self.radial_parameters
        self._colors[:self._count] = lerp_colors(self.params.inner_color,
                                                 self.params.outer_color, r)
        self.dirty = True

    # -----------------------------------------------------------------------
    # Walkers
    # -----------------------------------------------------------------------

    def spawn_candidate(self):
        """Uniform point on the spawn sphere, Y squashed by vertical_factor."""
        u1, u2 = self.rng.random(2)
        phi = u1 * math.pi * 2
        theta = math.acos(u2 * 2 - 1)
        radius = self.params.spawn_radius
        return np.array([
            radius * math.sin(theta) * math.cos(phi),
            radius * math.sin(theta) * math.sin(phi) * self.params.vertical_factor,
            radius * math.cos(theta),
        ])

    def add_walker(self, point):
        """Inject a walker at `point`, bypassing the spawn budget."""
        point = np.asarray(point, dtype=np.float64).reshape(1, 3)
        self._active = np.vstack([self._active, point])
        self._ages = np.append(self._ages, 0)

    def _room_to_spawn(self):
        n_active = len(self._active)
        if n_active >= self.params.max_active:
            return False
        # Every pending walker may turn into a full image set
        pending = self._count + n_active * self.images_per_point
        return pending < self._capacity

    def _move_walkers(self):
        """Drift every walker toward the origin and add jitter."""
        walkers = self._active
        norms = np.linalg.norm(walkers, axis=1, keepdims=True)
        # A walker sitting on the origin gets no drift this step
        direction = np.divide(-walkers, norms, out=np.zeros_like(walkers),
                              where=norms > 0)
        jitter = (self.rng.random(walkers.shape) - 0.5) * self.params.randomness
        jitter[:, 1] *= self.params.vertical_factor
        walkers += direction * self.params.step_size + jitter

    def collides(self, point):
        """True if `point` is strictly within 3 particle radii of the structure."""
        if self._count == 0:
            return False
        threshold = self.params.particle_radius * 3
        vf = self.params.vertical_factor
        # A flat or non-finite Y scale leaves nothing a tree can index
        if self.params.collision == "kdtree" and vf != 0 and np.isfinite(vf):
            return self._collides_kdtree(point, threshold)

        delta = self._positions[:self._count] - point
        with np.errstate(divide="ignore", invalid="ignore"):
            delta[:, 1] /= self.params.vertical_factor
        dist = np.sqrt(np.einsum("ij,ij->i", delta, delta))
        return bool((dist < threshold).any())

    def _collides_kdtree(self, point, threshold):
        vf = self.params.vertical_factor
        if self._tree is None or self._tree_count != self._count:
            squashed = self._positions[:self._count].copy()
            with np.errstate(divide="ignore", invalid="ignore"):
                squashed[:, 1] /= vf
            self._tree = cKDTree(squashed)
            self._tree_count = self._count
        query = np.array(point, dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            query[1] /= vf
        dist, _ = self._tree.query(query)
        return bool(dist < threshold)

    def step(self):
        """Advance one tick: spawn, walk, collide, commit.

        Returns:
            Number of structure points appended this tick
        """
        if self._room_to_spawn():
            self.add_walker(self.spawn_candidate())

        added = 0
        if len(self._active):
            self._move_walkers()
            self._ages += 1
            keep = np.ones(len(self._active), dtype=bool)
            # Reverse order: walkers checked later see points committed earlier
            for i in range(len(self._active) - 1, -1, -1):
                if self.collides(self._active[i]):
                    added += self.add_point(self._active[i])
                    keep[i] = False

            max_age = self.params.max_walker_age
            if max_age > 0:
                keep &= self._ages < max_age

            if not keep.all():
                self._active = self._active[keep]
                self._ages = self._ages[keep]

        self.generation += 1
        return added

    # -----------------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------------

    @staticmethod
    def _readonly(view):
        view.flags.writeable = False
        return view

    @property
    def capacity(self):
        return self._capacity

    @property
    def structure_count(self):
        return self._count

    @property
    def active_count(self):
        return len(self._active)

    @property
    def structure_positions(self):
        return self._readonly(self._positions[:self._count])

    @property
    def active_positions(self):
        return self._readonly(self._active[:])

    @property
    def radial_parameters(self):
        """Insertion index / capacity for every committed point."""
        if self._capacity == 0:
            return np.zeros(0, dtype=np.float64)
        return np.arange(self._count, dtype=np.float64) / self._capacity

    @property
    def scales(self):
        return self._readonly(self._scales[:self._count])

    @property
    def colors(self):
        return self._readonly(self._colors[:self._count])

    @property
    def stats(self):
        stats = super().stats
        stats["active"] = self.active_count
        if self._count:
            radii = np.linalg.norm(self._positions[:self._count], axis=1)
            stats["extent"] = float(radii.max())
        else:
            stats["extent"] = 0.0
        return stats

    # -----------------------------------------------------------------------
    # Parameters
    # -----------------------------------------------------------------------

    def set_params(self, **params):
        """Update parameters. Recomputes sizes/colors when their endpoints change."""
        changed = self.params.update(**params)
        if "symmetry" in changed:
            self._load_symmetry()
        if changed & {"vertical_factor", "collision"}:
            self._tree = None
        if changed & set(SIZE_KEYS):
            self.recompute_sizes()
        if changed & set(COLOR_KEYS):
            self.recompute_colors()
        return changed

    def get_params(self):
        return self.params.as_dict()

    @classmethod
    def get_slider_defs(cls):
        return [
            {"key": "randomness", "label": "Randomness", "section": "WALK",
             "min": 0.0, "max": 2.0, "default": 0.9, "fmt": ".2f"},
            {"key": "step_size", "label": "Drift", "section": "WALK",
             "min": 0.0, "max": 0.2, "default": 0.02, "fmt": ".3f"},
            {"key": "vertical_factor", "label": "Flatness", "section": "WALK",
             "min": 0.1, "max": 1.0, "default": 0.8, "fmt": ".2f"},
            {"key": "spawn_radius", "label": "Spawn radius", "section": "WALK",
             "min": 1.0, "max": 20.0, "default": 10.0, "fmt": ".1f"},
            {"key": "max_active", "label": "Walkers", "section": "WALK",
             "min": 1, "max": 200, "default": 50, "fmt": ".0f", "step": 1},
            {"key": "particle_radius", "label": "Particle radius", "section": "SHAPE",
             "min": 0.01, "max": 0.3, "default": 0.08, "fmt": ".3f"},
            {"key": "inner_size_multiplier", "label": "Inner size", "section": "SHAPE",
             "min": 0.1, "max": 2.0, "default": 0.6, "fmt": ".2f"},
            {"key": "outer_size_multiplier", "label": "Outer size", "section": "SHAPE",
             "min": 0.1, "max": 2.0, "default": 1.0, "fmt": ".2f"},
        ]
