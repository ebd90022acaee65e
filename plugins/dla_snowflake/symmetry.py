"""
Symmetry Groups for Crystal Growth

Each group maps one committed point to the full set of its images. The
engine appends every image, so whatever the walkers hit, the structure
stays symmetric without tracking a reduced subspace.

Images are returned as an (n, 3) float64 array. They are not deduplicated:
a point lying on an axis or mirror plane yields coincident images, which
simply consume extra capacity.
"""

import math
import numpy as np


NUM_ROTATIONS = 6  # 6-fold, like real snowflakes

_ANGLES = np.array([2.0 * math.pi * k / NUM_ROTATIONS for k in range(NUM_ROTATIONS)])
_COS = np.cos(_ANGLES)
_SIN = np.sin(_ANGLES)


def _rotations_about_y(point):
    """Rotate `point` through the six 60 degree steps about the Y axis."""
    x, y, z = float(point[0]), float(point[1]), float(point[2])
    rotated = np.empty((NUM_ROTATIONS, 3), dtype=np.float64)
    rotated[:, 0] = x * _COS - z * _SIN
    rotated[:, 1] = y
    rotated[:, 2] = x * _SIN + z * _COS
    return rotated


def six_fold(point):
    """6-fold rotation about Y combined with Z and Y reflections (24 images).

    For each rotation p_k the images are emitted in the order
    p_k, (x, y, -z), (x, -y, z), (x, -y, -z).
    """
    rotated = _rotations_about_y(point)
    images = np.repeat(rotated, 4, axis=0)
    images[1::4, 2] *= -1.0
    images[2::4, 1] *= -1.0
    images[3::4, 1] *= -1.0
    images[3::4, 2] *= -1.0
    return images


def spiral(point):
    """6-fold rotation about Y with reflection across the XZ plane (12 images)."""
    rotated = _rotations_about_y(point)
    images = np.repeat(rotated, 2, axis=0)
    images[1::2, 1] *= -1.0
    return images


def mirror_xyz(point):
    """Mirror across the XY, YZ and XZ planes: all 8 sign combinations."""
    x, y, z = float(point[0]), float(point[1]), float(point[2])
    return np.array([
        (x, y, z),
        (-x, y, z),
        (x, -y, z),
        (x, y, -z),
        (-x, -y, z),
        (-x, y, -z),
        (x, -y, -z),
        (-x, -y, -z),
    ], dtype=np.float64)


# Registry of symmetry groups: name -> (generator, images per point)
SYMMETRIES = {
    "six_fold": (six_fold, 24),
    "spiral": (spiral, 12),
    "mirror_xyz": (mirror_xyz, 8),
}

SYMMETRY_ORDER = list(SYMMETRIES.keys())


def get_symmetry(name):
    """Return (generator, images_per_point) for a symmetry group name."""
    try:
        return SYMMETRIES[name]
    except KeyError:
        raise ValueError(f"Unknown symmetry: {name!r}. "
                         f"Available: {SYMMETRY_ORDER}") from None
