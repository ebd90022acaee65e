"""
Top-down Point Splatter

Fixed orthographic view straight down the Y axis: X maps to image
columns, Z to image rows. Each instance is drawn as a flat disc of
radius particle_radius * scale, alpha-blended over what is below it
(lower Y first, so the upper layer ends up on top).
"""

import math
import numpy as np


def auto_extent(positions, count, particle_radius=0.08, margin=1.1):
    """Half-width of the view that fits every visible point in X/Z."""
    if count == 0:
        return max(particle_radius * 4, 1e-3)
    pts = positions[:count]
    finite = np.isfinite(pts).all(axis=1)
    if not finite.any():
        return max(particle_radius * 4, 1e-3)
    reach = float(np.abs(pts[finite][:, [0, 2]]).max())
    return max(reach * margin + particle_radius, particle_radius * 4)


def render_topdown(positions, scales, colors, count, size=512, extent=None,
                   particle_radius=0.08, opacity=0.5, background=(0.0, 0.0, 0.0)):
    """
    Splat the first `count` instances into an RGB image.

    Args:
        positions: (N, 3) instance positions
        scales: (N,) instance scales
        colors: (N, 3) float RGB in [0, 1]
        count: Number of leading instances to draw
        size: Output image is size x size
        extent: Half-width of the view in world units (None = fit)
        particle_radius: Disc radius at scale 1
        opacity: Per-disc alpha
        background: Float RGB fill

    Returns:
        (size, size, 3) uint8 RGB image
    """
    img = np.empty((size, size, 3), dtype=np.float32)
    img[:] = background
    if count <= 0:
        return (np.clip(img, 0, 1) * 255).astype(np.uint8)

    if extent is None:
        extent = auto_extent(positions, count, particle_radius)
    px_per_unit = size / (2.0 * extent)

    pts = np.asarray(positions[:count], dtype=np.float64)
    order = np.argsort(pts[:, 1], kind="stable")

    for i in order:
        x, _, z = pts[i]
        if not (math.isfinite(x) and math.isfinite(z)):
            continue
        r = particle_radius * float(scales[i]) * px_per_unit
        if r <= 0:
            continue
        # Always cover the nearest pixel center
        r = max(r, 0.75)
        cx = (x + extent) * px_per_unit
        cy = (z + extent) * px_per_unit
        x0 = max(0, int(math.floor(cx - r)))
        x1 = min(size, int(math.ceil(cx + r)) + 1)
        y0 = max(0, int(math.floor(cy - r)))
        y1 = min(size, int(math.ceil(cy + r)) + 1)
        if x0 >= x1 or y0 >= y1:
            continue

        Y, X = np.ogrid[y0:y1, x0:x1]
        mask = (X + 0.5 - cx) ** 2 + (Y + 0.5 - cy) ** 2 <= r * r
        patch = img[y0:y1, x0:x1]
        patch[mask] = patch[mask] * (1.0 - opacity) + np.asarray(colors[i]) * opacity

    return (np.clip(img, 0, 1) * 255).astype(np.uint8)
