"""
Color Gradients for Crystal Rendering

Structure points are tinted by interpolating between an inner and an
outer color using their radial parameter. Colors are float RGB in [0, 1];
endpoints can be given as hex strings ("#1a6be6"), 0-255 integer tuples
or 0-1 float tuples.
"""

import colorsys
import numpy as np


def hsl(h, s, l):
    """Float RGB triple from hue/saturation/lightness in [0, 1]."""
    return colorsys.hls_to_rgb(h, l, s)


def parse_color(value):
    """
    Normalize a color to a float64 RGB array in [0, 1].

    Args:
        value: "#rrggbb" / "rrggbb" string, or a 3-sequence. Sequences
            containing any component above 1 are treated as 0-255.
    """
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(c * 2 for c in text)
        if len(text) != 6:
            raise ValueError(f"Bad hex color: {value!r}")
        rgb = np.array([int(text[i:i + 2], 16) for i in (0, 2, 4)], dtype=np.float64)
        return rgb / 255.0

    rgb = np.asarray(value, dtype=np.float64).reshape(3)
    if rgb.max() > 1.0:
        rgb = rgb / 255.0
    return np.clip(rgb, 0.0, 1.0)


def to_hex(rgb):
    """Float RGB -> "#rrggbb"."""
    r, g, b = (int(round(c * 255)) for c in np.clip(rgb, 0.0, 1.0))
    return f"#{r:02x}{g:02x}{b:02x}"


def lerp(a, b, t):
    """Linear interpolation; `t` may be a scalar or an array."""
    return a + (b - a) * t


def lerp_colors(inner, outer, t):
    """
    Interpolate colors for one or many radial parameters.

    Args:
        inner, outer: float RGB arrays (3,)
        t: scalar or (n,) array of radial parameters

    Returns:
        (3,) array for scalar t, (n, 3) array otherwise
    """
    t = np.asarray(t, dtype=np.float64)
    if t.ndim == 0:
        return inner + (outer - inner) * t
    return inner[None, :] + (outer - inner)[None, :] * t[:, None]


# --- Gradient Definitions (inner, outer) ---

PALETTES = {
    # Default look: saturated blue core fading to white tips
    "ice": ("#1a6be6", "#ffffff"),
    "frost": ("#0b2f4f", "#bfefff"),
    "aurora": ("#113d2a", "#9dffcf"),
    "ember": ("#5a0f05", "#ffd27a"),
    "amethyst": ("#2a0a4a", "#f0c8ff"),
}

PALETTE_ORDER = list(PALETTES.keys())


def get_palette(name):
    """Return (inner, outer) float RGB arrays for a palette name."""
    if name not in PALETTES:
        raise ValueError(f"Unknown palette: {name!r}. Available: {PALETTE_ORDER}")
    inner, outer = PALETTES[name]
    return parse_color(inner), parse_color(outer)
