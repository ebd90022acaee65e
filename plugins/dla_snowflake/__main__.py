"""
DLA Snowflake - Headless Runner

Usage:
    python -m dla_snowflake [preset] [--frames N] [--ticks N] [--seed N]
                            [--particles N] [--size N] [--out PATH]

Examples:
    python -m dla_snowflake
    python -m dla_snowflake plate --frames 3000
    python -m dla_snowflake dendrite --seed 7 --size 1024
    python -m dla_snowflake all --frames 500

Grows the crystal for the given number of frames (stopping early once
the structure is full) and saves a top-down PNG.

Use --list to see all available presets.
"""

import os
import sys
import time

from .presets import PRESET_ORDER, list_presets
from .renderer import render_topdown
from .simulator import GrowthSimulator

DEFAULT_OUT_DIR = "screenshots"


def snap(preset, frames, ticks, seed, particles, size, out):
    """Run one or all presets headless and save a PNG for each."""
    from PIL import Image

    presets_to_snap = [preset] if preset != "all" else PRESET_ORDER

    for pkey in presets_to_snap:
        sim = GrowthSimulator(pkey, ticks_per_frame=ticks, seed=seed,
                              max_particles=particles)
        print(f"[DLA] {pkey}: up to {frames} frames x {sim.ticks_per_frame} ticks...",
              end="", flush=True)
        t0 = time.time()
        positions, scales, colors, visible = sim.run(frames)
        elapsed = time.time() - t0
        stats = sim.stats
        print(f" {stats['points']}/{stats['capacity']} points, "
              f"{stats['frame']} frames, {elapsed:.1f}s")

        rgb = render_topdown(positions, scales, colors, visible, size=size,
                             particle_radius=sim.engine.params.particle_radius)

        if out and len(presets_to_snap) == 1:
            path = out
        else:
            path = os.path.join(out or DEFAULT_OUT_DIR, f"dla_{pkey}.png")
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        Image.fromarray(rgb).save(path)
        print(f"[DLA] saved: {path}")


def main(argv=None):
    preset = "snowflake"
    frames = 2000
    ticks = None
    seed = None
    particles = None
    size = 768
    out = None

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    try:
        while i < len(args):
            arg = args[i]
            if arg == "--frames" and i + 1 < len(args):
                frames = int(args[i + 1])
                i += 2
            elif arg == "--ticks" and i + 1 < len(args):
                ticks = int(args[i + 1])
                i += 2
            elif arg == "--seed" and i + 1 < len(args):
                seed = int(args[i + 1])
                i += 2
            elif arg == "--particles" and i + 1 < len(args):
                particles = int(args[i + 1])
                i += 2
            elif arg == "--size" and i + 1 < len(args):
                size = int(args[i + 1])
                i += 2
            elif arg == "--out" and i + 1 < len(args):
                out = args[i + 1]
                i += 2
            elif arg == "--list":
                print("\nAvailable presets:")
                for key, name, desc in list_presets():
                    print(f"    {key:16s} {name:20s} {desc}")
                print()
                return 0
            elif arg in ("--help", "-h"):
                print(__doc__)
                return 0
            elif arg in PRESET_ORDER or arg == "all":
                preset = arg
                i += 1
            else:
                print(f"Unknown argument: {arg}")
                print("Use --list to see available presets")
                return 2
    except ValueError as e:
        print(f"Bad value for {args[i]}: {e}")
        return 2

    snap(preset, frames, ticks, seed, particles, size, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
