#!/usr/bin/env python3
"""
Tests for the headless shell around the growth engine.

Verifies:
1. GrowthSimulator instance-buffer layout and runtime params
2. Preset registry
3. Gradient helpers
4. Top-down renderer and CLI
"""

import os
import tempfile
import numpy as np
from dla_snowflake.__main__ import main
from dla_snowflake.gradients import get_palette, lerp_colors, parse_color, to_hex
from dla_snowflake.presets import PRESET_ORDER, engine_params, get_preset, list_presets
from dla_snowflake.renderer import render_topdown
from dla_snowflake.simulator import HIDDEN_POSITION, GrowthSimulator


def test_instance_buffer_layout():
    """Structure first, then walkers, then parked hidden slots."""
    print("Testing instance buffer layout...")
    sim = GrowthSimulator("snowflake", ticks_per_frame=5, seed=3, max_particles=300)
    positions, scales, colors, visible = sim.step()
    eng = sim.engine

    assert positions.shape == (300, 3)
    assert scales.shape == (300,)
    assert colors.shape == (300, 3)
    n = eng.structure_count
    assert visible == n + eng.active_count
    assert eng.active_count == 5, "One walker spawned per tick"

    np.testing.assert_allclose(positions[:n], eng.structure_positions, atol=1e-6)
    np.testing.assert_allclose(positions[n:visible], eng.active_positions, atol=1e-5)
    np.testing.assert_allclose(scales[n:visible], 1.0)
    assert np.all(positions[visible:] == HIDDEN_POSITION)
    assert np.all(scales[visible:] == 0.0)
    assert not eng.dirty, "Reading the buffers clears the dirty flag"
    print("  ✓ Buffer layout correct")


def test_run_stops_when_full():
    print("Testing run() saturation stop...")
    sim = GrowthSimulator("bloom", seed=4, max_particles=120)
    sim.run(5000)
    assert sim.engine.is_full
    frames = sim.frame
    sim.run(10)
    assert sim.frame == frames, "No frames run once full"
    print(f"  ✓ Filled in {frames} frames")


def test_runtime_params():
    print("Testing runtime params...")
    sim = GrowthSimulator("snowflake", seed=0, max_particles=200)
    sim.step()

    sim.set_runtime_params(palette="frost", randomness=0.4, ticks_per_frame=3)
    inner, outer = get_palette("frost")
    np.testing.assert_allclose(sim.engine.colors[0], inner)
    assert sim.engine.params.randomness == 0.4
    assert sim.ticks_per_frame == 3

    sim.set_runtime_params(reset=True)
    assert sim.frame == 0
    assert sim.engine.structure_count == 24

    sim.set_runtime_params(preset="cube")
    assert sim.preset_key == "cube"
    assert sim.engine.images_per_point == 8
    print("  ✓ Runtime params applied")


def test_every_preset_runs():
    print("Testing presets...")
    assert [k for k, _, _ in list_presets()] == PRESET_ORDER
    for key in PRESET_ORDER:
        preset = get_preset(key)
        assert "name" not in engine_params(preset)
        sim = GrowthSimulator(key, seed=1, max_particles=100, ticks_per_frame=2)
        _, _, _, visible = sim.step()
        assert visible >= sim.engine.structure_count
    assert get_preset("missing") is None
    try:
        GrowthSimulator("missing")
    except ValueError:
        pass
    else:
        raise AssertionError("Unknown preset should raise ValueError")
    print("  ✓ All presets run")


def test_gradients():
    print("Testing gradient helpers...")
    np.testing.assert_allclose(parse_color("#ffffff"), [1, 1, 1])
    np.testing.assert_allclose(parse_color("#fff"), [1, 1, 1])
    np.testing.assert_allclose(parse_color((255, 0, 0)), [1, 0, 0])
    np.testing.assert_allclose(parse_color((0.2, 0.4, 0.6)), [0.2, 0.4, 0.6])
    assert to_hex(parse_color("#1a6be6")) == "#1a6be6"
    try:
        parse_color("#12345")
    except ValueError:
        pass
    else:
        raise AssertionError("Malformed hex should raise ValueError")

    inner, outer = np.zeros(3), np.ones(3)
    np.testing.assert_allclose(lerp_colors(inner, outer, 0.25), [0.25] * 3)
    assert lerp_colors(inner, outer, np.linspace(0, 1, 7)).shape == (7, 3)
    print("  ✓ Gradients correct")


def test_render_topdown():
    print("Testing top-down renderer...")
    positions = np.array([[0.0, 0.0, 0.0], [999.0, 999.0, 999.0]])
    scales = np.array([1.0, 0.0])
    colors = np.array([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]])

    empty = render_topdown(positions, scales, colors, 0, size=32)
    assert empty.shape == (32, 32, 3) and empty.dtype == np.uint8
    assert empty.max() == 0

    img = render_topdown(positions, scales, colors, 1, size=32, opacity=1.0)
    assert img[16, 16].tolist() == [255, 255, 255]
    assert img[0, 0].tolist() == [0, 0, 0]

    sim = GrowthSimulator("snowflake", seed=2, max_particles=200)
    positions, scales, colors, visible = sim.run(50)
    img = render_topdown(positions, scales, colors, visible, size=64)
    assert img.shape == (64, 64, 3)
    assert img.max() > 0
    print("  ✓ Renderer correct")


def test_cli():
    print("Testing CLI...")
    assert main(["--list"]) == 0
    assert main(["not_a_preset"]) == 2
    assert main(["--frames", "many"]) == 2
    with tempfile.TemporaryDirectory() as tmp:
        out = os.path.join(tmp, "flake.png")
        assert main(["plate", "--frames", "5", "--particles", "80",
                     "--size", "48", "--seed", "3", "--out", out]) == 0
        assert os.path.exists(out)
    print("  ✓ CLI working")


if __name__ == "__main__":
    print("\n=== Testing Simulator Shell ===\n")

    test_instance_buffer_layout()
    test_run_stops_when_full()
    test_runtime_params()
    test_every_preset_runs()
    test_gradients()
    test_render_topdown()
    test_cli()

    print("\n✓ All tests passed!\n")
