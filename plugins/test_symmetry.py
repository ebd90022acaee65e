#!/usr/bin/env python3
"""
Tests for the symmetry groups.

Verifies:
1. Image counts and ordering of each group
2. Closure: images of images stay inside the orbit
3. Registry lookup
"""

import math
import numpy as np
from dla_snowflake.symmetry import (
    SYMMETRIES, SYMMETRY_ORDER, get_symmetry, mirror_xyz, six_fold, spiral,
)


def _assert_closed(generator, point, tol=1e-6):
    orbit = generator(point)
    for image in orbit:
        for again in generator(image):
            nearest = np.min(np.linalg.norm(orbit - again, axis=1))
            assert nearest < tol, f"{again} escapes orbit of {point} (off by {nearest})"


def test_image_counts():
    """Each group yields its declared number of images."""
    print("Testing image counts...")
    p = np.array([0.3, -0.2, 0.7])
    assert six_fold(p).shape == (24, 3)
    assert spiral(p).shape == (12, 3)
    assert mirror_xyz(p).shape == (8, 3)
    for name, (gen, count) in SYMMETRIES.items():
        assert len(gen(p)) == count, f"{name} count mismatch"
    print("  ✓ Image counts correct")


def test_six_fold_layout():
    """Rotation k then z-mirror, y-mirror, both."""
    print("Testing six-fold layout...")
    images = six_fold(np.array([1.0, 0.5, 0.0]))
    np.testing.assert_allclose(images[0], [1.0, 0.5, 0.0])
    np.testing.assert_allclose(images[1], [1.0, 0.5, -0.0])
    np.testing.assert_allclose(images[2], [1.0, -0.5, 0.0])
    np.testing.assert_allclose(images[3], [1.0, -0.5, -0.0])

    c, s = math.cos(math.pi / 3), math.sin(math.pi / 3)
    np.testing.assert_allclose(images[4], [c, 0.5, s], atol=1e-12)
    np.testing.assert_allclose(images[5], [c, 0.5, -s], atol=1e-12)
    np.testing.assert_allclose(images[6], [c, -0.5, s], atol=1e-12)
    np.testing.assert_allclose(images[7], [c, -0.5, -s], atol=1e-12)

    # Rotation preserves distance from the Y axis and |y|
    radial = np.hypot(images[:, 0], images[:, 2])
    np.testing.assert_allclose(radial, 1.0)
    np.testing.assert_allclose(np.abs(images[:, 1]), 0.5)
    print("  ✓ Six-fold layout correct")


def test_origin_is_degenerate():
    """The origin maps onto itself for every image."""
    print("Testing origin images...")
    for name, (gen, count) in SYMMETRIES.items():
        images = gen(np.zeros(3))
        assert len(images) == count
        assert np.all(images == 0.0), f"{name} moved the origin"
    print("  ✓ Origin images coincide")


def test_closure():
    """Re-applying a group to any image reproduces a subset of the orbit."""
    print("Testing closure...")
    rng = np.random.default_rng(42)
    for name in SYMMETRY_ORDER:
        gen, _ = get_symmetry(name)
        for _ in range(20):
            _assert_closed(gen, rng.uniform(-3, 3, size=3))
        # Points on axes and mirror planes too
        _assert_closed(gen, np.array([1.0, 0.0, 0.0]))
        _assert_closed(gen, np.array([0.0, 2.0, 0.0]))
    print("  ✓ All groups closed")


def test_unknown_symmetry():
    print("Testing unknown symmetry name...")
    try:
        get_symmetry("icosahedral")
    except ValueError as e:
        assert "six_fold" in str(e)
    else:
        raise AssertionError("Unknown symmetry should raise ValueError")
    print("  ✓ Unknown symmetry rejected")


if __name__ == "__main__":
    print("\n=== Testing Symmetry Groups ===\n")

    test_image_counts()
    test_six_fold_layout()
    test_origin_is_degenerate()
    test_closure()
    test_unknown_symmetry()

    print("\n✓ All tests passed!\n")
