"""
Crystal Growth Parameter Presets

Each preset overrides GrowthParameters defaults with a combination known
to grow a recognizable shape. Keys other than "name", "description",
"palette" and "ticks_per_frame" are passed straight to the engine.
"""

PRESETS = {
    "snowflake": {
        "name": "Snowflake",
        "description": "Six-fold flake with flattened vertical growth",
        "symmetry": "six_fold",
        "randomness": 0.9, "vertical_factor": 0.8,
        "spawn_radius": 10.0, "step_size": 0.02,
        "palette": "ice",
    },
    "plate": {
        "name": "Plate",
        "description": "Very flat hexagonal plate",
        "symmetry": "six_fold",
        "randomness": 0.7, "vertical_factor": 0.25,
        "spawn_radius": 8.0, "step_size": 0.03,
        "palette": "frost",
    },
    "dendrite": {
        "name": "Dendrite",
        "description": "Thin, far-reaching arms from a low-noise walk",
        "symmetry": "six_fold",
        "randomness": 0.35, "vertical_factor": 0.6,
        "spawn_radius": 12.0, "step_size": 0.05,
        "particle_radius": 0.06,
        "palette": "ice",
    },
    "spiral": {
        "name": "Spiral",
        "description": "Rotational symmetry with a vertical mirror only",
        "symmetry": "spiral",
        "randomness": 0.9, "vertical_factor": 0.8,
        "spawn_radius": 10.0, "step_size": 0.02,
        "palette": "aurora",
    },
    "cube": {
        "name": "Mirror Cube",
        "description": "Three-plane mirror symmetry, boxy growth",
        "symmetry": "mirror_xyz",
        "randomness": 0.8, "vertical_factor": 1.0,
        "spawn_radius": 10.0, "step_size": 0.03,
        "palette": "ember",
    },
    "bloom": {
        "name": "Dense Bloom",
        "description": "Many walkers, big particles, quick fill",
        "symmetry": "six_fold",
        "randomness": 1.2, "vertical_factor": 0.9,
        "spawn_radius": 6.0, "step_size": 0.04,
        "particle_radius": 0.1, "max_active": 120,
        "inner_size_multiplier": 0.8, "outer_size_multiplier": 1.3,
        "palette": "amethyst", "ticks_per_frame": 20,
    },
}

# Keys that belong to the shell, not the engine
SHELL_KEYS = ("name", "description", "palette", "ticks_per_frame")

PRESET_ORDER = list(PRESETS.keys())


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def engine_params(preset):
    """Engine keyword arguments of a preset (shell keys stripped)."""
    return {k: v for k, v in preset.items() if k not in SHELL_KEYS}


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER]
