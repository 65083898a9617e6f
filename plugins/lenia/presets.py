"""
Lenia Parameter Presets

Each preset defines an engine type and a parameter set known to produce
interesting behavior. The "engine" field selects the engine class
(lenia or multichannel); "seed" selects how the world is initialized.
Multi-channel presets give the common parameters, which the engine spreads
across its R, G and B channels.
"""

PRESETS = {
    # =====================================================================
    # SINGLE CHANNEL
    # =====================================================================
    "sandbox": {
        "engine": "lenia",
        "name": "Sandbox",
        "description": "Forgiving defaults: wide growth band, slow time step",
        "R": 8, "mu": 0.2, "sigma": 0.1, "dt": 0.05,
        "kernel_mu": 0.5, "kernel_sigma": 0.2,
        "seed": "random", "density": 0.3, "radius": 0.3,
    },
    "orbium": {
        "engine": "lenia",
        "name": "Orbium",
        "description": "Narrow growth band that supports small gliders",
        "R": 13, "mu": 0.15, "sigma": 0.015, "dt": 0.1,
        "kernel_mu": 0.5, "kernel_sigma": 0.15,
        "seed": "pattern", "density": 0.5, "radius": 0.08,
    },
    "amoeba": {
        "engine": "lenia",
        "name": "Amoeba",
        "description": "Soft blobs that drift, merge and split",
        "R": 12, "mu": 0.16, "sigma": 0.03, "dt": 0.1,
        "kernel_mu": 0.5, "kernel_sigma": 0.15,
        "seed": "blobs", "blob_count": 4,
    },
    "coral": {
        "engine": "lenia",
        "name": "Coral",
        "description": "Branching growth from a dense core",
        "R": 16, "mu": 0.12, "sigma": 0.012, "dt": 0.08,
        "kernel_mu": 0.5, "kernel_sigma": 0.18,
        "seed": "random", "density": 0.6, "radius": 0.2,
    },
    # =====================================================================
    # MULTI CHANNEL
    # =====================================================================
    "prism": {
        "engine": "multichannel",
        "name": "Prism",
        "description": "Three offset channels drifting apart in color",
        "R": 10, "mu": 0.18, "sigma": 0.08, "dt": 0.05,
        "seed": "random", "density": 0.3, "radius": 0.3,
    },
    "aurora": {
        "engine": "multichannel",
        "name": "Aurora",
        "description": "Wide kernels, slow color bands",
        "R": 14, "mu": 0.16, "sigma": 0.05, "dt": 0.04,
        "seed": "blobs", "blob_count": 5,
    },
}

PRESET_ORDERS = {
    "lenia": ["sandbox", "orbium", "amoeba", "coral"],
    "multichannel": ["prism", "aurora"],
}

ENGINE_ORDER = ["lenia", "multichannel"]

PRESET_ORDER = [k for engine in ENGINE_ORDER for k in PRESET_ORDERS[engine]]

PARAM_KEYS = ("R", "mu", "sigma", "dt", "kernel_mu", "kernel_sigma")
SEED_KEYS = {
    "random": ("density", "radius"),
    "pattern": ("density", "radius"),
    "blobs": ("blob_count",),
}


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def get_presets_for_engine(engine_name):
    """Return ordered list of preset keys for an engine."""
    return PRESET_ORDERS.get(engine_name, [])


def preset_params(preset):
    """Engine parameters of a preset (only the keys it defines)."""
    return {k: preset[k] for k in PARAM_KEYS if k in preset}


def preset_seed_kwargs(preset):
    """Keyword arguments for engine.seed() from a preset."""
    seed_type = preset.get("seed", "random")
    return {k: preset[k] for k in SEED_KEYS.get(seed_type, ()) if k in preset}


def list_presets(engine=None):
    """Return list of (key, name, description) for presets.
    If engine is specified, filter to that engine only."""
    if engine:
        keys = PRESET_ORDERS.get(engine, [])
    else:
        keys = PRESET_ORDER
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in keys if k in PRESETS]
