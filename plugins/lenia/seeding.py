"""
Reproducible initial patterns

A 16-bit seed fully determines a pattern, so a seed shown as four hex
digits is enough to recreate a starting state on another machine.
"""

import numpy as np


def create_rng(seed):
    """Seeded numpy Generator."""
    return np.random.default_rng(int(seed) & 0xFFFFFFFF)


def generate_seed():
    """Fresh random 16-bit seed."""
    return int(np.random.randint(0, 0xFFFF))


def generate_pattern_from_seed(size, seed, density=0.3, radius=0.25, smooth=True,
                               center_x=0.5, center_y=0.5):
    """Random disk of matter determined by seed.

    Args:
        size: Grid side length
        seed: Integer seed
        density: Probability that a cell inside the disk is filled
        radius: Disk radius as a fraction of size
        smooth: Fade values toward the rim instead of uniform noise
        center_x, center_y: Disk center as fractions of size

    Returns:
        (size, size) float64 array in [0, 1].
    """
    rng = create_rng(seed)
    cx, cy = center_x * size, center_y * size
    r = radius * size

    Y, X = np.ogrid[:size, :size]
    dist = np.sqrt((X - cx) ** 2 + (Y - cy) ** 2)
    filled = (dist < r) & (rng.random((size, size)) < density)
    noise = rng.random((size, size))

    if smooth and r > 0:
        edge = 1.0 - (dist / r) ** 2
        values = edge * (0.5 + noise * 0.5)
    else:
        values = noise
    return np.where(filled, np.clip(values, 0.0, 1.0), 0.0)


def generate_multi_blob_pattern(size, seed, blob_count=3):
    """Several overlapping seeded disks, clipped to 1."""
    rng = create_rng(seed)
    state = np.zeros((size, size), dtype=np.float64)
    for b in range(blob_count):
        cx = 0.2 + rng.random() * 0.6
        cy = 0.2 + rng.random() * 0.6
        radius = 0.1 + rng.random() * 0.15
        density = 0.3 + rng.random() * 0.4
        state += generate_pattern_from_seed(
            size, seed + b * 1000, density=density, radius=radius,
            smooth=True, center_x=cx, center_y=cy)
    np.clip(state, 0.0, 1.0, out=state)
    return state


def seed_to_string(seed):
    return format(seed, "04X")


def string_to_seed(text):
    """Parse a hex seed string; unparsable text yields a fresh seed."""
    try:
        return int(text, 16) & 0xFFFF
    except (TypeError, ValueError):
        return generate_seed()
