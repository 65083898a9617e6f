"""
Growth functions

The growth function G maps the neighborhood potential U (the kernel
convolution) to a growth rate in [-1, 1]: positive values grow a cell,
negative values decay it. The engine never evaluates G directly in its
step loop; it reads a precomputed table with floor quantization.
"""

import numpy as np


DEFAULT_RESOLUTION = 2048


def gaussian_growth(u, mu, sigma):
    """G(u) = 2 * exp(-((u - mu)^2) / (2 sigma^2)) - 1"""
    return 2.0 * np.exp(-((u - mu) ** 2) / (2.0 * sigma ** 2)) - 1.0


def multi_peak_growth(u, peaks):
    """Maximum weighted growth over several Gaussian peaks.

    Args:
        u: Potential (scalar or array)
        peaks: Iterable of dicts with "mu", "sigma" and optional "weight"
    """
    best = np.full(np.shape(u), -1.0)
    for peak in peaks:
        g = gaussian_growth(u, peak["mu"], peak["sigma"]) * peak.get("weight", 1.0)
        best = np.maximum(best, g)
    return best if np.ndim(u) else float(best)


def step_growth(u, birth_low, birth_high, survival_low, survival_high):
    """Game-of-Life style step rule: 1 in the birth band, 0 in the survival band, else -1."""
    u = np.asarray(u, dtype=np.float64)
    out = np.where((u >= survival_low) & (u <= survival_high), 0.0, -1.0)
    out = np.where((u >= birth_low) & (u <= birth_high), 1.0, out)
    return out if out.ndim else float(out)


def create_growth_table(mu, sigma, resolution=DEFAULT_RESOLUTION):
    """Sample gaussian_growth at resolution evenly spaced points over [0, 1]."""
    # Per-sample evaluation keeps every entry bit-identical to a scalar call.
    return np.array(
        [gaussian_growth(i / (resolution - 1), mu, sigma) for i in range(resolution)],
        dtype=np.float64,
    )


def growth_index(table, u):
    resolution = len(table)
    index = np.floor(np.asarray(u, dtype=np.float64) * (resolution - 1))
    return np.clip(index, 0, resolution - 1).astype(np.intp)


def lookup_growth(table, u):
    """Table growth at floor(u * (resolution - 1)), clamped to the table."""
    values = table[growth_index(table, u)]
    return values if np.ndim(values) else float(values)


def apply_growth_table(potential, state, table, dt, out=None):
    """clip(state + dt * G(potential), 0, 1), using the lookup table."""
    result = state + dt * table[growth_index(table, potential)]
    return np.clip(result, 0.0, 1.0, out=out)
