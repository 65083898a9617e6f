"""
Ring kernel synthesis for Lenia

The kernel is a radially symmetric shell: a Gaussian bump in normalized
radius r = d / R, peaking at r = kernel_mu and cut off at r = 1. It is built
over the whole grid around the grid center using toroidal distance, then
shifted so the center sits at (0, 0) before its FFT is cached.
"""

import numpy as np

from .errors import DegenerateKernelError
from .fft import KernelSpectrum


def _bell(x, center, width):
    """Gaussian bell curve"""
    return np.exp(-((x - center) ** 2) / (2.0 * width ** 2))


def _normalize(kernel):
    total = kernel.sum()
    if not np.isfinite(total) or total <= 0:
        raise DegenerateKernelError(
            f"kernel has no mass (sum={total}); check R, kernel_mu, kernel_sigma")
    kernel /= total
    return kernel


def toroidal_distance(size, cx, cy):
    """(size, size) array of wrapped Euclidean distances to (cx, cy)."""
    coords = np.arange(size, dtype=np.float64)
    dx = coords[np.newaxis, :] - cx
    dy = coords[:, np.newaxis] - cy
    half = size / 2
    dx = np.where(dx > half, dx - size, np.where(dx < -half, dx + size, dx))
    dy = np.where(dy > half, dy - size, np.where(dy < -half, dy + size, dy))
    return np.sqrt(dx * dx + dy * dy)


def generate_kernel(size, R, kernel_mu=0.5, kernel_sigma=0.15):
    """Build a normalized ring kernel centered on the grid.

    Args:
        size: Grid side length
        R: Kernel radius in cells
        kernel_mu: Radial position of the ring peak [0-1]
        kernel_sigma: Ring width

    Returns:
        (size, size) float64 array summing to 1.

    Raises:
        DegenerateKernelError: R <= 0 or the ring has zero total mass.
    """
    if not R > 0:
        raise DegenerateKernelError(f"kernel radius must be positive, got {R!r}")

    r = toroidal_distance(size, size / 2, size / 2) / R
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        kernel = np.where(r < 1, _bell(r, kernel_mu, kernel_sigma), 0.0)
    return _normalize(kernel)


def generate_multi_kernel(size, R, kernel_params):
    """Weighted sum of ring kernels, renormalized.

    Each entry of kernel_params is a dict with optional keys
    "scale" (radius multiplier), "mu", "sigma" and "weight".
    """
    kernel = np.zeros((size, size), dtype=np.float64)
    for params in kernel_params:
        single = generate_kernel(
            size,
            R * params.get("scale", 1.0),
            kernel_mu=params.get("mu", 0.5),
            kernel_sigma=params.get("sigma", 0.15),
        )
        kernel += single * params.get("weight", 1.0)
    return _normalize(kernel)


def fft_shift(kernel, size):
    """Cyclically shift by size/2 on both axes so the center lands at (0, 0)."""
    half = size // 2
    grid = np.reshape(kernel, (size, size))
    return np.roll(grid, (-half, -half), axis=(0, 1))


def precompute_kernel_fft(fft, kernel, size):
    """Forward transform of the shifted kernel, as a KernelSpectrum."""
    real = np.array(fft_shift(kernel, size), dtype=np.float64)
    imag = np.zeros_like(real)
    fft.forward(real, imag)
    return KernelSpectrum(real, imag)
