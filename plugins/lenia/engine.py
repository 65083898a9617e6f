"""
Lenia - Continuous Cellular Automaton Engine

A continuous generalization of Conway's Game of Life where:
- States are continuous [0, 1] instead of binary
- Neighborhoods use a smooth ring kernel instead of discrete counts
- Growth/decay is governed by a Gaussian growth function
- Time steps are fractional for smooth evolution

Update rule: A(t + dt) = clip(A(t) + dt * G(K * A), 0, 1)

The convolution K * A runs through FFT2D on a toroidal grid; G is read from a
quantized lookup table rebuilt only when mu or sigma change.

Reference: Bert Chan, "Lenia - Biology of Artificial Life" (2020)
"""

import numpy as np

from .engine_base import LeniaBase
from .errors import SizeMismatchError
from .growth import DEFAULT_RESOLUTION, apply_growth_table, create_growth_table
from .kernel import generate_kernel, precompute_kernel_fft
from .params import LeniaConfig, LeniaParams, invalidated


class LeniaEngine(LeniaBase):

    engine_name = "lenia"
    engine_label = "Lenia"

    def __init__(self, size=256, R=8, mu=0.2, sigma=0.1, dt=0.05,
                 kernel_mu=0.5, kernel_sigma=0.2, fft=None,
                 growth_resolution=DEFAULT_RESOLUTION):
        """
        Args:
            size: Grid dimension (size x size), a power of two
            R: Kernel radius in cells
            mu: Growth function center (neighborhood density that promotes growth)
            sigma: Growth function width (tolerance around mu)
            dt: Time step
            kernel_mu: Radial peak position of the kernel ring [0-1]
            kernel_sigma: Width of the kernel ring
            fft: Optional FFT2D shared with other engines
            growth_resolution: Number of entries in the growth lookup table
        """
        super().__init__(size, fft)
        self.growth_resolution = growth_resolution
        self.params = LeniaParams(R=R, mu=mu, sigma=sigma, dt=dt,
                                  kernel_mu=kernel_mu, kernel_sigma=kernel_sigma)

        self.world = np.zeros((self.size, self.size), dtype=np.float64)
        self._next_world = np.zeros_like(self.world)

        self.kernel_fft = self._build_kernel(self.params)
        self.growth_table = self._build_growth_table(self.params)

    def _build_kernel(self, params):
        """Build the ring kernel and return its cached spectrum."""
        kernel = generate_kernel(self.size, params.R,
                                 kernel_mu=params.kernel_mu,
                                 kernel_sigma=params.kernel_sigma)
        return precompute_kernel_fft(self.fft, kernel, self.size)

    def _build_growth_table(self, params):
        return create_growth_table(params.mu, params.sigma, self.growth_resolution)

    def advance(self):
        """Convolve, grow and swap buffers without touching statistics."""
        U = self.fft.convolve(self.world, self.kernel_fft)
        apply_growth_table(U, self.world, self.growth_table, self.params.dt,
                           out=self._next_world)
        self.world, self._next_world = self._next_world, self.world
        return self.world

    def step(self):
        """Advance one time step. Returns the world state."""
        self.advance()
        self._update_stats(self.world)
        self.stats["step"] += 1
        return self.world

    def set_params(self, **params):
        """Update parameters. Rebuilds the kernel or growth table only if their inputs change.

        Accepts field names (kernel_mu) or interchange names (kernelMu);
        unknown keys are ignored. Nothing changes if a rebuild fails.
        """
        self._commit_params(self._prepare_params(params))

    def _prepare_params(self, params):
        """Merge params and build whatever they invalidate, without committing."""
        new = self.params.merged(params)
        rebuild_kernel, rebuild_growth = invalidated(self.params, new)
        kernel_fft = self._build_kernel(new) if rebuild_kernel else self.kernel_fft
        growth_table = self._build_growth_table(new) if rebuild_growth else self.growth_table
        return new, kernel_fft, growth_table

    def _commit_params(self, prepared):
        self.params, self.kernel_fft, self.growth_table = prepared

    def get_params(self):
        return self.params.model_dump()

    def get_state(self):
        return self.world

    def set_state(self, state):
        self.world[...] = self._coerce_field(state)

    def clear(self):
        self.world.fill(0.0)
        self._next_world.fill(0.0)
        self.stats["step"] = 0
        self.stats["mass"] = 0.0

    def randomize(self, density=0.3, radius=0.3, seed=None):
        """Random values in a central disk of radius * size cells.

        Each cell in the disk is filled with probability density.
        """
        self.clear()
        rng = np.random.default_rng(seed)
        shape = self.world.shape
        filled = self._disk_mask(radius * self.size) & (rng.random(shape) < density)
        self.world[filled] = rng.random(shape)[filled]

    def place_pattern(self, pattern, x, y, scale=1):
        stamp = self._pattern_stamp(pattern, x, y, scale)
        if stamp is None:
            return
        index, values = stamp
        np.add.at(self.world, index, values)
        np.clip(self.world, 0.0, 1.0, out=self.world)

    def draw_circle(self, x, y, radius, value=1.0):
        rows, cols = self._circle_cells(x, y, radius)
        self.world[rows, cols] = min(1.0, max(0.0, value))

    def get_value(self, x, y):
        px, py = self._wrap(x, y)
        return float(self.world[py, px])

    def set_value(self, x, y, value):
        px, py = self._wrap(x, y)
        self.world[py, px] = min(1.0, max(0.0, value))

    def export_config(self):
        return {
            "size": self.size,
            "params": self.params.export(),
            "state": self.world.ravel().tolist(),
            "stats": self.get_stats(),
        }

    def import_config(self, config):
        if config.get("size") != self.size:
            raise SizeMismatchError(self.size, config.get("size"))
        parsed = LeniaConfig.model_validate(config)
        state = self._coerce_field(parsed.state)

        self.set_params(**parsed.params.model_dump())
        self.world[...] = state
        self._next_world.fill(0.0)
        self.stats = {**self._initial_stats(), **parsed.stats}
        self.stats["step"] = int(self.stats["step"])
        self._prev_center = (self.stats["centerX"], self.stats["centerY"])
