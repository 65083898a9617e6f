"""
Abstract Base Class for Lenia Engines

Both the single-channel and the three-channel engine implement this
interface so renderers, audio and game layers can drive either one
interchangeably. The base class owns the grid contract (power-of-two size,
toroidal wrapping, [0, 1] clipping), the shared FFT2D and the statistics.
"""

import math
from abc import ABC, abstractmethod

import numpy as np

from .errors import ConfigurationError, StateShapeError
from .fft import FFT2D
from .seeding import generate_multi_blob_pattern, generate_pattern_from_seed, generate_seed


class LeniaBase(ABC):
    """Base class for Lenia engines."""

    engine_name = ""   # e.g. "lenia", "multichannel"
    engine_label = ""  # e.g. "Lenia", "Multi-Channel Lenia"

    def __init__(self, size=256, fft=None):
        """
        Args:
            size: Grid dimension (size x size), a power of two
            fft: Optional FFT2D to share (its scratch buffers are shared too)
        """
        if fft is None:
            fft = FFT2D(size)
        elif fft.size != size:
            raise ConfigurationError(
                f"shared FFT2D has size {fft.size}, engine needs {size}")
        self.fft = fft
        self.size = fft.size
        self.stats = self._initial_stats()
        self._prev_center = (self.size / 2, self.size / 2)

    def _initial_stats(self):
        return {
            "step": 0,
            "mass": 0.0,
            "centerX": self.size / 2,
            "centerY": self.size / 2,
            "velocity": 0.0,
        }

    # ── Engine interface ─────────────────────────────────────────────

    @abstractmethod
    def step(self):
        """Advance one time step. Returns the new state."""

    def run(self, steps):
        """Advance `steps` steps. Returns final state."""
        for _ in range(steps):
            self.step()
        return self.get_state()

    @abstractmethod
    def set_params(self, **params):
        """Update parameters, rebuilding only the caches that depend on them."""

    @abstractmethod
    def get_params(self):
        """Return dict of current parameter values."""

    @abstractmethod
    def get_state(self):
        """Live state buffer(s). Swapped on the next step: copy to keep."""

    @abstractmethod
    def set_state(self, state):
        """Overwrite the state with N*N values per channel."""

    @abstractmethod
    def clear(self):
        """Zero the state and reset step and mass."""

    @abstractmethod
    def randomize(self, density=0.3, radius=0.3, seed=None):
        """Fill a central disk with random matter."""

    @abstractmethod
    def place_pattern(self, pattern, x, y, scale=1):
        """Add a resampled pattern centered at (x, y)."""

    @abstractmethod
    def draw_circle(self, x, y, radius, value=1.0):
        """Set every cell within radius of (x, y) to value."""

    @abstractmethod
    def export_config(self):
        """Plain-data snapshot of size, params, state and stats."""

    @abstractmethod
    def import_config(self, config):
        """Restore a snapshot produced by export_config on a same-size engine."""

    def get_stats(self):
        return dict(self.stats)

    def seed(self, seed_type="random", **kwargs):
        """Seed the world based on type string.

        "random" forwards kwargs to randomize(); "pattern" and "blobs" build
        a seeded pattern (kwargs: seed plus the generator's options).
        """
        if seed_type == "random":
            self.randomize(**kwargs)
            return
        seed = kwargs.pop("seed", None)
        if seed is None:
            seed = generate_seed()
        if seed_type == "pattern":
            pattern = generate_pattern_from_seed(self.size, seed, **kwargs)
        elif seed_type == "blobs":
            pattern = generate_multi_blob_pattern(self.size, seed, **kwargs)
        else:
            raise ValueError(f"Unknown seed type: {seed_type!r}")
        self.clear()
        self.set_state(pattern)

    # ── Statistics ───────────────────────────────────────────────────

    def _wrap_delta(self, delta):
        half = self.size / 2
        if delta > half:
            delta -= self.size
        elif delta < -half:
            delta += self.size
        return delta

    def _update_stats(self, field):
        """Mass, centroid and toroidal centroid velocity of a combined field."""
        mass = float(field.sum())
        self.stats["mass"] = mass
        if mass <= 0:
            # Centroid undefined: keep the last one
            self.stats["velocity"] = 0.0
            return

        coords = np.arange(self.size, dtype=np.float64)
        center_x = float(field.sum(axis=0) @ coords) / mass
        center_y = float(field.sum(axis=1) @ coords) / mass

        prev_x, prev_y = self._prev_center
        dx = self._wrap_delta(center_x - prev_x)
        dy = self._wrap_delta(center_y - prev_y)

        self.stats["velocity"] = math.hypot(dx, dy)
        self.stats["centerX"] = center_x
        self.stats["centerY"] = center_y
        self._prev_center = (center_x, center_y)

    # ── Grid helpers ─────────────────────────────────────────────────

    def _wrap(self, x, y):
        return math.floor(x) % self.size, math.floor(y) % self.size

    def _coerce_field(self, field):
        """(N, N) float64 copy of field clipped to [0, 1]. NaN maps to 0, +inf to 1."""
        arr = np.asarray(field, dtype=np.float64)
        if arr.size != self.size * self.size:
            raise StateShapeError(
                f"state must have {self.size * self.size} values, got {arr.size}")
        arr = np.nan_to_num(arr.reshape(self.size, self.size), nan=0.0, posinf=1.0, neginf=0.0)
        return np.clip(arr, 0.0, 1.0)

    def _disk_mask(self, radius):
        """Cells strictly within radius of the grid center (no wrapping)."""
        center = self.size / 2
        Y, X = np.ogrid[:self.size, :self.size]
        return np.sqrt((X - center) ** 2 + (Y - center) ** 2) < radius

    def _circle_cells(self, x, y, radius):
        """Wrapped (rows, cols) of cells with dx^2 + dy^2 <= radius^2."""
        reach = max(0, math.floor(radius))
        offsets = np.arange(-reach, reach + 1)
        dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
        inside = dx * dx + dy * dy <= radius * radius
        cx, cy = math.floor(x), math.floor(y)
        return (cy + dy[inside]) % self.size, (cx + dx[inside]) % self.size

    def _pattern_stamp(self, pattern, x, y, scale):
        """Nearest-neighbor resample of pattern, placed centered at (x, y).

        Returns (index, values) where index is an np.ix_ pair suitable for
        np.add.at, or None when the scaled pattern is empty. A flat pattern is
        read as a square buffer; any other length raises StateShapeError.
        """
        data = np.asarray(pattern, dtype=np.float64)
        if data.ndim == 1:
            side = math.isqrt(data.size)
            if side * side != data.size:
                raise StateShapeError(
                    f"flat pattern length {data.size} is not a perfect square")
            data = data.reshape(side, side)
        data = np.nan_to_num(data, nan=0.0)
        height, width = data.shape

        scaled_w = math.floor(width * scale)
        scaled_h = math.floor(height * scale)
        if scaled_w <= 0 or scaled_h <= 0:
            return None
        start_x = math.floor(x - scaled_w / 2)
        start_y = math.floor(y - scaled_h / 2)

        src_x = np.minimum(np.floor(np.arange(scaled_w) / scale).astype(np.intp), width - 1)
        src_y = np.minimum(np.floor(np.arange(scaled_h) / scale).astype(np.intp), height - 1)
        values = data[np.ix_(src_y, src_x)]

        rows = (start_y + np.arange(scaled_h)) % self.size
        cols = (start_x + np.arange(scaled_w)) % self.size
        return np.ix_(rows, cols), values
