"""
Multi-Channel Lenia

Three independent Lenia fields (R, G, B) stepped side by side. Each channel
has its own parameters, kernel spectrum and growth table; all three share a
single FFT2D and therefore its scratch buffers, used one channel at a time.
There is no coupling between channels in the update itself.

Common parameters are spread across channels so the colors decorrelate:
channel i gets R + (i-1)*2, mu + (i-1)*0.02 and sigma + (i-1)*0.01, with G
receiving the literal value. Paint operations shift each channel by a small
per-channel offset for the same reason. Saved configs depend on these
offsets, so they must stay exactly as they are.
"""

import numpy as np

from .engine import LeniaEngine
from .engine_base import LeniaBase
from .errors import SizeMismatchError, StateShapeError
from .params import LeniaParams, MultiChannelConfig, canonical_keys


CHANNEL_NAMES = ("R", "G", "B")

DEFAULT_CHANNEL_PARAMS = (
    {"R": 10, "mu": 0.18, "sigma": 0.08, "dt": 0.05, "kernel_mu": 0.5, "kernel_sigma": 0.18},
    {"R": 12, "mu": 0.15, "sigma": 0.06, "dt": 0.05, "kernel_mu": 0.5, "kernel_sigma": 0.15},
    {"R": 8, "mu": 0.20, "sigma": 0.10, "dt": 0.05, "kernel_mu": 0.5, "kernel_sigma": 0.20},
)

# Per-channel step applied as (i - 1) * spread
PARAM_SPREAD = {"R": 2, "mu": 0.02, "sigma": 0.01}
SHARED_KEYS = ("dt", "kernel_mu", "kernel_sigma")

CIRCLE_OFFSET = 1
PATTERN_OFFSET = 2


class MultiChannelLenia(LeniaBase):

    engine_name = "multichannel"
    engine_label = "Multi-Channel Lenia"
    num_channels = len(CHANNEL_NAMES)

    def __init__(self, size=256, channel_params=None):
        """
        Args:
            size: Grid dimension (size x size), a power of two
            channel_params: Optional list of per-channel parameter overrides
        """
        super().__init__(size)
        overrides = list(channel_params or [])
        self.channels = []
        for i in range(self.num_channels):
            params = LeniaParams(**DEFAULT_CHANNEL_PARAMS[i])
            if i < len(overrides) and overrides[i]:
                params = params.merged(overrides[i])
            self.channels.append(
                LeniaEngine(self.size, fft=self.fft, **params.model_dump()))

    def _combined(self):
        """Per-cell average of the channels."""
        total = self.channels[0].world.copy()
        for channel in self.channels[1:]:
            total += channel.world
        return total / self.num_channels

    def step(self):
        """Advance every channel one step. Returns the list of channel states."""
        for channel in self.channels:
            channel.advance()
        self._update_stats(self._combined())
        self.stats["step"] += 1
        return self.get_state()

    def _spread(self, common, index):
        offset = index - 1
        update = {key: common[key] + offset * delta
                  for key, delta in PARAM_SPREAD.items()
                  if common.get(key) is not None}
        update.update({key: common[key] for key in SHARED_KEYS
                       if common.get(key) is not None})
        return update

    def set_params(self, **params):
        """Apply common parameters to all channels with the per-channel spread.

        Only keys present in params are touched; each channel rebuilds its
        kernel or growth table only if its own inputs changed. If any
        channel fails to rebuild, no channel changes.
        """
        common = canonical_keys(params)
        prepared = [channel._prepare_params(self._spread(common, i))
                    for i, channel in enumerate(self.channels)]
        for channel, update in zip(self.channels, prepared):
            channel._commit_params(update)

    def set_channel_params(self, index, **params):
        """Set one channel's parameters verbatim (no spread)."""
        self.channels[index].set_params(**params)

    def get_params(self):
        """Parameters of the G channel, as the representative set."""
        return self.channels[1].get_params()

    def get_channel_params(self):
        return [channel.get_params() for channel in self.channels]

    def get_state(self):
        return [channel.world for channel in self.channels]

    def set_state(self, state):
        """Set all channels from a list of three fields, or copy one field into each."""
        arr = np.asarray(state, dtype=np.float64)
        n_cells = self.size * self.size
        if arr.size == self.num_channels * n_cells:
            fields = [self._coerce_field(part)
                      for part in arr.reshape(self.num_channels, n_cells)]
        else:
            fields = [self._coerce_field(arr)] * self.num_channels
        for channel, field in zip(self.channels, fields):
            channel.world[...] = field

    def clear(self):
        for channel in self.channels:
            channel.clear()
        self.stats["step"] = 0
        self.stats["mass"] = 0.0

    def randomize(self, density=0.3, radius=0.3, seed=None):
        """Random matter in a central disk; one occupancy draw per cell, independent channel values."""
        self.clear()
        rng = np.random.default_rng(seed)
        shape = (self.size, self.size)
        filled = self._disk_mask(radius * self.size) & (rng.random(shape) < density)
        for channel in self.channels:
            channel.world[filled] = rng.random(shape)[filled]

    def place_pattern(self, pattern, x, y, scale=1):
        for i, channel in enumerate(self.channels):
            offset = (i - 1) * PATTERN_OFFSET
            channel.place_pattern(pattern, x + offset, y + offset, scale)

    def draw_circle(self, x, y, radius, value=1.0):
        for i, channel in enumerate(self.channels):
            offset = (i - 1) * CIRCLE_OFFSET
            channel.draw_circle(x + offset, y + offset, radius, value)

    def get_value(self, x, y):
        """(r, g, b) values at (x, y)."""
        return tuple(channel.get_value(x, y) for channel in self.channels)

    def set_value(self, x, y, value):
        for channel in self.channels:
            channel.set_value(x, y, value)

    def export_config(self):
        return {
            "size": self.size,
            "channelParams": [channel.params.export() for channel in self.channels],
            "states": [channel.world.ravel().tolist() for channel in self.channels],
            "stats": self.get_stats(),
        }

    def import_config(self, config):
        """Restore channel params and states. Missing trailing channels are left as they are."""
        if config.get("size") != self.size:
            raise SizeMismatchError(self.size, config.get("size"))
        parsed = MultiChannelConfig.model_validate(config)
        if (len(parsed.channel_params) > self.num_channels
                or len(parsed.states) > self.num_channels):
            raise StateShapeError(
                f"config has more than {self.num_channels} channels")

        fields = [self._coerce_field(state) for state in parsed.states]
        prepared = [channel._prepare_params(params.model_dump())
                    for channel, params in zip(self.channels, parsed.channel_params)]

        for channel, update in zip(self.channels, prepared):
            channel._commit_params(update)
        for channel, field in zip(self.channels, fields):
            channel.world[...] = field
        self.stats = {**self._initial_stats(), **parsed.stats}
        self.stats["step"] = int(self.stats["step"])
        self._prev_center = (self.stats["centerX"], self.stats["centerY"])
