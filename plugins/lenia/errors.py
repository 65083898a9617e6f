"""
Error types raised by the Lenia engine.

Everything here is a structural problem with the grid or the configuration
handed to an engine. Out-of-range paint values and coordinates are never
errors: they are clipped or wrapped silently.
"""


class LeniaError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(LeniaError, ValueError):
    """Grid or parameter configuration the engine cannot run with."""


class DegenerateKernelError(ConfigurationError):
    """Kernel parameters produce a kernel with zero total mass."""


class SizeMismatchError(ConfigurationError):
    """Imported configuration was exported from a different grid size."""

    def __init__(self, expected, got):
        super().__init__(f"Size mismatch: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class StateShapeError(ConfigurationError):
    """State buffer does not hold exactly N*N values."""
