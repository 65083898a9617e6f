"""Lenia continuous cellular automaton engine."""

from .engine import LeniaEngine
from .engine_base import LeniaBase
from .errors import (
    ConfigurationError,
    DegenerateKernelError,
    LeniaError,
    SizeMismatchError,
    StateShapeError,
)
from .fft import FFT2D, KernelSpectrum, complex_multiply
from .growth import create_growth_table, gaussian_growth, lookup_growth
from .kernel import fft_shift, generate_kernel, precompute_kernel_fft
from .multichannel import MultiChannelLenia
from .params import LeniaParams, validate_config

ENGINE_CLASSES = {
    "lenia": LeniaEngine,
    "multichannel": MultiChannelLenia,
}

__all__ = [
    "ConfigurationError",
    "DegenerateKernelError",
    "ENGINE_CLASSES",
    "FFT2D",
    "KernelSpectrum",
    "LeniaBase",
    "LeniaEngine",
    "LeniaError",
    "LeniaParams",
    "MultiChannelLenia",
    "SizeMismatchError",
    "StateShapeError",
    "complex_multiply",
    "create_growth_table",
    "fft_shift",
    "gaussian_growth",
    "generate_kernel",
    "lookup_growth",
    "precompute_kernel_fft",
    "validate_config",
]
