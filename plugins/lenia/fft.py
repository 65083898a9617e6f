"""
Radix-2 Cooley-Tukey FFT on a square power-of-two grid

The 2D transform is separable: a 1D transform over every row, then over
every column. Each 1D pass is decimation-in-time (bit-reversal permutation
followed by log2(N) butterfly stages) and is vectorized across all rows at
once, so a full 2D transform costs 2 * log2(N) numpy butterfly passes.

Twiddle and bit-reversal tables are computed once per instance. The instance
also owns the scratch arrays reused by every pass and by convolve(), so two
engines that share an FFT2D share those buffers too.
"""

from collections import namedtuple

import numpy as np

from .errors import ConfigurationError


KernelSpectrum = namedtuple("KernelSpectrum", ["real", "imag"])


def is_power_of_two(n):
    return isinstance(n, (int, np.integer)) and n >= 2 and (n & (n - 1)) == 0


def reverse_bits(x, bits):
    """Reverse the lowest `bits` bits of x."""
    result = 0
    for _ in range(bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


def complex_multiply(a_re, a_im, b_re, b_im, out_re=None, out_im=None):
    """Elementwise (a_re + i a_im) * (b_re + i b_im).

    Outputs may alias the inputs; both products are formed before either
    output is written. Returns (out_re, out_im).
    """
    real = a_re * b_re - a_im * b_im
    imag = a_re * b_im + a_im * b_re
    if out_re is None:
        out_re = real
    else:
        out_re[...] = real
    if out_im is None:
        out_im = imag
    else:
        out_im[...] = imag
    return out_re, out_im


class FFT2D:

    def __init__(self, size):
        """
        Args:
            size: Grid side length, a power of two (>= 2)
        """
        if not is_power_of_two(size):
            raise ConfigurationError(
                f"FFT size must be a power of two >= 2, got {size!r}")
        self.size = int(size)
        self.log2n = self.size.bit_length() - 1

        # Twiddles exp(-2*pi*i*k/N) for k < N/2
        angles = -2.0 * np.pi * np.arange(self.size // 2) / self.size
        self.cos_table = np.cos(angles)
        self.sin_table = np.sin(angles)

        self.bit_reverse = np.array(
            [reverse_bits(i, self.log2n) for i in range(self.size)],
            dtype=np.intp)

        shape = (self.size, self.size)
        self._work_re = np.zeros(shape, dtype=np.float64)
        self._work_im = np.zeros(shape, dtype=np.float64)
        self._conv_re = np.zeros(shape, dtype=np.float64)
        self._conv_im = np.zeros(shape, dtype=np.float64)
        # Target for the bit-reversal gather and the transposes
        self._swap = np.zeros(shape, dtype=np.float64)

    def _fft_rows(self, re, im, inverse):
        """1D transform of every row of two C-contiguous (N, N) arrays, in place."""
        n = self.size
        swap = self._swap
        for arr in (re, im):
            np.take(arr, self.bit_reverse, axis=1, out=swap, mode="clip")
            arr[...] = swap

        # Inverse uses conjugated twiddles
        sign = -1.0 if inverse else 1.0
        length = 2
        while length <= n:
            half = length // 2
            stride = n // length
            w_re = self.cos_table[::stride][:half]
            w_im = sign * self.sin_table[::stride][:half]

            # Views: (row, block, position-in-block)
            blocks_re = re.reshape(n, n // length, length)
            blocks_im = im.reshape(n, n // length, length)
            even_re = blocks_re[..., :half]
            even_im = blocks_im[..., :half]
            odd_re = blocks_re[..., half:]
            odd_im = blocks_im[..., half:]

            t_re = odd_re * w_re - odd_im * w_im
            t_im = odd_re * w_im + odd_im * w_re
            odd_re[...] = even_re - t_re
            odd_im[...] = even_im - t_im
            even_re += t_re
            even_im += t_im
            length *= 2

        if inverse:
            re /= n
            im /= n

    def _transpose(self, re, im):
        swap = self._swap
        for arr in (re, im):
            swap[...] = arr.T
            arr[...] = swap

    def _fft2d(self, real, imag, inverse):
        n = self.size
        if np.size(real) != n * n or np.size(imag) != n * n:
            raise ValueError(
                f"FFT2D({n}) expects {n * n} elements, "
                f"got {np.size(real)} and {np.size(imag)}")
        re, im = self._work_re, self._work_im
        re[...] = np.reshape(real, (n, n))
        im[...] = np.reshape(imag, (n, n))

        # Rows
        self._fft_rows(re, im, inverse)

        # Columns (as rows of the transpose)
        self._transpose(re, im)
        self._fft_rows(re, im, inverse)
        self._transpose(re, im)

        real[...] = re.reshape(np.shape(real))
        imag[...] = im.reshape(np.shape(imag))

    def forward(self, real, imag):
        """Forward 2D transform, in place on two N*N arrays."""
        self._fft2d(real, imag, inverse=False)

    def inverse(self, real, imag):
        """Inverse 2D transform (scaled by 1/N per axis), in place."""
        self._fft2d(real, imag, inverse=True)

    def convolve(self, field, spectrum):
        """Circular convolution of a real field with a precomputed kernel spectrum.

        Returns the real part of the result as an (N, N) array. The array is
        a scratch buffer owned by this instance: copy it if it has to
        survive the next convolve() call.
        """
        re, im = self._conv_re, self._conv_im
        re[...] = np.reshape(field, (self.size, self.size))
        im.fill(0.0)
        self.forward(re, im)
        complex_multiply(re, im, spectrum.real, spectrum.imag, re, im)
        self.inverse(re, im)
        return re
