"""
Real/imaginary spectrum buffers, co-indexed with the input samples.
"""

import numpy as np
from typing import Iterator, Tuple


class SpectrumBuffers:
    """
    Holds the real and imaginary parts of a run.

    The real part starts as a copy of the samples and the imaginary part as
    zeros; the scheduler transforms both in place block by block.
    """

    def __init__(self, real: np.ndarray, imag: np.ndarray):
        if real.ndim != 1 or imag.ndim != 1:
            raise ValueError("Spectrum buffers must be one-dimensional")
        if len(real) != len(imag):
            raise ValueError(
                f"Real and imaginary parts must have the same length, got {len(real)} and {len(imag)}"
            )
        self.real = real
        self.imag = imag

    @classmethod
    def from_samples(cls, samples) -> "SpectrumBuffers":
        """Creates buffers for `samples` without modifying them."""
        real = np.array(samples, dtype=np.float64, copy=True).reshape(-1)
        imag = np.zeros(len(real), dtype=np.float64)
        return cls(real, imag)

    def __len__(self) -> int:
        return len(self.real)

    def values(self) -> Iterator[Tuple[float, float]]:
        """Yields (real, imag) per sample index."""
        for re_val, im_val in zip(self.real, self.imag):
            yield float(re_val), float(im_val)
