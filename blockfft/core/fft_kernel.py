"""
FFT kernel and the scratch memory it works in.
The kernel transforms a real/imaginary slice pair in place; the scratch
buffer is preallocated once and reused for every call.
"""

import numpy as np

from blockfft.common.constants import DEFAULT_SCRATCH_CAPACITY, SCRATCH_FACTOR
from blockfft.common.errors import FFTKernelError
from blockfft.common.utils import is_power_of_two


class ScratchBuffer:
    """
    Fixed-capacity working area for the FFT kernel.

    Capacity is counted in real-valued slots. A transform of `length` points
    needs SCRATCH_FACTOR * length slots: the first half stages the complex
    input, the second half receives the complex output.
    """

    def __init__(self, capacity: int = DEFAULT_SCRATCH_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"Scratch capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self.data = np.zeros(capacity, dtype=np.float64)

    @property
    def max_transform_length(self) -> int:
        return self.capacity // SCRATCH_FACTOR

    def view(self, length: int) -> np.ndarray:
        """Returns the slots used by a transform of `length` points."""
        needed = SCRATCH_FACTOR * length
        if needed > self.capacity:
            raise FFTKernelError(
                f"Transform of {length} points needs {needed} scratch slots, "
                f"capacity is {self.capacity}"
            )
        return self.data[:needed]


class RadixFFTKernel:
    """
    In-place forward complex FFT over power-of-two lengths.

    Unnormalised, numpy.fft sign convention. A 1-point transform is the
    identity.
    """

    def transform(self, real: np.ndarray, imag: np.ndarray, length: int, scratch: ScratchBuffer) -> None:
        if not is_power_of_two(length):
            raise FFTKernelError(f"Transform length must be a positive power of two, got {length}")
        if len(real) != length or len(imag) != length:
            raise FFTKernelError(
                f"Slices must hold exactly {length} values, got real={len(real)} imag={len(imag)}"
            )

        work = scratch.view(length)
        staged = work[: 2 * length].view(np.complex128)
        result = work[2 * length :].view(np.complex128)

        staged.real = real
        staged.imag = imag
        result[:] = np.fft.fft(staged)

        real[:] = result.real
        imag[:] = result.imag
