"""
Block transform scheduler.

Partitions N samples into fixed-size blocks plus at most one remainder
window and drives the FFT kernel over each, in increasing offset order.
The remainder window is the largest power of four that fits in the
leftover samples; anything after it is left untransformed (real part keeps
the original sample, imaginary part stays zero). No padding is applied.
"""

import numpy as np
from typing import List, Optional, Sequence

from blockfft.common.constants import BLOCK_SIZE, SCRATCH_FACTOR
from blockfft.common.debug_logger import log_debug
from blockfft.common.errors import InvalidConfigurationError, OutOfRangeError
from blockfft.common.utils import is_power_of_two, largest_power_of_four
from blockfft.core.fft_kernel import RadixFFTKernel, ScratchBuffer
from blockfft.core.spectrum import SpectrumBuffers


class BlockDescriptor:
    """One contiguous window [offset, offset + length) of the sample buffer."""

    __slots__ = ("offset", "length", "is_remainder")

    def __init__(self, offset: int, length: int, is_remainder: bool = False):
        self.offset = offset
        self.length = length
        self.is_remainder = is_remainder

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __eq__(self, other):
        if not isinstance(other, BlockDescriptor):
            return NotImplemented
        return (self.offset, self.length, self.is_remainder) == (
            other.offset, other.length, other.is_remainder
        )

    def __hash__(self):
        return hash((self.offset, self.length, self.is_remainder))

    def __repr__(self):
        kind = "remainder" if self.is_remainder else "block"
        return f"<BlockDescriptor {kind} [{self.offset}, {self.end})>"


def coverage_mask(descriptors: Sequence[BlockDescriptor], num_samples: int) -> np.ndarray:
    """
    Marks which sample indices fall inside a transformed window.

    Opt-in extension: the scheduler itself never emits this marker.
    """
    mask = np.zeros(num_samples, dtype=bool)
    for desc in descriptors:
        mask[desc.offset : desc.end] = True
    return mask


class BlockTransformScheduler:
    """
    Runs the FFT kernel over full blocks and one power-of-four remainder.
    """

    def __init__(
        self,
        block_size: int = BLOCK_SIZE,
        scratch: Optional[ScratchBuffer] = None,
        kernel=None,
    ):
        """
        Initializes the scheduler.

        Args:
            block_size: Transform window in samples; a positive power of two.
            scratch: Kernel working memory. Allocated with
                     SCRATCH_FACTOR * block_size slots when omitted.
            kernel: Object with transform(real, imag, length, scratch).
                    Defaults to RadixFFTKernel.
        """
        if not is_power_of_two(block_size):
            raise InvalidConfigurationError(
                f"Block size must be a positive power of two, got {block_size!r}"
            )
        self.block_size = int(block_size)
        self.scratch = scratch if scratch is not None else ScratchBuffer(SCRATCH_FACTOR * self.block_size)
        self.kernel = kernel if kernel is not None else RadixFFTKernel()
        self._check_scratch()

    def _check_scratch(self):
        needed = SCRATCH_FACTOR * self.block_size
        if self.scratch.max_transform_length < self.block_size:
            raise InvalidConfigurationError(
                f"Block size {self.block_size} needs {needed} scratch slots, "
                f"scratch capacity is {self.scratch.capacity}"
            )

    def full_block_count(self, num_samples: int) -> int:
        return num_samples // self.block_size

    def remainder_length(self, num_samples: int) -> int:
        """Length of the remainder window, 0 when N is a multiple of the block size."""
        leftover = num_samples % self.block_size
        if leftover == 0:
            return 0
        return largest_power_of_four(leftover)

    def plan(self, num_samples: int) -> List[BlockDescriptor]:
        """
        Lists the windows a run over `num_samples` samples transforms.

        Full blocks come first in increasing offset order, followed by at
        most one remainder window.
        """
        if isinstance(num_samples, bool) or not isinstance(num_samples, (int, np.integer)) or num_samples < 0:
            raise OutOfRangeError(f"Sample count must be a non-negative integer, got {num_samples!r}")
        num_samples = int(num_samples)

        descriptors = [
            BlockDescriptor(offset=i * self.block_size, length=self.block_size)
            for i in range(self.full_block_count(num_samples))
        ]

        leftover = num_samples % self.block_size
        if leftover > 0:
            descriptors.append(
                BlockDescriptor(
                    offset=num_samples - leftover,
                    length=largest_power_of_four(leftover),
                    is_remainder=True,
                )
            )

        for desc in descriptors:
            self._check_descriptor(desc, num_samples)
        return descriptors

    @staticmethod
    def _check_descriptor(desc: BlockDescriptor, num_samples: int):
        if desc.offset < 0 or desc.length < 1 or desc.end > num_samples:
            raise OutOfRangeError(
                f"Block [{desc.offset}, {desc.end}) does not fit in {num_samples} samples"
            )

    def process(self, real: np.ndarray, imag: np.ndarray, num_samples: int) -> None:
        """
        Transforms `real`/`imag` in place.

        Args:
            real: Real part, initialised from the samples.
            imag: Imaginary part, initialised to zeros.
            num_samples: N; both buffers must hold at least N values.
        """
        # Slices of anything but an ndarray are copies; results would be lost
        for name, buf in (("real", real), ("imag", imag)):
            if not isinstance(buf, np.ndarray) or buf.ndim != 1:
                raise TypeError(f"{name} must be a one-dimensional numpy array, got {type(buf).__name__}")

        descriptors = self.plan(num_samples)
        if len(real) < num_samples or len(imag) < num_samples:
            raise OutOfRangeError(
                f"Spectrum buffers (real={len(real)}, imag={len(imag)}) "
                f"are shorter than the sample count {num_samples}"
            )
        # The scratch may have been swapped since construction
        self._check_scratch()

        log_debug("BLOCK_PLAN", "lengths", [d.length for d in descriptors],
                  block=0, num_samples=num_samples, block_size=self.block_size,
                  full_blocks=self.full_block_count(num_samples))

        for block_idx, desc in enumerate(descriptors):
            real_slice = real[desc.offset : desc.end]
            imag_slice = imag[desc.offset : desc.end]

            log_debug("BLOCK_INPUT", "real", real_slice, block=block_idx,
                      offset=desc.offset, length=desc.length, remainder=desc.is_remainder)

            self.kernel.transform(real_slice, imag_slice, desc.length, self.scratch)

            log_debug("BLOCK_OUTPUT", "real", real_slice, block=block_idx,
                      offset=desc.offset, length=desc.length, remainder=desc.is_remainder)
            log_debug("BLOCK_OUTPUT", "imag", imag_slice, block=block_idx,
                      offset=desc.offset, length=desc.length, remainder=desc.is_remainder)

        if descriptors and descriptors[-1].is_remainder and descriptors[-1].end < num_samples:
            tail = descriptors[-1]
            log_debug("TAIL_UNTRANSFORMED", "real", real[tail.end : num_samples],
                      block=len(descriptors), offset=tail.end, length=num_samples - tail.end)

    def transform(self, samples) -> SpectrumBuffers:
        """Copies `samples` into fresh spectrum buffers and processes them."""
        spectrum = SpectrumBuffers.from_samples(samples)
        self.process(spectrum.real, spectrum.imag, len(spectrum))
        return spectrum
