"""
Textual result sink: one "a + b i" line per sample index.
"""

import numpy as np
from typing import Optional, TextIO

from blockfft.core.spectrum import SpectrumBuffers

UNTRANSFORMED_MARK = " *"


class TextResultSink:
    """
    Writes spectrum values as text, e.g. "12.000000 - 3.500000 i".
    """

    def __init__(self, stream: TextIO, precision: int = 6, mark_untransformed: bool = False):
        self.stream = stream
        self.precision = precision
        self.mark_untransformed = mark_untransformed

    def format_value(self, real: float, imag: float) -> str:
        # Negative zero prints with a plus sign
        sign = "-" if imag < 0 else "+"
        return f"{real:.{self.precision}f} {sign} {abs(imag):.{self.precision}f} i"

    def consume(self, spectrum: SpectrumBuffers, coverage: Optional[np.ndarray] = None) -> int:
        """
        Writes every (real, imag) pair of `spectrum`.

        Args:
            spectrum: Buffers to print, in index order.
            coverage: Optional mask from coverage_mask(); with
                      mark_untransformed set, False entries get a trailing " *".

        Returns:
            Number of lines written.
        """
        if coverage is not None and len(coverage) != len(spectrum):
            raise ValueError(
                f"Coverage mask has {len(coverage)} entries for {len(spectrum)} values"
            )

        count = 0
        for idx, (re_val, im_val) in enumerate(spectrum.values()):
            line = self.format_value(re_val, im_val)
            if self.mark_untransformed and coverage is not None and not coverage[idx]:
                line += UNTRANSFORMED_MARK
            self.stream.write(line + "\n")
            count += 1
        return count
