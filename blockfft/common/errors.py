"""
Exception types shared by the block FFT analyser.
"""


class BlockFFTError(Exception):
    """Base class for all analyser errors."""

    pass


class InvalidConfigurationError(BlockFFTError):
    """Block size or scratch sizing is not usable."""

    pass


class OutOfRangeError(BlockFFTError):
    """A block descriptor would read past the end of the sample buffer."""

    pass


class SourceUnavailableError(BlockFFTError):
    """The sample source could not resolve or decode its input."""

    pass


class FFTKernelError(BlockFFTError):
    """The FFT kernel was called with arguments it cannot handle."""

    pass
