import numpy as np
import pytest
from numpy.testing import assert_array_equal

from blockfft.core.spectrum import SpectrumBuffers


class TestSpectrumBuffers:
    """Test cases for SpectrumBuffers class."""

    def test_from_samples_copies(self):
        samples = np.array([0.5, -0.5, 0.25], dtype=np.float32)
        spectrum = SpectrumBuffers.from_samples(samples)

        assert spectrum.real.dtype == np.float64
        assert_array_equal(spectrum.real, samples.astype(np.float64))
        assert_array_equal(spectrum.imag, np.zeros(3))

        spectrum.real[0] = 10.0
        assert samples[0] == np.float32(0.5)

    def test_from_list(self):
        spectrum = SpectrumBuffers.from_samples([1, 2, 3, 4])
        assert len(spectrum) == 4

    def test_empty(self):
        spectrum = SpectrumBuffers.from_samples(np.zeros(0))
        assert len(spectrum) == 0
        assert list(spectrum.values()) == []

    def test_values(self):
        spectrum = SpectrumBuffers(np.array([1.0, 2.0]), np.array([-1.0, 0.5]))
        assert list(spectrum.values()) == [(1.0, -1.0), (2.0, 0.5)]

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            SpectrumBuffers(np.zeros(3), np.zeros(2))

    def test_rejects_2d(self):
        with pytest.raises(ValueError, match="one-dimensional"):
            SpectrumBuffers(np.zeros((2, 2)), np.zeros((2, 2)))
