"""
Tests for the WAV sample source.
"""

import io
import wave
import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from blockfft.common.errors import SourceUnavailableError
from blockfft.wav.sample_source import WavSampleSource, pcm_bytes_to_float


def write_wav(path_or_stream, frames: bytes, n_channels=1, samp_width=2, frame_rate=44100):
    with wave.open(path_or_stream, "wb") as wav_out:
        wav_out.setnchannels(n_channels)
        wav_out.setsampwidth(samp_width)
        wav_out.setframerate(frame_rate)
        wav_out.writeframes(frames)


class TestPcmConversion:
    """Raw PCM to float conversion."""

    def test_8bit(self):
        out = pcm_bytes_to_float(bytes([0, 128, 255]), 1)
        assert out.dtype == np.float32
        assert_allclose(out, [-1.0, 0.0, 127 / 128])

    def test_16bit(self):
        raw = np.array([-32768, 0, 16384], dtype="<i2").tobytes()
        assert_allclose(pcm_bytes_to_float(raw, 2), [-1.0, 0.0, 0.5])

    def test_24bit(self):
        raw = bytes([0x00, 0x00, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x40, 0xFF, 0xFF, 0xFF])
        assert_allclose(pcm_bytes_to_float(raw, 3), [-1.0, 0.0, 0.5, -1 / 8388608], rtol=1e-6)

    def test_32bit(self):
        raw = np.array([-2**31, 2**30], dtype="<i4").tobytes()
        assert_allclose(pcm_bytes_to_float(raw, 4), [-1.0, 0.5])

    def test_unsupported_width(self):
        with pytest.raises(ValueError, match="Unsupported sample width"):
            pcm_bytes_to_float(b"\x00" * 5, 5)


class TestWavSampleSource:
    """Test cases for WavSampleSource class."""

    def test_mono_16bit(self, tmp_path):
        path = tmp_path / "mono.wav"
        pcm = np.array([0, 16384, -16384, 32767], dtype="<i2")
        write_wav(str(path), pcm.tobytes(), frame_rate=8000)

        source = WavSampleSource()
        count, samples = source.provide(str(path))

        assert count == 4
        assert samples.dtype == np.float32
        assert_allclose(samples, pcm / 32768.0)
        assert source.sample_rate == 8000
        assert source.channel_count == 1
        assert source.sample_width == 2

    def test_stereo_channel_selection(self, tmp_path):
        path = tmp_path / "stereo.wav"
        interleaved = np.array([100, -100, 200, -200, 300, -300], dtype="<i2")
        write_wav(str(path), interleaved.tobytes(), n_channels=2)

        count_l, left = WavSampleSource(channel=0).provide(str(path))
        count_r, right = WavSampleSource(channel=1).provide(str(path))

        assert count_l == count_r == 3
        assert_allclose(left, np.array([100, 200, 300]) / 32768.0)
        assert_allclose(right, np.array([-100, -200, -300]) / 32768.0)

    def test_from_stream(self):
        stream = io.BytesIO()
        write_wav(stream, bytes([128, 255, 0]), samp_width=1)
        stream.seek(0)

        count, samples = WavSampleSource().provide(stream)
        assert count == 3
        assert_allclose(samples, [0.0, 127 / 128, -1.0])

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.wav"
        write_wav(str(path), b"")
        count, samples = WavSampleSource().provide(str(path))
        assert count == 0
        assert_array_equal(samples, np.zeros(0, dtype=np.float32))

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailableError, match="not found"):
            WavSampleSource().provide(str(tmp_path / "missing.wav"))

    def test_not_a_wav(self, tmp_path):
        path = tmp_path / "bogus.wav"
        path.write_bytes(b"this is not a riff file at all")
        with pytest.raises(SourceUnavailableError, match="Failed to read"):
            WavSampleSource().provide(str(path))

    def test_truncated_data_chunk(self, tmp_path):
        """A data chunk cut mid-sample decodes the complete samples only."""
        path = tmp_path / "truncated.wav"
        pcm = (np.arange(100) * 100).astype("<i2")
        write_wav(str(path), pcm.tobytes())
        path.write_bytes(path.read_bytes()[:-1])

        count, samples = WavSampleSource().provide(str(path))

        assert count == 99
        assert_allclose(samples, pcm[:99] / 32768.0)

    def test_truncated_stereo_drops_partial_frame(self, tmp_path):
        path = tmp_path / "truncated_stereo.wav"
        interleaved = np.array([1, 2, 3, 4, 5, 6], dtype="<i2")
        write_wav(str(path), interleaved.tobytes(), n_channels=2)
        path.write_bytes(path.read_bytes()[:-3])

        count, right = WavSampleSource(channel=1).provide(str(path))

        assert count == 2
        assert_allclose(right, np.array([2, 4]) / 32768.0)

    def test_channel_out_of_range(self, tmp_path):
        path = tmp_path / "mono.wav"
        write_wav(str(path), np.zeros(4, dtype="<i2").tobytes())
        with pytest.raises(SourceUnavailableError, match="Channel 1"):
            WavSampleSource(channel=1).provide(str(path))

    def test_negative_channel(self):
        with pytest.raises(ValueError):
            WavSampleSource(channel=-1)
