"""
Reads PCM WAV files into flat float sample arrays for block analysis.
"""

import wave
import numpy as np
from typing import Optional, Tuple

from blockfft.common.constants import (
    PCM8_OFFSET,
    PCM8_SCALE,
    PCM16_SCALE,
    PCM24_SCALE,
    PCM32_SCALE,
)
from blockfft.common.errors import SourceUnavailableError

SUPPORTED_SAMPLE_WIDTHS = (1, 2, 3, 4)


def pcm_bytes_to_float(audio_bytes: bytes, samp_width: int) -> np.ndarray:
    """
    Converts interleaved PCM frame bytes to float32 samples in [-1, 1).

    Args:
        audio_bytes: Raw frames as returned by wave.readframes().
        samp_width: Bytes per sample (1, 2, 3 or 4).
    """
    if samp_width == 1:  # 8-bit unsigned PCM
        raw = np.frombuffer(audio_bytes, dtype=np.uint8)
        return ((raw.astype(np.float32) - PCM8_OFFSET) / PCM8_SCALE).astype(np.float32)
    elif samp_width == 2:  # 16-bit signed PCM
        raw = np.frombuffer(audio_bytes, dtype="<i2")
        return (raw.astype(np.float32) / PCM16_SCALE).astype(np.float32)
    elif samp_width == 3:  # 24-bit signed PCM, little endian triplets
        triplets = np.frombuffer(audio_bytes, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        raw = triplets[:, 0] | (triplets[:, 1] << 8) | (triplets[:, 2] << 16)
        raw = np.where(raw & 0x800000, raw - 0x1000000, raw)
        return (raw.astype(np.float64) / PCM24_SCALE).astype(np.float32)
    elif samp_width == 4:  # 32-bit signed PCM
        raw = np.frombuffer(audio_bytes, dtype="<i4")
        return (raw.astype(np.float64) / PCM32_SCALE).astype(np.float32)
    raise ValueError(f"Unsupported sample width: {samp_width} bytes")


class WavSampleSource:
    """
    Sample source backed by the standard library wave module.

    Multi-channel files are de-interleaved and a single channel is returned.
    """

    def __init__(self, channel: int = 0):
        """
        Args:
            channel: Index of the channel to return for multi-channel input.
        """
        if channel < 0:
            raise ValueError(f"Channel index must be non-negative, got {channel}")
        self.channel = channel
        self.sample_rate: Optional[int] = None
        self.channel_count: Optional[int] = None
        self.sample_width: Optional[int] = None

    def provide(self, source) -> Tuple[int, np.ndarray]:
        """
        Decodes `source` (a path or a binary file object).

        Returns:
            (sample_count, samples) for the selected channel.
        """
        try:
            with wave.open(source, "rb") as wav_in:
                n_channels = wav_in.getnchannels()
                samp_width = wav_in.getsampwidth()
                frame_rate = wav_in.getframerate()
                n_frames = wav_in.getnframes()
                audio_bytes = wav_in.readframes(n_frames)
        except FileNotFoundError as e:
            raise SourceUnavailableError(f"WAV file not found: {source}") from e
        except (wave.Error, EOFError, OSError) as e:
            raise SourceUnavailableError(f"Failed to read WAV file: {source}") from e

        if self.channel >= n_channels:
            raise SourceUnavailableError(
                f"Channel {self.channel} requested but input has {n_channels} channel(s)"
            )

        if samp_width not in SUPPORTED_SAMPLE_WIDTHS:
            raise SourceUnavailableError(
                f"Input WAV has sample width {samp_width} bytes; 8, 16, 24 or 32-bit PCM is required"
            )

        # Drop a trailing partial frame or sample if the data chunk is short
        frame_bytes = samp_width * n_channels
        audio_bytes = audio_bytes[: (len(audio_bytes) // frame_bytes) * frame_bytes]
        interleaved = pcm_bytes_to_float(audio_bytes, samp_width)
        samples = np.ascontiguousarray(interleaved[self.channel :: n_channels])

        self.sample_rate = frame_rate
        self.channel_count = n_channels
        self.sample_width = samp_width
        return len(samples), samples
