"""
Global constants for the block FFT analyser.
These define the default transform window and the scratch sizing contract
of the FFT kernel.
"""

BLOCK_SIZE = 1024
SCRATCH_FACTOR = 4
DEFAULT_SCRATCH_CAPACITY = SCRATCH_FACTOR * BLOCK_SIZE
REMAINDER_RADIX = 4
PCM8_OFFSET = 128.0
PCM8_SCALE = 128.0
PCM16_SCALE = 32768.0
PCM24_SCALE = 8388608.0
PCM32_SCALE = 2147483648.0
