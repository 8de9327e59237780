"""
Common utility functions for the blockfft project.
"""

import numpy as np

from blockfft.common.constants import REMAINDER_RADIX


def is_power_of_two(value: int) -> bool:
    """
    Checks whether a value is a positive power of two.

    Args:
        value: The integer to check.

    Returns:
        True for 1, 2, 4, 8, ...; False for zero, negatives and other values.
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return False
    return value > 0 and (value & (value - 1)) == 0


def largest_power_of_four(value: int) -> int:
    """
    Finds the largest power of four that does not exceed a value.

    Args:
        value: A positive integer.

    Returns:
        The unique P = 4**k with P <= value < 4 * P.
    """
    if value < 1:
        raise ValueError(f"Value must be at least 1, got {value}")

    power = 1
    while power * REMAINDER_RADIX <= value:
        power *= REMAINDER_RADIX
    return power
