"""
Color quantization for dominant-family detection.

Reduces 8-bit RGB channels to six levels (0, 51, 102, 153, 204, 255) and
encodes the result as a six-digit hex code.
"""

import math
from typing import Optional, Tuple

import numpy as np

LEVEL_STEP = 0x33
LEVELS = (0, 51, 102, 153, 204, 255)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; channels are non-negative
    return int(math.floor(value + 0.5))


def quantize_channel(value: int) -> int:
    """Snap one channel to the nearest quantization level."""
    return _round_half_up(_round_half_up(value / LEVEL_STEP) * LEVEL_STEP)


def quantize(red: int, green: int, blue: int) -> str:
    """
    Convert an RGB triple into its quantized color code.

    Args:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)

    Returns:
        Six uppercase hex digits, e.g. ``quantize(0, 255, 255) == "00FFFF"``
    """
    return "%02X%02X%02X" % (
        quantize_channel(red),
        quantize_channel(green),
        quantize_channel(blue),
    )


def quantize_sample(sample: Tuple[int, int, int]) -> str:
    """Quantize an ``(r, g, b)`` tuple."""
    red, green, blue = sample
    return quantize(red, green, blue)


def quantize_levels(pixels: np.ndarray) -> np.ndarray:
    """
    Vectorized quantization returning level indices (0-5) per channel.

    ``LEVELS[index]`` equals ``quantize_channel`` of the same value.
    """
    scaled = pixels.astype(np.float64) / LEVEL_STEP
    return np.floor(scaled + 0.5).astype(np.intp)


def to_hex(red: int, green: int, blue: int, alpha: Optional[int] = None) -> str:
    """
    Convert RGB (and optional alpha) into a lowercase hex color string.

    Alpha uses the 0-127 opacity scale (0 opaque, 127 transparent) and is
    rescaled to 0-255 with ``floor(255 - 255 * alpha / 127)``.

    Args:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)
        alpha: Optional alpha channel (0-127)

    Returns:
        ``#rrggbb`` or ``#rrggbbaa``

    Raises:
        ValueError: If alpha is outside 0-127
    """
    result = "#" + "".join(f"{int(channel):02x}" for channel in (red, green, blue))

    if alpha is not None:
        if not 0 <= alpha <= 127:
            raise ValueError(f"alpha must be within 0-127, got {alpha}")
        scaled = int(math.floor(255 - (255 * (alpha / 127))))
        result += f"{scaled:02x}"

    return result
