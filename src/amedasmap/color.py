"""
Scalar normalization and HSV colour encoding.

All helpers propagate ``None`` ("no data") instead of raising, so they can be
chained directly over quality-gated readings.
"""

import math
from typing import Optional

from .models import RGB

# Hue of a 0.0 fraction (blue) and a 1.0 fraction (red)
LOW_HUE = 240.0
HIGH_HUE = 0.0


def normalize(
    value: Optional[float], min_value: float, max_value: float
) -> Optional[float]:
    """
    Rescale ``value`` linearly so ``min_value`` maps to 0 and ``max_value`` to 1.

    Readings outside the range give fractions outside [0, 1]; no clamping is
    applied.
    """
    if value is None:
        return None
    return (value - min_value) / (max_value - min_value)


def mix(fraction: Optional[float], start: float, end: float) -> Optional[float]:
    """Linear interpolation from ``start`` (fraction 0) to ``end`` (fraction 1)."""
    if fraction is None:
        return None
    return start * (1.0 - fraction) + end * fraction


def hsv_to_rgb(hue: float, saturation: float, value: float) -> RGB:
    """
    Convert an HSV triple to 8-bit RGB.

    Args:
        hue: Hue in degrees, taken modulo 360
        saturation: Saturation in [0, 1]
        value: Value (brightness) in [0, 1]

    Returns:
        ``(r, g, b)`` with each channel an int in 0..255
    """
    hue = math.fmod(hue, 360.0)
    if hue < 0.0:
        hue += 360.0
    if hue >= 360.0:
        hue = 0.0

    hi = int(math.floor(hue / 60.0)) % 6
    f = hue / 60.0 - hi

    p = value * (1.0 - saturation)
    q = value * (1.0 - saturation * f)
    t = value * (1.0 - saturation * (1.0 - f))

    if hi == 0:
        rgb = (value, t, p)
    elif hi == 1:
        rgb = (q, value, p)
    elif hi == 2:
        rgb = (p, value, t)
    elif hi == 3:
        rgb = (p, q, value)
    elif hi == 4:
        rgb = (t, p, value)
    else:
        rgb = (value, p, q)

    r, g, b = (int(math.floor(channel * 255)) for channel in rgb)
    return (r, g, b)


def hue_color(fraction: Optional[float]) -> Optional[RGB]:
    """Blue-to-red colour ramp over a normalized fraction."""
    hue = mix(fraction, LOW_HUE, HIGH_HUE)
    if hue is None:
        return None
    return hsv_to_rgb(hue, 1.0, 1.0)
