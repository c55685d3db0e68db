#!/usr/bin/env python3
"""
sRGB Module
Gamma conversion between linear colors (in memory) and sRGB colors (in files)
"""

import numpy as np


def to_srgb(value):
    """Convert a linear color value to sRGB

    Args:
        value: Linear value (float) or [r, g, b]

    Returns:
        float or np.ndarray: sRGB value(s), clamped to [0, 1]
    """
    if np.ndim(value) > 0:
        return np.array([to_srgb(float(v)) for v in value])

    if value >= 1.0:
        return 1.0
    if value <= 0.0:
        return 0.0
    if value <= 0.0031308:
        return 12.92 * value
    return 1.055 * value ** 0.41666 - 0.055


def from_srgb(value):
    """Convert an sRGB color value to linear

    Values above 1 are not clamped so HDR colors survive a load.

    Args:
        value: sRGB value (float) or [r, g, b]

    Returns:
        float or np.ndarray: Linear value(s)
    """
    if np.ndim(value) > 0:
        return np.array([from_srgb(float(v)) for v in value])

    if value <= 0.0:
        return 0.0
    if value <= 0.04045:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4
