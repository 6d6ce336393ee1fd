"""
RGB to HSV, the default space for neighbourhood comparison.
"""

import numpy as np
from attentionmap.colorspaces.base import ColorConverter
from attentionmap.colorspaces.registry import register_converter


@register_converter
class HSVConverter(ColorConverter):
    """
    Hue in degrees [0, 360), saturation and value in [0, 100].

    All three are truncated to integers so an L1 distance of 40 (the
    default threshold) means roughly the same thing on every channel.
    """

    name = 'hsv'

    def convert(self, c0, c1, c2):
        r = np.asarray(c0, dtype=np.float64)
        g = np.asarray(c1, dtype=np.float64)
        b = np.asarray(c2, dtype=np.float64)

        mx = np.maximum(np.maximum(r, g), b)
        mn = np.minimum(np.minimum(r, g), b)
        delta = mx - mn
        safe_delta = np.where(delta == 0, 1.0, delta)

        h = np.where(
            mx == r,
            (g - b) / safe_delta,
            np.where(mx == g, 2.0 + (b - r) / safe_delta, 4.0 + (r - g) / safe_delta),
        ) * 60.0
        h = np.where(delta == 0, 0.0, np.mod(h, 360.0))

        s = np.where(mx == 0, 0.0, delta / np.where(mx == 0, 1.0, mx)) * 100.0
        v = mx / 255.0 * 100.0

        return h.astype(np.int32), s.astype(np.int32), v.astype(np.int32)
