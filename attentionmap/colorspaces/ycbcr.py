"""
RGB to YCbCr (BT.601, full range).
"""

import numpy as np
from attentionmap.colorspaces.base import ColorConverter
from attentionmap.colorspaces.registry import register_converter
from attentionmap.utils import LUMINANCE_R, LUMINANCE_G, LUMINANCE_B


@register_converter
class YCbCrConverter(ColorConverter):
    """
    Separates luma from chroma, so brightness changes weigh on a
    single channel instead of all three.
    """

    name = 'ycbcr'

    def convert(self, c0, c1, c2):
        r = np.asarray(c0, dtype=np.float64)
        g = np.asarray(c1, dtype=np.float64)
        b = np.asarray(c2, dtype=np.float64)

        y = LUMINANCE_R * r + LUMINANCE_G * g + LUMINANCE_B * b
        cb = 128.0 - 0.168736 * r - 0.331264 * g + 0.5 * b
        cr = 128.0 + 0.5 * r - 0.418688 * g - 0.081312 * b

        return (
            np.rint(y).astype(np.int32),
            np.rint(cb).astype(np.int32),
            np.rint(cr).astype(np.int32),
        )
