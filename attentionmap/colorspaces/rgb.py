"""
Identity conversion, compares raw RGB values.
"""

import numpy as np
from attentionmap.colorspaces.base import ColorConverter
from attentionmap.colorspaces.registry import register_converter


@register_converter
class RGBConverter(ColorConverter):
    """Leaves channels untouched."""

    name = 'rgb'

    def convert(self, c0, c1, c2):
        return (
            np.asarray(c0, dtype=np.int32),
            np.asarray(c1, dtype=np.int32),
            np.asarray(c2, dtype=np.int32),
        )
