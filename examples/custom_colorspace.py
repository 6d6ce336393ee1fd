"""
Example: registering a custom colour space.

Any ColorConverter subclass decorated with @register_converter can be
selected by name, the same way the built-in 'hsv', 'rgb' and 'ycbcr'
spaces are.
"""

import numpy as np
from attentionmap import StentifordModel, ColorConverter, register_converter


@register_converter
class GrayConverter(ColorConverter):
    """Compares luminance only, puts it on all three channels."""

    name = 'gray'

    def convert(self, c0, c1, c2):
        y = np.rint(0.299 * np.asarray(c0) + 0.587 * np.asarray(c1) + 0.114 * np.asarray(c2))
        y = y.astype(np.int32)
        return y, y, y


def main():
    rng = np.random.default_rng(0)
    img = rng.integers(100, 140, size=(48, 48, 3), dtype=np.uint8)
    img[20:24, 20:24] = (250, 250, 250)

    for space in ('hsv', 'ycbcr', 'gray'):
        model = StentifordModel(color_space=space, max_checks=50, max_dist=30, rng=1)
        attention = model.extract(img)
        print(f"{space:6s} max={attention.max():3d} mean={attention.mean():6.2f}")


if __name__ == '__main__':
    main()
