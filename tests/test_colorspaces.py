"""
Tests for colour converters and their registry.
"""

import pytest
import numpy as np
from attentionmap.colorspaces import (
    CONVERTER_REGISTRY,
    ColorConverter,
    get_converter,
    get_converter_class,
    register_converter,
)
from attentionmap.colorspaces.hsv import HSVConverter
from attentionmap.colorspaces.rgb import RGBConverter
from attentionmap.colorspaces.ycbcr import YCbCrConverter


class TestRegistry:
    def test_builtins_discovered(self):
        assert {'hsv', 'rgb', 'ycbcr'} <= set(CONVERTER_REGISTRY)

    def test_get_converter(self):
        assert isinstance(get_converter('hsv'), HSVConverter)

    def test_get_converter_class(self):
        assert get_converter_class('rgb') is RGBConverter
        assert get_converter_class('nope') is None

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Available"):
            get_converter('nope')

    def test_duplicate_registration(self):
        with pytest.raises(ValueError, match="already registered"):
            @register_converter
            class Duplicate(ColorConverter):
                name = 'hsv'

                def convert(self, c0, c1, c2):
                    return c0, c1, c2

    def test_register_custom(self):
        @register_converter
        class Swap(ColorConverter):
            name = 'test_swap'

            def convert(self, c0, c1, c2):
                return np.asarray(c2), np.asarray(c1), np.asarray(c0)

        try:
            out = get_converter('test_swap').convert(1, 2, 3)
            assert [int(v) for v in out] == [3, 2, 1]
        finally:
            CONVERTER_REGISTRY.pop('test_swap')


class TestHSV:
    @pytest.mark.parametrize('rgb, hsv', [
        ((255, 0, 0), (0, 100, 100)),
        ((0, 255, 0), (120, 100, 100)),
        ((0, 0, 255), (240, 100, 100)),
        ((255, 255, 0), (60, 100, 100)),
        ((255, 0, 255), (300, 100, 100)),
        ((0, 0, 0), (0, 0, 0)),
        ((255, 255, 255), (0, 0, 100)),
        ((128, 128, 128), (0, 0, 50)),
    ])
    def test_known_colours(self, rgb, hsv):
        out = HSVConverter().convert(*rgb)
        assert tuple(int(v) for v in out) == hsv

    def test_hue_wraps_to_positive(self):
        # red dominant with more blue than green gives a negative raw hue
        h, s, v = HSVConverter().convert(255, 0, 10)
        assert 0 <= int(h) < 360

    def test_ranges_on_random_pixels(self):
        img = np.random.default_rng(0).integers(0, 256, (20, 20, 3), dtype=np.uint8)
        out = HSVConverter().convert_image(img)
        assert out.dtype == np.int32
        assert out.shape == img.shape
        assert out[..., 0].min() >= 0 and out[..., 0].max() < 360
        assert out[..., 1].min() >= 0 and out[..., 1].max() <= 100
        assert out[..., 2].min() >= 0 and out[..., 2].max() <= 100

    def test_vectorised_matches_scalar(self):
        img = np.random.default_rng(1).integers(0, 256, (4, 4, 3), dtype=np.uint8)
        out = HSVConverter().convert_image(img)
        for y in range(4):
            for x in range(4):
                single = HSVConverter().convert(*img[y, x])
                assert tuple(int(v) for v in single) == tuple(out[y, x].tolist())


class TestOtherSpaces:
    def test_rgb_identity(self):
        img = np.random.default_rng(2).integers(0, 256, (5, 6, 3), dtype=np.uint8)
        np.testing.assert_array_equal(RGBConverter().convert_image(img), img.astype(np.int32))

    def test_ycbcr_gray_has_neutral_chroma(self):
        y, cb, cr = YCbCrConverter().convert(100, 100, 100)
        assert (int(y), int(cb), int(cr)) == (100, 128, 128)

    def test_ycbcr_white(self):
        y, cb, cr = YCbCrConverter().convert(255, 255, 255)
        assert (int(y), int(cb), int(cr)) == (255, 128, 128)
