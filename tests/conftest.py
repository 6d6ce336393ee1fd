"""
Pytest configuration and fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded generator so statistical tests are repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def sample_image():
    """Small random RGB image."""
    return np.random.default_rng(42).integers(0, 256, (24, 32, 3), dtype=np.uint8)


@pytest.fixture
def uniform_image():
    """Flat gray image."""
    return np.full((12, 14, 3), 128, dtype=np.uint8)


@pytest.fixture
def odd_pixel_image():
    """Gray 15x15 image with one red pixel in the middle."""
    img = np.full((15, 15, 3), 128, dtype=np.uint8)
    img[7, 7] = (255, 0, 0)
    return img


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    import json
    config = {
        "version": "1.0",
        "neighbourhood_size": 4,
        "max_checks": 20,
        "max_dist": 30,
        "color_space": "rgb",
        "seed": 5
    }
    config_path = tmp_path / "test_config.json"
    with open(config_path, 'w') as f:
        json.dump(config, f)
    return str(config_path)


@pytest.fixture
def temp_image_file(tmp_path, sample_image):
    """Create a temporary image file."""
    from PIL import Image
    img_path = tmp_path / "test_image.png"
    Image.fromarray(sample_image).save(img_path)
    return str(img_path)
