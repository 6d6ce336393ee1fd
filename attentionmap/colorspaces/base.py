"""
Base class that all colour converters inherit from.
"""

from abc import ABC, abstractmethod
from typing import Tuple
import numpy as np


class ColorConverter(ABC):
    """
    Base class for colour converters. Subclass this and implement convert().
    """

    name = 'base_converter'

    @abstractmethod
    def convert(self, c0, c1, c2) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Convert raw channel values into the comparison colour space.

        Args:
            c0, c1, c2: RGB channel values in 0-255, scalars or equally
                shaped arrays

        Returns:
            Three integer arrays with the converted channels.
        """
        raise NotImplementedError

    def convert_image(self, img: np.ndarray) -> np.ndarray:
        """Convert an (H, W, 3) image, returns an int32 (H, W, 3) array."""
        channels = self.convert(img[..., 0], img[..., 1], img[..., 2])
        return np.stack(channels, axis=-1).astype(np.int32)
