"""
Main attention model - scans an image and counts neighbourhood novelty per pixel.

Implements the visual attention estimator from F. W. M. Stentiford, "An
estimator for visual attention through competitive novelty with application
to image compression", Picture Coding Symposium, 2001.
"""

import json
import logging
import os
import numpy as np
from importlib.resources import files
from pathlib import Path
from typing import Optional, Union
from dataclasses import dataclass
from tqdm import tqdm
from attentionmap.colorspaces import get_converter
from attentionmap.neighbourhood import (
    RADIUS,
    neighbour_offsets,
    random_neighbourhood,
    sample_neighbourhood,
    sample_neighbourhoods,
    count_mismatches,
)

logger = logging.getLogger(__name__)

# Defaults, taken from the paper
DEFAULT_NEIGHBOURHOOD_SIZE = 3
DEFAULT_MAX_CHECKS = 100
# Heuristic, depends on the colour space
DEFAULT_MAX_DIST = 40
DEFAULT_COLOR_SPACE = 'hsv'
DEFAULT_CONFIG_PATH = 'config/attention.json'
SUPPORTED_CONFIG_VERSIONS = {'1.0'}
CONFIG_KEYS = {'version', 'neighbourhood_size', 'max_checks', 'max_dist', 'color_space', 'seed'}

RandomSource = Union[None, int, np.random.Generator]


def _find_config_file(config_path: str = DEFAULT_CONFIG_PATH) -> str:
    """
    Find config file, checking multiple locations in this order:
    1. Absolute path (if provided)
    2. Relative to current working directory
    3. Relative to package installation directory
    4. Inside installed package data

    Raises:
        FileNotFoundError: If config file cannot be found
    """
    if os.path.isabs(config_path):
        if os.path.exists(config_path):
            return config_path
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if os.path.exists(config_path):
        return os.path.abspath(config_path)

    package_dir = Path(__file__).parent.parent
    package_config = package_dir / config_path
    if package_config.exists():
        return str(package_config)

    try:
        config_file = files('attentionmap').parent / config_path
        if config_file.exists():
            return str(config_file)
    except (ModuleNotFoundError, TypeError, AttributeError) as e:
        logger.debug(f"Could not locate config via importlib.resources: {e}")

    raise FileNotFoundError(
        f"Config file '{config_path}' not found. Searched in:\n"
        f"  - Current directory: {os.path.abspath(config_path)}\n"
        f"  - Package directory: {package_config}\n"
        f"Please ensure the config file exists or provide an absolute path."
    )


def _check_int(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def attention_visualization(attention: np.ndarray, max_checks: int) -> np.ndarray:
    """
    Grayscale (H, W, 3) uint8 image of an attention map.

    Each channel is round(255 * count / max_checks), lighter pixels drew
    more attention. A zero max_checks gives a black image.
    """
    if max_checks <= 0:
        gray = np.zeros(attention.shape, dtype=np.uint8)
    else:
        scaled = np.floor(255.0 * attention.astype(np.float64) / max_checks + 0.5)
        gray = np.clip(scaled, 0, 255).astype(np.uint8)
    return np.repeat(gray[..., None], 3, axis=-1)


@dataclass
class AttentionResult:
    """Output from compute_attention()."""
    attention: np.ndarray
    visualization: np.ndarray
    max_checks: int


class StentifordModel:
    """
    Competitive novelty attention model.

    For every interior pixel a random neighbourhood shape is drawn and
    compared against the same shape at `max_checks` random locations.
    Each comparison that fails to match adds one to the pixel's count.
    """

    def __init__(self, neighbourhood_size: int = DEFAULT_NEIGHBOURHOOD_SIZE,
                 max_checks: int = DEFAULT_MAX_CHECKS,
                 max_dist: int = DEFAULT_MAX_DIST,
                 color_space: str = DEFAULT_COLOR_SPACE,
                 rng: RandomSource = None):
        self.offsets = neighbour_offsets(RADIUS)
        self.radius = RADIUS

        table_size = len(self.offsets)
        self.neighbourhood_size = _check_int('neighbourhood_size', neighbourhood_size, 1)
        if self.neighbourhood_size >= table_size:
            raise ValueError(
                f"neighbourhood_size must be < {table_size} for radius {RADIUS}, "
                f"got {self.neighbourhood_size}"
            )
        self.max_checks = _check_int('max_checks', max_checks, 0)
        self.max_dist = _check_int('max_dist', max_dist, 0)

        self.color_space = color_space
        self.converter = get_converter(color_space)
        self.rng = np.random.default_rng(rng)

        self._attention: Optional[np.ndarray] = None
        logger.debug(
            f"Model: neighbourhood_size={self.neighbourhood_size}, max_checks={self.max_checks}, "
            f"max_dist={self.max_dist}, color_space={self.color_space}"
        )

    @classmethod
    def from_config(cls, path: str = None) -> 'StentifordModel':
        """Load model parameters from JSON config.

        Args:
            path: Path to config file (can be absolute or relative).
                  Will search multiple locations if relative.
                  If None, uses ATTENTIONMAP_CONFIG_PATH env var or default.

        Raises:
            FileNotFoundError: If config file cannot be found
            json.JSONDecodeError: If config file is not valid JSON
            ValueError: If config holds invalid parameter values
        """
        if path is None:
            path = os.environ.get('ATTENTIONMAP_CONFIG_PATH', DEFAULT_CONFIG_PATH)

        try:
            config_file = _find_config_file(path)
            logger.info(f"Loading config from: {config_file}")
            with open(config_file, 'r') as f:
                cfg = json.load(f)
        except FileNotFoundError:
            logger.error(f"Config not found: {path}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Bad JSON in config: {e}")
            raise

        if not isinstance(cfg, dict):
            raise ValueError(f"Config must be a JSON object, got {type(cfg).__name__}")

        config_version = cfg.get('version')
        if config_version and config_version not in SUPPORTED_CONFIG_VERSIONS:
            logger.warning(
                f"Config version '{config_version}' may not be fully compatible. "
                f"Supported versions: {SUPPORTED_CONFIG_VERSIONS}"
            )

        unknown = set(cfg.keys()) - CONFIG_KEYS
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")

        seed = cfg.get('seed')
        env_seed = os.environ.get('ATTENTIONMAP_SEED')
        if env_seed:
            try:
                seed = int(env_seed)
                logger.info(f"Using seed from environment: {seed}")
            except ValueError:
                logger.warning(f"Invalid ATTENTIONMAP_SEED '{env_seed}', using config value")

        if seed is not None:
            seed = _check_int('seed', seed, 0)

        return cls(
            neighbourhood_size=cfg.get('neighbourhood_size', DEFAULT_NEIGHBOURHOOD_SIZE),
            max_checks=cfg.get('max_checks', DEFAULT_MAX_CHECKS),
            max_dist=cfg.get('max_dist', DEFAULT_MAX_DIST),
            color_space=cfg.get('color_space', DEFAULT_COLOR_SPACE),
            rng=seed,
        )

    def get_config(self) -> dict:
        """Model parameters as a plain dict."""
        return {
            'neighbourhood_size': self.neighbourhood_size,
            'max_checks': self.max_checks,
            'max_dist': self.max_dist,
            'color_space': self.color_space,
        }

    @property
    def attention_model(self) -> Optional[np.ndarray]:
        """Attention map from the last extract() call, None before the first."""
        return self._attention

    def get_attention_model(self) -> Optional[np.ndarray]:
        return self._attention

    def extract(self, img: np.ndarray, show_progress: bool = False) -> np.ndarray:
        """
        Compute the attention map of an image.

        Args:
            img: (H, W, C) image with C >= 3 (first three channels are used)
                 or (H, W) grayscale, values in 0-255
            show_progress: show a progress bar over image rows

        Returns:
            int32 array of shape (H, W) indexed [y, x]. Pixels within the
            radius of any border stay 0.
        """
        if not isinstance(img, np.ndarray):
            raise TypeError(f"img must be numpy array, got {type(img)}")

        if img.ndim not in (2, 3):
            raise ValueError(f"Image must be 2D or 3D, got shape {img.shape}")

        if img.ndim == 2:
            img = np.stack([img, img, img], axis=-1)

        if img.shape[2] < 3:
            raise ValueError(f"Image needs at least 3 channels, got {img.shape[2]}")

        H, W = img.shape[:2]
        r = self.radius
        attention = np.zeros((H, W), dtype=np.int32)
        self._attention = attention

        if H < 2 * r + 1 or W < 2 * r + 1:
            logger.warning(f"Image ({H}x{W}) smaller than scan window ({2 * r + 1}), nothing to score")
            return attention

        converted = self.converter.convert_image(img[..., :3])
        table_size = len(self.offsets)

        logger.info(f"Scanning {(H - 2 * r) * (W - 2 * r)} pixels with {self.max_checks} checks each")

        rows = range(r, H - r)
        if show_progress:
            rows = tqdm(rows, desc="Scanning rows", unit="row")

        for y in rows:
            for x in range(r, W - r):
                shape = random_neighbourhood(self.rng, table_size, self.neighbourhood_size)
                reference = sample_neighbourhood(converted, x, y, self.offsets, shape)

                # Comparison sites cover the whole interior, the pixel itself included
                rxs = self.rng.integers(r, W - r, size=self.max_checks)
                rys = self.rng.integers(r, H - r, size=self.max_checks)
                candidates = sample_neighbourhoods(converted, rxs, rys, self.offsets, shape)

                attention[y, x] = count_mismatches(reference, candidates, self.max_dist)

        logger.debug(f"Attention range: {attention.min()}..{attention.max()}, mean {attention.mean():.2f}")
        return attention

    def get_attention_visualization(self) -> np.ndarray:
        """Grayscale visualization of the last attention map. Lighter = more attention."""
        if self._attention is None:
            raise RuntimeError("No attention map yet, call extract() first")
        return attention_visualization(self._attention, self.max_checks)


def compute_attention(img: np.ndarray, show_progress: bool = False, **params) -> AttentionResult:
    """One-shot helper: build a model from keyword params and run it on img."""
    model = StentifordModel(**params)
    attention = model.extract(img, show_progress=show_progress)
    return AttentionResult(
        attention=attention,
        visualization=model.get_attention_visualization(),
        max_checks=model.max_checks,
    )
