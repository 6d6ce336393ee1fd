"""
Image loading, visualization saving, and other helpers.
"""

import os
import logging
import numpy as np
from PIL import Image
import matplotlib.pyplot as plt
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = [
    'load_image',
    'save_visualization',
    'save_heatmap',
    'validate_path',
    'LUMINANCE_R',
    'LUMINANCE_G',
    'LUMINANCE_B',
]

# ITU-R BT.601 luminance coefficients (standard for SDTV)
LUMINANCE_R = 0.299
LUMINANCE_G = 0.587
LUMINANCE_B = 0.114


def load_image(path: str) -> np.ndarray:
    """Load image file, convert to RGB numpy array."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")

    try:
        im = Image.open(path)

        # Convert to RGB (handles RGBA, grayscale, etc.)
        if im.mode != 'RGB':
            logger.debug(f"Converting image from {im.mode} to RGB")
            im = im.convert('RGB')

        arr = np.array(im)
        logger.debug(f"Loaded image: {arr.shape}, dtype={arr.dtype}")
        return arr

    except Exception as e:
        logger.error(f"Failed to load image: {e}")
        raise IOError(f"Cannot load image from {path}: {e}")


def _ensure_parent(outpath: str) -> None:
    outdir = os.path.dirname(outpath)
    if outdir:
        os.makedirs(outdir, exist_ok=True)


def save_visualization(vis: np.ndarray, outpath: str) -> None:
    """Write a uint8 (H, W, 3) attention visualization as an image file."""
    if vis.ndim != 3 or vis.shape[2] != 3:
        raise ValueError(f"Visualization must have shape (H, W, 3), got {vis.shape}")

    _ensure_parent(outpath)
    try:
        Image.fromarray(vis.astype(np.uint8)).save(outpath)
        logger.info(f"Visualization saved to: {outpath}")
    except Exception as e:
        logger.error(f"Failed to save visualization: {e}")
        raise IOError(f"Cannot save visualization to {outpath}: {e}")


def save_heatmap(attention: np.ndarray, image: np.ndarray, outpath: str,
                 max_checks: int = None, alpha: float = 0.45, cmap: str = 'jet') -> None:
    """
    Overlay an attention map on its image and save as PNG.

    Counts are scaled by `max_checks` when given, otherwise by the map's
    own maximum.
    """
    if attention.ndim != 2:
        raise ValueError(f"Attention map must be 2D, got shape {attention.shape}")

    if image.ndim not in (2, 3):
        raise ValueError(f"Image must be 2D or 3D, got shape {image.shape}")

    if attention.shape != image.shape[:2]:
        raise ValueError(
            f"Attention map {attention.shape} does not match image {image.shape[:2]}"
        )

    _ensure_parent(outpath)

    scale = max_checks if max_checks else attention.max()
    normalized = attention.astype(np.float32) / scale if scale > 0 else np.zeros_like(attention, dtype=np.float32)

    try:
        fig, ax = plt.subplots(figsize=(10, 10))
        ax.imshow(image.astype('uint8'), cmap='gray' if image.ndim == 2 else None)
        im = ax.imshow(normalized, alpha=alpha, cmap=cmap, vmin=0, vmax=1)
        ax.axis('off')

        cbar = plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label('Attention', rotation=270, labelpad=20)

        plt.tight_layout()
        plt.savefig(outpath, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info(f"Heatmap saved to: {outpath}")

    except Exception as e:
        logger.error(f"Failed to save heatmap: {e}")
        raise IOError(f"Cannot save heatmap to {outpath}: {e}")


def validate_path(path: str, must_exist: bool = False, base_dir: str = None) -> Path:
    """
    Check path is valid. If base_dir given, ensures path doesn't escape it.
    """
    if not path:
        raise ValueError("Path cannot be empty")

    try:
        p = Path(path).resolve()
    except Exception as e:
        raise ValueError(f"Invalid path: {path}") from e

    if base_dir is not None:
        base = Path(base_dir).resolve()
        try:
            p.relative_to(base)
        except ValueError:
            raise ValueError(f"Path traversal detected: {path} escapes {base_dir}")

    if must_exist and not p.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    return p
