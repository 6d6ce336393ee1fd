"""
attentionmap - per-pixel visual attention through competitive novelty.

A pixel draws attention when small neighbourhoods resembling its own are
hard to find elsewhere in the image:

    >>> from attentionmap import StentifordModel, load_image
    >>> model = StentifordModel(rng=42)
    >>> attention = model.extract(load_image('photo.jpg'))
    >>> vis = model.get_attention_visualization()

Model parameters can also be read from JSON:

    >>> model = StentifordModel.from_config('config/attention.json')
"""

# Single source of truth: version comes from pyproject.toml via importlib.metadata
try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version('attentionmap')
except Exception:
    # Running from a source checkout without an install
    __version__ = '0.1.0'

from attentionmap.core import (
    StentifordModel,
    AttentionResult,
    attention_visualization,
    compute_attention,
)
from attentionmap.utils import load_image, save_visualization, save_heatmap, validate_path
from attentionmap.colorspaces import get_converter, register_converter, ColorConverter

__all__ = [
    'StentifordModel',
    'AttentionResult',
    'attention_visualization',
    'compute_attention',
    'load_image',
    'save_visualization',
    'save_heatmap',
    'validate_path',
    'get_converter',
    'register_converter',
    'ColorConverter',
    '__version__',
]
