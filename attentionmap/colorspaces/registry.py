"""
Simple registry so colour converters can be looked up by name.
"""

from typing import Dict, Type, Optional
from attentionmap.colorspaces.base import ColorConverter

# Global registry mapping converter names to classes
CONVERTER_REGISTRY: Dict[str, Type[ColorConverter]] = {}


def register_converter(cls: Type[ColorConverter]) -> Type[ColorConverter]:
    """
    Decorator to add a converter to the registry.

    Usage:
        @register_converter
        class MyConverter(ColorConverter):
            name = 'my_space'
            ...
    """
    if cls.name in CONVERTER_REGISTRY:
        raise ValueError(f"Converter '{cls.name}' already registered")

    CONVERTER_REGISTRY[cls.name] = cls
    return cls


def get_converter_class(name: str) -> Optional[Type[ColorConverter]]:
    """Get a converter class by name, or None if not found."""
    return CONVERTER_REGISTRY.get(name)


def get_converter(name: str) -> ColorConverter:
    """Instantiate a registered converter, raises ValueError for unknown names."""
    cls = CONVERTER_REGISTRY.get(name)
    if cls is None:
        available = sorted(CONVERTER_REGISTRY.keys())
        raise ValueError(f"Color space '{name}' not found. Available: {available}")
    return cls()
