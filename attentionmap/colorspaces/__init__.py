"""
Colour space converters used for neighbourhood comparison.

Converter modules in this directory are discovered and registered on import.
Any module containing a class decorated with @register_converter is picked up.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

# Files to skip during auto-discovery
_SKIP_MODULES = {'__init__', 'base', 'registry'}


def _discover_converters() -> List[str]:
    """Import all converter modules, returns the names that loaded."""
    imported = []
    package_dir = Path(__file__).parent

    for module_info in pkgutil.iter_modules([str(package_dir)]):
        module_name = module_info.name

        if module_name in _SKIP_MODULES or module_name.startswith('_'):
            continue

        try:
            importlib.import_module(f'attentionmap.colorspaces.{module_name}')
            imported.append(module_name)
            logger.debug(f"Loaded converter module: {module_name}")
        except ImportError as e:
            logger.warning(f"Failed to import converter module {module_name}: {e}")

    return imported


_discovered_modules = _discover_converters()

from attentionmap.colorspaces.registry import (
    CONVERTER_REGISTRY,
    register_converter,
    get_converter,
    get_converter_class,
)
from attentionmap.colorspaces.base import ColorConverter

__all__ = [
    'CONVERTER_REGISTRY',
    'register_converter',
    'get_converter',
    'get_converter_class',
    'ColorConverter',
] + _discovered_modules
