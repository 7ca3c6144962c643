"""
Storage Layer.

This package handles data persistence: the INI configuration file and the
manifest written into each install package.
"""

from .config_manager import ConfigManager
from .manifest_store import MANIFEST_FILENAME, load_manifest, save_manifest

__all__ = ["MANIFEST_FILENAME", "ConfigManager", "load_manifest", "save_manifest"]
