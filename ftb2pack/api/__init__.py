"""
Modpack API Layer.

This package handles all communication with the public modpack API.
"""

from .client import ModpacksAPIClient

__all__ = ["ModpacksAPIClient"]
