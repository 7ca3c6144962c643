"""
Core application engine for turning a modpack version into an install package.

`translate` is the pure descriptor-to-manifest step; `InstallManager` drives
directory preparation, manifest persistence and the concurrent override
transfers.
"""

from .install_manager import InstallManager
from .translator import translate

__all__ = ["InstallManager", "translate"]
