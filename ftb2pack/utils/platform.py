"""
Host platform detection for the server installer download.
"""

import sys
from enum import Enum


class PlatformKey(str, Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MAC = "mac"
    OTHER = "other"

    @property
    def server_path(self) -> str:
        """The URL segment of the installer endpoint for this platform."""
        # Unknown hosts get the freebsd build.
        return "freebsd" if self is PlatformKey.OTHER else self.value

    @property
    def executable_suffix(self) -> str:
        return ".exe" if self is PlatformKey.WINDOWS else ""


def platform_key(platform: str | None = None) -> PlatformKey:
    """Maps ``sys.platform`` (or the given value) to a PlatformKey."""
    platform = sys.platform if platform is None else platform
    if platform.startswith(("win32", "cygwin")):
        return PlatformKey.WINDOWS
    if platform.startswith("linux"):
        return PlatformKey.LINUX
    if platform == "darwin":
        return PlatformKey.MAC
    return PlatformKey.OTHER
