"""
Utilities for building install paths.
"""

import logging
from pathlib import Path

from pathvalidate import sanitize_filename

from ftb2pack.models.manifest import OVERRIDES_DIR
from ftb2pack.models.pack import FileEntry

log = logging.getLogger(__name__)


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def try_create_dir(directory_path: Path) -> bool:
    """
    Like `create_dir` but reports failure instead of raising. Concurrent
    transfers race on shared parents, and a failure here surfaces again on write.
    """
    try:
        create_dir(directory_path)
        return True
    except (OSError, ValueError) as e:
        log.debug(f"Could not create directory '{directory_path}': {e}")
        return False


def work_dir_name(pack_display_name: str, version_name: str) -> str:
    """Name of the package directory: ``"<pack name> <version name>"``."""
    return sanitize_filename(f"{pack_display_name} {version_name}", platform="auto")


def override_target(root: Path, entry: FileEntry) -> Path:
    """``<root>/overrides/<entry.path>/<entry.name>``."""
    # Declared paths look like "./config/"; a leading separator must not
    # escape the overrides directory.
    return root / OVERRIDES_DIR / entry.path.lstrip("/\\") / entry.name


def server_installer_name(pack_id: int, version_id: int, suffix: str = "") -> str:
    return f"serverinstall_{pack_id}_{version_id}{suffix}"
