"""
Persists manifests to disk.
"""

import logging
from pathlib import Path

from ftb2pack.exceptions import ManifestError
from ftb2pack.models.manifest import Manifest

log = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def save_manifest(work_dir: Path, manifest: Manifest) -> Path:
    """
    Writes ``manifest.json`` (UTF-8, pretty-printed) into ``work_dir``.

    Raises:
        ManifestError: If the file cannot be written.
    """
    path = work_dir / MANIFEST_FILENAME
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(manifest.to_json())
    except OSError as e:
        raise ManifestError(f"Failed to write manifest '{path}': {e}") from e
    log.debug(f"Wrote manifest to '{path}'.")
    return path


def load_manifest(path: Path) -> Manifest:
    """Reads a manifest written by `save_manifest`."""
    try:
        return Manifest.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ManifestError(f"Could not read manifest '{path}': {e}") from e
