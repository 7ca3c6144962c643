"""
Data Models Layer.

This package contains Pydantic models for the remote modpack documents, the
manifest written to disk, the application configuration and install results.
"""

from .catalog import Modpack, ModpackCatalog, ModpackVersion
from .config import AppConfig
from .manifest import Manifest, ManifestFile, MinecraftSection, ModLoaderEntry
from .outcome import FetchOutcome, FetchStatus, InstallReport, InstallState
from .pack import FileEntry, RegistryReference, Specs, Target, VersionDescriptor

__all__ = [
    "AppConfig",
    "FetchOutcome",
    "FetchStatus",
    "FileEntry",
    "InstallReport",
    "InstallState",
    "Manifest",
    "ManifestFile",
    "MinecraftSection",
    "ModLoaderEntry",
    "Modpack",
    "ModpackCatalog",
    "ModpackVersion",
    "RegistryReference",
    "Specs",
    "Target",
    "VersionDescriptor",
]
