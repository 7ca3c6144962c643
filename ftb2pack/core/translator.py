"""
Translates a modpack version descriptor into a portable package manifest.
"""

from ftb2pack.exceptions import ManifestError
from ftb2pack.models.manifest import (
    UNKNOWN_GAME_VERSION,
    Manifest,
    ManifestFile,
    MinecraftSection,
    ModLoaderEntry,
)
from ftb2pack.models.pack import VersionDescriptor


def translate(
    descriptor: VersionDescriptor | None, pack_display_name: str = ""
) -> Manifest:
    """
    Builds the manifest for a version.

    Mod files carrying a CurseForge reference become dependencies, in input
    order. Every ``modloader`` target is listed as a primary loader, even when
    there is more than one. The manifest version is the descriptor's display
    name; ``pack_display_name`` is only used in error messages.

    Raises:
        ManifestError: If no descriptor is given.
    """
    if descriptor is None:
        raise ManifestError(
            f"Cannot build a manifest for '{pack_display_name}': no version data."
        )

    files = [
        ManifestFile(
            project_id=entry.curseforge.project,
            file_id=entry.curseforge.file,
            required=True,
        )
        for entry in descriptor.files
        if entry.is_dependency
    ]

    mod_loaders = [
        ModLoaderEntry(id=f"{target.name}-{target.version}", primary=True)
        for target in descriptor.modloaders
    ]

    return Manifest(
        minecraft=MinecraftSection(
            version=(
                UNKNOWN_GAME_VERSION
                if descriptor.minecraft_version is None
                else descriptor.minecraft_version
            ),
            mod_loaders=mod_loaders,
        ),
        version=descriptor.name,
        files=files,
    )
