"""
Pydantic models for the portable modpack manifest (``manifest.json``).

The manifest follows the CurseForge modpack format: camelCase keys, except for
``projectID``/``fileID`` which downstream launchers expect verbatim.
"""

from pydantic import BaseModel, ConfigDict, Field

MANIFEST_TYPE = "minecraftModpack"
MANIFEST_VERSION = 1
MANIFEST_AUTHOR = "FTB2Pack"
MANIFEST_NAME = "Modpack"
OVERRIDES_DIR = "overrides"
UNKNOWN_GAME_VERSION = "unknown"


class ModLoaderEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    primary: bool = True


class MinecraftSection(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = UNKNOWN_GAME_VERSION
    mod_loaders: list[ModLoaderEntry] = Field(
        default_factory=list, alias="modLoaders"
    )


class ManifestFile(BaseModel):
    """A registry dependency of the modpack."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_id: int = Field(alias="projectID")
    file_id: int = Field(alias="fileID")
    required: bool = True


class Manifest(BaseModel):
    """The package descriptor written next to the overrides directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    minecraft: MinecraftSection
    manifest_type: str = Field(MANIFEST_TYPE, alias="manifestType")
    manifest_version: int = Field(MANIFEST_VERSION, alias="manifestVersion")
    name: str = MANIFEST_NAME
    version: str
    author: str = MANIFEST_AUTHOR
    files: list[ManifestFile] = Field(default_factory=list)
    overrides: str = OVERRIDES_DIR

    def to_json(self) -> str:
        """Pretty-printed JSON using the on-disk key names."""
        return self.model_dump_json(by_alias=True, indent=2)
