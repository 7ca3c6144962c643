"""
Pydantic models for a single modpack version as served by the modpacks API.

Field names mirror the wire document exactly (``clientonly``, ``serveronly``,
``curseforge`` ...) so a fetched descriptor can be re-serialised without loss.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MOD_FILE_TYPE = "mod"
GAME_TARGET_TYPE = "game"
MODLOADER_TARGET_TYPE = "modloader"
MINECRAFT_TARGET_NAME = "minecraft"


class RegistryReference(BaseModel):
    """The CurseForge ``(project, file)`` pair identifying a mod file."""

    model_config = ConfigDict(frozen=True)

    project: int
    file: int


class Specs(BaseModel):
    """Minimum and recommended memory for a version, in megabytes."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    minimum: int = 0
    recommended: int = 0


class Target(BaseModel):
    """A game, mod loader or runtime requirement declared by a version."""

    model_config = ConfigDict(frozen=True)

    version: str
    id: int = 0
    name: str
    type: str
    updated: int = 0

    @property
    def is_minecraft(self) -> bool:
        return self.type == GAME_TARGET_TYPE and self.name == MINECRAFT_TARGET_NAME

    @property
    def is_modloader(self) -> bool:
        return self.type == MODLOADER_TARGET_TYPE


class FileEntry(BaseModel):
    """One file belonging to a version."""

    model_config = ConfigDict(frozen=True)

    version: str = ""
    path: str = ""
    url: str | None = None
    mirrors: list[str] = Field(default_factory=list)
    sha1: str = ""
    size: int = 0
    tags: list[str] = Field(default_factory=list)
    clientonly: bool = False
    serveronly: bool = False
    optional: bool = False
    id: int = 0
    name: str
    type: str = ""
    updated: int = 0
    curseforge: RegistryReference | None = None

    @field_validator("mirrors", "tags", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return [] if v is None else v

    @property
    def registry_reference(self) -> RegistryReference | None:
        return self.curseforge

    @property
    def is_dependency(self) -> bool:
        """
        True when the file is resolved through the mod registry instead of being
        shipped as an override.
        """
        return self.type == MOD_FILE_TYPE and self.curseforge is not None

    @property
    def download_url(self) -> str | None:
        """The trimmed download URL, or None when there is nothing to fetch."""
        if self.url is None:
            return None
        url = self.url.strip()
        return url or None


class VersionDescriptor(BaseModel):
    """An installable version of a modpack, including its files and targets."""

    model_config = ConfigDict(frozen=True)

    files: list[FileEntry] = Field(default_factory=list)
    specs: Specs = Field(default_factory=Specs)
    targets: list[Target] = Field(default_factory=list)

    installs: int = 0
    refreshed: int = 0
    changelog: str = ""
    parent: int = 0
    notification: str = ""
    links: list[str] = Field(default_factory=list)
    status: str = ""
    id: int
    name: str
    type: str = ""
    updated: int = 0
    private: bool = False

    @field_validator("files", "targets", "links", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return [] if v is None else v

    @property
    def minecraft_version(self) -> str | None:
        for target in self.targets:
            if target.is_minecraft:
                return target.version
        return None

    @property
    def modloaders(self) -> list[Target]:
        return [target for target in self.targets if target.is_modloader]
