"""
Pydantic models for the modpack catalog listing.
"""

from pydantic import BaseModel, ConfigDict, Field

SITE_URL = "https://www.feed-the-beast.com/modpacks/"


class Memory(BaseModel):
    min: int = 0
    recommended: int = 0


class ModpackArt(BaseModel):
    background: str | None = None
    logo: str | None = None


class ModpackStats(BaseModel):
    plays: int = 0
    installs: int = 0
    plays_14d: int = 0


class ModpackVersion(BaseModel):
    """A version entry as listed in the catalog (not the full descriptor)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    type: str = ""
    minecraft: str = ""
    loader: str = ""
    loader_type: str = Field("", alias="loaderType")
    memory: Memory = Field(default_factory=Memory)


class Modpack(BaseModel):
    """A modpack entry in the catalog."""

    id: int
    slug: str = ""
    name: str
    synopsis: str = ""
    type: str = ""
    versions: list[ModpackVersion] = Field(default_factory=list)
    art: ModpackArt = Field(default_factory=ModpackArt)
    stats: ModpackStats = Field(default_factory=ModpackStats)
    featured: bool = False
    tags: list[str] = Field(default_factory=list)
    released: int = 0
    updated: int = 0

    @property
    def site_url(self) -> str:
        return f"{SITE_URL}{self.id}-{self.slug}"

    def find_version(self, selection: str | int) -> ModpackVersion | None:
        """
        Finds a version by display name, falling back to its numeric id.

        Names win over ids so that a version literally named "12" is still
        selectable by name.
        """
        text = str(selection).strip()
        for version in self.versions:
            if version.name == text:
                return version
        if text.isdigit():
            for version in self.versions:
                if version.id == int(text):
                    return version
        return None


class ModpackCatalog(BaseModel):
    """The full catalog document."""

    success: bool = False
    packs: list[Modpack] = Field(default_factory=list)

    def find_pack(self, pack_id: int) -> Modpack | None:
        return next((pack for pack in self.packs if pack.id == pack_id), None)

    def search(self, term: str) -> list[Modpack]:
        """Case-insensitive match against pack names, slugs and tags."""
        needle = term.strip().lower()
        if not needle:
            return list(self.packs)
        return [
            pack
            for pack in self.packs
            if needle in pack.name.lower()
            or needle in pack.slug.lower()
            or any(needle in tag.lower() for tag in pack.tags)
        ]
