import pytest
from pydantic import ValidationError

from ftb2pack.models.catalog import ModpackCatalog
from ftb2pack.models.pack import FileEntry, VersionDescriptor
from tests.factories import CATALOG, descriptor_doc, file_doc, target_doc


def test_descriptor_parses_wire_document():
    doc = descriptor_doc(
        files=[
            file_doc("jei.jar", path="./mods/", type="mod", url="https://x/jei.jar",
                     curseforge=(238222, 4712868)),
            file_doc("options.txt", url="https://x/options.txt"),
        ],
        targets=[target_doc("game", "minecraft", "1.20.1")],
    )
    doc["files"][0]["clientonly"] = True

    descriptor = VersionDescriptor.model_validate(doc)

    assert descriptor.id == 100
    assert descriptor.specs.recommended == 6144
    jei, options = descriptor.files
    assert jei.clientonly is True
    assert jei.registry_reference.project == 238222
    assert jei.registry_reference.file == 4712868
    assert jei.mirrors == []
    assert options.registry_reference is None
    assert descriptor.minecraft_version == "1.20.1"


def test_descriptor_is_immutable():
    descriptor = VersionDescriptor.model_validate(descriptor_doc())
    with pytest.raises(ValidationError):
        descriptor.name = "other"


def test_descriptor_requires_id_and_name():
    doc = descriptor_doc()
    del doc["name"]
    with pytest.raises(ValidationError):
        VersionDescriptor.model_validate(doc)


@pytest.mark.parametrize(
    "url, expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        (" https://x/a.cfg ", "https://x/a.cfg"),
    ],
)
def test_download_url_is_trimmed(url, expected):
    entry = FileEntry.model_validate(file_doc("a.cfg", url=url))
    assert entry.download_url == expected


def test_only_mods_with_registry_reference_are_dependencies():
    mod = FileEntry.model_validate(file_doc("a.jar", type="mod", curseforge=(1, 2)))
    unlisted_mod = FileEntry.model_validate(file_doc("b.jar", type="mod"))
    resource = FileEntry.model_validate(
        file_doc("c.zip", type="resource", curseforge=(3, 4))
    )
    assert mod.is_dependency
    assert not unlisted_mod.is_dependency
    assert not resource.is_dependency


def test_catalog_lookup_and_aliases():
    catalog = ModpackCatalog.model_validate(CATALOG)
    pack = catalog.find_pack(35)

    assert pack.site_url == "https://www.feed-the-beast.com/modpacks/35-ftb-skies"
    assert pack.versions[0].loader_type == "forge"
    assert pack.stats.plays_14d == 2
    assert catalog.find_pack(999) is None


def test_find_version_by_name_then_id():
    pack = ModpackCatalog.model_validate(CATALOG).find_pack(35)

    assert pack.find_version("1.2.0").id == 100
    assert pack.find_version("12").name == "1.1.0"
    assert pack.find_version(100).name == "1.2.0"
    assert pack.find_version("9.9.9") is None


def test_catalog_search():
    catalog = ModpackCatalog.model_validate(CATALOG)

    assert [p.id for p in catalog.search("skies")] == [35]
    assert [p.id for p in catalog.search("QUESTS")] == [35]
    assert [p.id for p in catalog.search("")] == [35, 7]
    assert catalog.search("nothing") == []
