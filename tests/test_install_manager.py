import asyncio
import json

import pytest

from ftb2pack.core.install_manager import InstallManager
from ftb2pack.exceptions import (
    APIError,
    InstallInProgressError,
    ServerInstallError,
)
from ftb2pack.models.outcome import FetchStatus, InstallState
from ftb2pack.utils.platform import PlatformKey
from ftb2pack.utils.structured_logger import create_structured_logger
from tests.factories import descriptor_doc, file_doc, make_descriptor


def files_of(root):
    return sorted(
        str(p.relative_to(root)).replace("\\", "/") for p in root.rglob("*") if p.is_file()
    )


@pytest.mark.asyncio
async def test_client_install_writes_manifest_and_overrides(
    tmp_path, api_client, session, remote, standard_targets
):
    descriptor = make_descriptor(
        files=[
            file_doc("jei.jar", path="./mods/", type="mod", curseforge=(238222, 1),
                     url=remote.serve("/jei.jar", "jar")),
            file_doc("ftbq.jar", path="./mods/", type="mod", curseforge=(289412, 2)),
            file_doc("options.txt", url=remote.serve("/options.txt", "fov:90")),
        ],
        targets=standard_targets,
        name="1.2.0",
    )
    manager = InstallManager(api_client, session=session)

    report = await manager.install_client(tmp_path, descriptor, "FTB Skies")

    work_dir = tmp_path / "FTB Skies 1.2.0"
    assert report.work_dir == work_dir
    assert report.succeeded
    manifest = json.loads((work_dir / "manifest.json").read_text(encoding="utf-8"))
    assert len(manifest["files"]) == 2
    assert manifest["minecraft"]["version"] == "1.20.1"
    assert manifest["minecraft"]["modLoaders"] == [{"id": "forge-47.0", "primary": True}]
    assert files_of(work_dir) == [
        "manifest.json",
        "overrides/config/options.txt",
        "overrides/mods/jei.jar",
    ]
    assert report.downloaded == 2
    assert report.skipped == 1
    assert manager.state is InstallState.COMPLETE
    assert not manager.is_running


@pytest.mark.asyncio
async def test_failed_override_does_not_fail_install(
    tmp_path, api_client, session, remote
):
    descriptor = make_descriptor(
        files=[
            file_doc("a.cfg", url=remote.serve("/a.cfg", "a")),
            file_doc("b.cfg", url=remote.serve("/b.cfg", "boom", status=500)),
            file_doc("c.cfg", url=remote.serve("/c.cfg", "c")),
        ]
    )
    seen = []
    manager = InstallManager(api_client, session=session, on_outcome=seen.append)

    report = await manager.install_client(tmp_path, descriptor, "Pack")

    assert report.succeeded
    assert report.downloaded == 2
    assert [f.name for f in report.failures] == ["b.cfg"]
    assert files_of(report.work_dir) == [
        "manifest.json",
        "overrides/config/a.cfg",
        "overrides/config/c.cfg",
    ]
    assert sorted(o.name for o in seen) == ["a.cfg", "b.cfg", "c.cfg"]


@pytest.mark.asyncio
async def test_empty_version_produces_only_manifest(tmp_path, api_client, session):
    manager = InstallManager(api_client, session=session)

    report = await manager.install_client(tmp_path, make_descriptor(), "Pack")

    manifest = json.loads(report.manifest_path.read_text(encoding="utf-8"))
    assert manifest["files"] == []
    assert files_of(report.work_dir) == ["manifest.json"]
    assert report.outcomes == []


@pytest.mark.asyncio
async def test_existing_package_directory_is_reused(tmp_path, api_client, session):
    (tmp_path / "Pack 1.2.0").mkdir()
    manager = InstallManager(api_client, session=session)

    report = await manager.install_client(tmp_path, make_descriptor(), "Pack")

    assert report.manifest_path.is_file()


@pytest.mark.asyncio
async def test_install_resolves_descriptor_first(
    tmp_path, api_client, session, remote, standard_targets
):
    remote.serve_json(
        "/modpack/35/100",
        descriptor_doc(
            files=[file_doc("options.txt", url=remote.url("/options.txt"))],
            targets=standard_targets,
            name="1.2.0",
        ),
    )
    remote.serve("/options.txt", "fov:90")
    manager = InstallManager(api_client, session=session)

    report = await manager.install(35, 100, tmp_path, "FTB Skies")

    assert remote.requested[0] == "/modpack/35/100"
    assert report.work_dir == tmp_path / "FTB Skies 1.2.0"
    assert report.downloaded == 1


@pytest.mark.asyncio
async def test_descriptor_failure_leaves_destination_untouched(
    tmp_path, api_client, session, remote
):
    remote.serve("/modpack/35/100", "down", status=503)
    manager = InstallManager(api_client, session=session)

    with pytest.raises(APIError):
        await manager.install(35, 100, tmp_path, "Pack")

    assert list(tmp_path.iterdir()) == []
    assert manager.state is InstallState.IDLE
    assert not manager.is_running


@pytest.mark.asyncio
async def test_second_install_is_refused_while_running(
    tmp_path, api_client, session, remote
):
    release = asyncio.Event()
    manager = InstallManager(api_client, session=session)
    original = manager._fetch

    async def slow_fetch(work_dir, entry):
        await release.wait()
        return await original(work_dir, entry)

    manager._fetch = slow_fetch
    descriptor = make_descriptor(files=[file_doc("a.cfg", url=remote.serve("/a", "a"))])

    first = asyncio.create_task(manager.install_client(tmp_path, descriptor, "Pack"))
    while manager.state is not InstallState.FETCHING_OVERRIDES:
        await asyncio.sleep(0)

    assert manager.is_running
    with pytest.raises(InstallInProgressError):
        await manager.install_client(tmp_path, descriptor, "Other")

    release.set()
    report = await first
    assert report.downloaded == 1
    assert not manager.is_running


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "key, segment, filename",
    [
        (PlatformKey.WINDOWS, "windows", "serverinstall_35_100.exe"),
        (PlatformKey.LINUX, "linux", "serverinstall_35_100"),
        (PlatformKey.MAC, "mac", "serverinstall_35_100"),
        (PlatformKey.OTHER, "freebsd", "serverinstall_35_100"),
    ],
)
async def test_server_install_per_platform(
    tmp_path, api_client, session, remote, key, segment, filename
):
    remote.serve(f"/modpack/35/100/server/{segment}", b"\x7fELF-binary")
    manager = InstallManager(api_client, session=session, platform=lambda: key)

    target = await manager.install_server(tmp_path, 35, 100)

    assert target == tmp_path / filename
    assert target.read_bytes() == b"\x7fELF-binary"
    assert not (tmp_path / "manifest.json").exists()
    assert remote.requested == [f"/modpack/35/100/server/{segment}"]


@pytest.mark.asyncio
async def test_server_install_failure_raises(tmp_path, api_client, session, remote):
    manager = InstallManager(
        api_client, session=session, platform=lambda: PlatformKey.LINUX
    )

    with pytest.raises(ServerInstallError):
        await manager.install_server(tmp_path, 35, 999)

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_install_events_are_logged_as_json(
    tmp_path, api_client, session, remote
):
    log_dir = tmp_path / "logs"
    base, events = create_structured_logger(log_dir, enable_json=True)
    descriptor = make_descriptor(
        files=[
            file_doc("a.cfg", url=remote.serve("/a.cfg", "a")),
            file_doc("b.cfg", url=remote.serve("/b.cfg", "x", status=404)),
        ]
    )
    manager = InstallManager(api_client, session=session, events=events)

    with base:
        await manager.install_client(tmp_path / "out", descriptor, "Pack")

    lines = base.json_log_path.read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    names = [e["event"] for e in entries]
    assert names[0] == "install_started"
    assert names[-1] == "install_completed"
    assert "manifest_written" in names
    assert "override_fetched" in names
    completed = entries[-1]
    assert (completed["downloaded"], completed["failed"]) == (1, 1)


@pytest.mark.asyncio
async def test_failed_server_download_keeps_existing_installer(
    tmp_path, api_client, session, remote
):
    existing = tmp_path / "serverinstall_35_100"
    existing.write_bytes(b"good installer")
    manager = InstallManager(
        api_client, session=session, platform=lambda: PlatformKey.LINUX
    )

    with pytest.raises(ServerInstallError):
        await manager.install_server(tmp_path, 35, 100)

    assert existing.read_bytes() == b"good installer"
    assert files_of(tmp_path) == ["serverinstall_35_100"]


@pytest.mark.asyncio
async def test_server_download_replaces_existing_installer(
    tmp_path, api_client, session, remote
):
    (tmp_path / "serverinstall_35_100").write_bytes(b"old")
    remote.serve("/modpack/35/100/server/linux", b"new")
    manager = InstallManager(
        api_client, session=session, platform=lambda: PlatformKey.LINUX
    )

    target = await manager.install_server(tmp_path, 35, 100)

    assert target.read_bytes() == b"new"
    assert files_of(tmp_path) == ["serverinstall_35_100"]


@pytest.mark.asyncio
async def test_install_reports_file_count_before_fetching(
    tmp_path, api_client, session, remote
):
    remote.serve_json(
        "/modpack/35/100",
        descriptor_doc(files=[file_doc("a.cfg"), file_doc("b.cfg")]),
    )
    started = []
    manager = InstallManager(api_client, session=session, on_start=started.append)

    report = await manager.install(35, 100, tmp_path, "Pack")

    assert started == [2]
    assert report.skipped == 2


@pytest.mark.asyncio
async def test_bad_entry_path_does_not_abort_install(
    tmp_path, api_client, session, remote
):
    descriptor = make_descriptor(
        files=[
            file_doc("a.cfg", url=remote.serve("/a.cfg", "a")),
            file_doc("b.cfg", path="./bro\x00ken/", url=remote.serve("/b.cfg", "b")),
        ]
    )
    manager = InstallManager(api_client, session=session)

    report = await manager.install_client(tmp_path, descriptor, "Pack")

    assert report.downloaded == 1
    assert [f.name for f in report.failures] == ["b.cfg"]
    assert report.manifest_path.is_file()
