"""
The orchestrator that turns a modpack version into an install package on disk.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional

import aiohttp

from ftb2pack.api.client import ModpacksAPIClient
from ftb2pack.exceptions import (
    DestinationError,
    InstallInProgressError,
    ServerInstallError,
)
from ftb2pack.models.outcome import (
    FetchOutcome,
    FetchStatus,
    InstallReport,
    InstallState,
)
from ftb2pack.models.pack import FileEntry, VersionDescriptor
from ftb2pack.storage.manifest_store import save_manifest
from ftb2pack.transfer import Downloader, fetch_override
from ftb2pack.utils.path import create_dir, server_installer_name, work_dir_name
from ftb2pack.utils.platform import PlatformKey, platform_key
from ftb2pack.utils.structured_logger import InstallLogger

from .translator import translate

log = logging.getLogger(__name__)

OutcomeCallback = Callable[[FetchOutcome], None]


class InstallManager:
    """
    Drives client and server installs.

    One install runs at a time per manager; `is_running` is the gate a caller
    checks before offering another install, and starting one anyway raises
    InstallInProgressError. Override transfers of a version all run at once.
    """

    def __init__(
        self,
        api_client: ModpacksAPIClient,
        session: Optional[aiohttp.ClientSession] = None,
        platform: Callable[[], PlatformKey] = platform_key,
        events: Optional[InstallLogger] = None,
        on_outcome: Optional[OutcomeCallback] = None,
        on_start: Optional[Callable[[int], None]] = None,
    ):
        self.api_client = api_client
        self._session = session
        self._platform = platform
        self._events = events
        self._on_outcome = on_outcome
        self._on_start = on_start
        self._state = InstallState.IDLE
        self._running = False

    @property
    def state(self) -> InstallState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @asynccontextmanager
    async def _exclusive(self):
        if self._running:
            raise InstallInProgressError("Another install is still running.")
        self._running = True
        try:
            yield
        except BaseException:
            self._state = InstallState.IDLE
            raise
        finally:
            self._running = False

    async def install(
        self, pack_id: int, version_id: int, destination: Path, pack_name: str
    ) -> InstallReport:
        """Fetches the version descriptor, then performs a client install."""
        async with self._exclusive():
            self._state = InstallState.RESOLVING
            descriptor = await self.api_client.fetch_version(pack_id, version_id)
            return await self._install_client(destination, descriptor, pack_name)

    async def install_client(
        self, destination: Path, descriptor: VersionDescriptor, pack_name: str
    ) -> InstallReport:
        """
        Writes ``<destination>/<pack_name> <version name>/manifest.json`` and
        fetches every file of the version into its ``overrides`` directory.

        Failed overrides are reported in the returned InstallReport and never
        abort the install.
        """
        async with self._exclusive():
            return await self._install_client(destination, descriptor, pack_name)

    async def _install_client(
        self, destination: Path, descriptor: VersionDescriptor, pack_name: str
    ) -> InstallReport:
        start_time = time.monotonic()
        self._state = InstallState.PREPARING
        if self._events:
            self._events.install_started(
                pack_name, descriptor.name, len(descriptor.files)
            )

        work_dir = Path(destination) / work_dir_name(pack_name, descriptor.name)
        try:
            await asyncio.to_thread(create_dir, work_dir)
        except OSError as e:
            raise DestinationError(
                f"Could not create package directory '{work_dir}': {e}"
            ) from e

        manifest = translate(descriptor, pack_name)
        manifest_path = await asyncio.to_thread(save_manifest, work_dir, manifest)
        log.info(
            f"Wrote manifest with {len(manifest.files)} mods for "
            f"Minecraft {manifest.minecraft.version} to [dim]{manifest_path}[/dim]"
        )
        if self._events:
            self._events.manifest_written(
                manifest_path,
                len(manifest.files),
                [loader.id for loader in manifest.minecraft.mod_loaders],
            )

        self._state = InstallState.FETCHING_OVERRIDES
        if self._on_start:
            self._on_start(len(descriptor.files))
        outcomes = await asyncio.gather(
            *(self._fetch(work_dir, entry) for entry in descriptor.files)
        )

        self._state = InstallState.COMPLETE
        report = InstallReport(
            work_dir=work_dir, manifest_path=manifest_path, outcomes=list(outcomes)
        )
        if report.failed:
            log.warning(
                f"[yellow]{report.failed} of {len(report.outcomes)} files could "
                "not be downloaded.[/yellow]"
            )
        if self._events:
            self._events.install_completed(
                work_dir,
                report.downloaded,
                report.skipped,
                report.failed,
                time.monotonic() - start_time,
            )
        return report

    async def _fetch(self, work_dir: Path, entry: FileEntry) -> FetchOutcome:
        outcome = await fetch_override(work_dir, entry, self._session)
        if self._events:
            if outcome.status is FetchStatus.DOWNLOADED:
                self._events.override_fetched(outcome.name, outcome.size)
            elif outcome.status is FetchStatus.FAILED:
                self._events.override_failed(outcome.name, outcome.url, outcome.error)
        if self._on_outcome:
            self._on_outcome(outcome)
        return outcome

    async def install_server(
        self, destination: Path, pack_id: int, version_id: int
    ) -> Path:
        """
        Downloads the server installer for the host platform to
        ``<destination>/serverinstall_<pack>_<version>`` (``.exe`` on Windows).

        Raises:
            ServerInstallError: If the installer cannot be fetched or saved.
        """
        async with self._exclusive():
            self._state = InstallState.PREPARING
            key = self._platform()
            url = self.api_client.server_installer_url(pack_id, version_id, key)
            target = Path(destination) / server_installer_name(
                pack_id, version_id, key.executable_suffix
            )

            try:
                await asyncio.to_thread(create_dir, Path(destination))
            except OSError as e:
                raise DestinationError(
                    f"Could not create destination '{destination}': {e}"
                ) from e

            # An installer already at the target survives a failed re-download.
            partial = target.with_name(target.name + ".part")
            log.info(f"Downloading {key.value} server installer from {url}")
            try:
                size = await Downloader(self._session).download_file(url, partial)
                partial.replace(target)
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                partial.unlink(missing_ok=True)
                raise ServerInstallError(
                    f"Failed to download server installer from {url}: {e}"
                ) from e

            self._state = InstallState.COMPLETE
            if self._events:
                self._events.server_installer_saved(target, size)
            return target
