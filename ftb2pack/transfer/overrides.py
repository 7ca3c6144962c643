"""
Downloads the non-mod files of a modpack version into the overrides tree.
"""

import asyncio
import logging
from pathlib import Path

import aiofiles
import aiohttp

from ftb2pack.models.outcome import FetchOutcome, FetchStatus
from ftb2pack.models.pack import FileEntry
from ftb2pack.utils.path import override_target, try_create_dir

from .session import get_session

log = logging.getLogger(__name__)


async def fetch_override(
    root: Path,
    entry: FileEntry,
    session: aiohttp.ClientSession | None = None,
) -> FetchOutcome:
    """
    Fetches one file to ``<root>/overrides/<entry.path>/<entry.name>``.

    Never raises: network errors, non-2xx responses and write errors all come
    back as a FAILED outcome. Entries without a usable URL are SKIPPED and leave
    the filesystem untouched. Existing files at the target are replaced.
    """
    url = entry.download_url
    if url is None:
        log.debug(f"No download URL for '{entry.name}', skipping.")
        return FetchOutcome(name=entry.name, status=FetchStatus.SKIPPED)

    target = override_target(root, entry)
    try_create_dir(target.parent)

    try:
        session = session or await get_session()
        async with session.get(url, allow_redirects=True) as response:
            response.raise_for_status()
            body = await response.read()

        async with aiofiles.open(target, "wb") as f:
            await f.write(body)
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
        log.warning(f"[yellow]Could not fetch override '{entry.name}':[/] {e}")
        return FetchOutcome(
            name=entry.name,
            status=FetchStatus.FAILED,
            target=target,
            url=url,
            error=str(e) or type(e).__name__,
        )

    log.debug(f"Saved override '{target}' ({len(body)} bytes).")
    return FetchOutcome(
        name=entry.name,
        status=FetchStatus.DOWNLOADED,
        target=target,
        url=url,
        size=len(body),
    )
