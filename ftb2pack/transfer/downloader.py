"""
Streams a remote file straight to disk.
"""

import logging
import os
from pathlib import Path

import aiofiles
import aiohttp

from .session import get_session

log = logging.getLogger(__name__)


class Downloader:
    """A low-level file downloader that writes the response body in chunks."""

    CHUNK_SIZE = 262144  # 256 KB

    def __init__(self, session: aiohttp.ClientSession | None = None):
        self._session = session

    async def download_file(self, url: str, destination_path: Path) -> int:
        """
        Downloads ``url`` to ``destination_path`` and returns the byte count.

        Raises:
            aiohttp.ClientError: On connection failures or non-2xx responses.
            OSError: If the destination cannot be written.
        """
        session = self._session or await get_session()
        async with session.get(url, allow_redirects=True) as response:
            response.raise_for_status()

            bytes_downloaded = 0
            async with aiofiles.open(destination_path, "wb") as f:
                async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                    await f.write(chunk)
                    bytes_downloaded += len(chunk)

        log.debug(
            f"Downloaded '{os.path.basename(destination_path)}' "
            f"({bytes_downloaded} bytes)."
        )
        return bytes_downloaded
