"""
Async client for the Feed The Beast modpack API and catalog.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

import aiohttp
from pydantic import BaseModel, ValidationError

from ftb2pack.exceptions import APIError, CatalogFileError, FormatError
from ftb2pack.models.catalog import ModpackCatalog
from ftb2pack.models.config import DEFAULT_API_URL, DEFAULT_CATALOG_URL
from ftb2pack.models.pack import VersionDescriptor
from ftb2pack.utils.platform import PlatformKey

log = logging.getLogger(__name__)


class ModpacksAPIClient:
    """
    Async client for the public modpack endpoints.

    Only plain GET requests are issued: no authentication, no retries. Any
    failure is raised as an APIError (transport / HTTP status) or a FormatError
    (the document could not be decoded into the expected model).
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        catalog_url: str = DEFAULT_CATALOG_URL,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the API client.

        Args:
            api_url: Base URL of the per-version endpoint, ending in a slash.
            catalog_url: URL of the full modpack listing.
            session: An existing session to reuse. When omitted the client owns
                its own session and closes it in `close`.
        """
        self.api_url = api_url if api_url.endswith("/") else f"{api_url}/"
        self.catalog_url = catalog_url
        self._session = session
        self._owns_session = session is None

    async def _initialize_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"}
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "ModpacksAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_json(self, url: str) -> Dict[str, Any]:
        """Fetches and decodes a JSON document."""
        session = await self._initialize_session()
        start_time = time.monotonic()
        try:
            async with session.get(url) as r:
                r.raise_for_status()
                data = await r.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"Request to {url} failed: {e}")
            raise APIError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FormatError(f"Response from {url} is not valid JSON: {e}") from e

        duration_ms = (time.monotonic() - start_time) * 1000
        log.debug(f"GET {url} completed in {duration_ms:.0f} ms")
        return data

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, source: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FormatError(
                f"Unexpected {model.__name__} document from {source}:\n{e}"
            ) from e

    # Public API Methods
    def version_url(self, pack_id: int, version_id: int) -> str:
        return f"{self.api_url}{pack_id}/{version_id}"

    def server_installer_url(
        self, pack_id: int, version_id: int, platform: PlatformKey
    ) -> str:
        return f"{self.version_url(pack_id, version_id)}/server/{platform.server_path}"

    async def fetch_version(self, pack_id: int, version_id: int) -> VersionDescriptor:
        url = self.version_url(pack_id, version_id)
        data = await self.get_json(url)
        return self._parse(VersionDescriptor, data, url)

    async def fetch_catalog(self) -> ModpackCatalog:
        data = await self.get_json(self.catalog_url)
        return self._parse(ModpackCatalog, data, self.catalog_url)

    @classmethod
    def load_catalog_file(cls, path: Path) -> ModpackCatalog:
        """Reads a catalog document saved on disk."""
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogFileError(f"Could not read catalog file '{path}': {e}") from e
        try:
            return ModpackCatalog.model_validate_json(raw)
        except ValidationError as e:
            raise FormatError(f"Catalog file '{path}' is invalid:\n{e}") from e
