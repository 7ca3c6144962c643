"""
Shared aiohttp session for all transfers of a run.
"""

import asyncio
import logging

import aiohttp

log = logging.getLogger(__name__)

_session: aiohttp.ClientSession | None = None
_session_lock = asyncio.Lock()


async def get_session() -> aiohttp.ClientSession:
    """
    Gets or creates the shared ClientSession.

    The connector has no connection cap: every override of a version is
    fetched at the same time. Timeouts are aiohttp's defaults.
    """
    global _session
    async with _session_lock:
        if _session and not _session.closed:
            return _session

        connector = aiohttp.TCPConnector(
            limit=0,
            ttl_dns_cache=600,  # 10 minutes
            enable_cleanup_closed=True,
        )
        _session = aiohttp.ClientSession(connector=connector)
        log.debug("Created shared transfer session.")

    return _session


async def close_session() -> None:
    """Closes the shared session."""
    global _session
    async with _session_lock:
        if _session and not _session.closed:
            await _session.close()
            _session = None
            log.debug("Shared transfer session closed.")
