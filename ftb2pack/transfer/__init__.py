"""
Transfer Layer.

This package performs the HTTP downloads: override files fetched whole and
the server installer streamed to disk.
"""

from .downloader import Downloader
from .overrides import fetch_override
from .session import close_session, get_session

__all__ = ["Downloader", "close_session", "fetch_override", "get_session"]
