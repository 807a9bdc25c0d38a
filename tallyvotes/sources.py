"""Read raw dataset bytes from a local file or an http(s) URL."""

from pathlib import Path
from urllib.parse import urlparse

import httpx

FETCH_TIMEOUT = 30.0


class SourceError(Exception):
    """Raised when a dataset source cannot be read."""
    pass


def is_url(source: str) -> bool:
    return "://" in source


def read_source(source: str, allow_paths: bool = True) -> bytes:
    """Return the raw content of a path or URL.

    Args:
        source: Local path or http(s) URL
        allow_paths: When False, only URLs are read and local paths are refused

    Raises:
        SourceError: If the file cannot be opened, the URL cannot be fetched,
                     or a path is given while paths are not allowed
    """
    if is_url(source):
        return fetch_url(source)
    if not allow_paths:
        raise SourceError(f"Only http(s) URLs are accepted, got {source!r}")
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise SourceError(f"{source}: {e.strerror or e}") from e


def fetch_url(url: str) -> bytes:
    """Fetch content from a URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise SourceError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=FETCH_TIMEOUT) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        raise SourceError(f"HTTP error fetching {url}: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise SourceError(f"Error fetching {url}: {e}") from e
