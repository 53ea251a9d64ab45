"""Download source files into an on-disk cache keyed by URL basename."""
import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests

from emoji_list.utils import CacheError, ConfigError, FetchError

logger = logging.getLogger(__name__)

FETCH_BLOCKSIZE = 64 * 1024


def cache_filename(url: str) -> str:
    """Cache entries are named by the last path component of their URL."""
    return os.path.basename(urlparse(url).path)


def fetch(url: str, cache_dir: Union[str, Path], session: Optional[requests.Session] = None) -> Path:
    """
    Resolve a URL to a local file, downloading it only if it is not cached yet.

    A cached file is trusted on presence alone: no freshness or checksum test.

    Args:
        url: Source URL
        cache_dir: Directory holding cached downloads
        session: HTTP session to reuse across fetches

    Returns:
        Path of the local copy

    Raises:
        ConfigError: If the URL path does not end in a file name
        FetchError: On network failure or a non-2xx response
        CacheError: If the cache file cannot be written
    """
    name = cache_filename(url)
    if not name:
        raise ConfigError(f"URL {url!r} does not name a file")
    path = Path(cache_dir) / name
    if path.exists():
        logger.debug(f"Using cached {path}")
        return path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CacheError(f"create cache directory {str(path.parent)!r}: {e}") from e

    session = session or requests.Session()
    logger.info(f"📥 Downloading {url}")
    try:
        with session.get(url, stream=True) as response:
            if not 200 <= response.status_code < 300:
                raise FetchError(f"get {url!r}: {response.status_code} {response.reason}")
            _write_body(response, path)
    except requests.RequestException as e:
        raise FetchError(f"get {url!r}: {e}") from e

    logger.info(f"✓ Saved {path.name} ({path.stat().st_size:,} bytes)")
    return path


def _write_body(response: requests.Response, path: Path) -> None:
    """Stream a response body into path, removing the file if anything fails."""
    try:
        with open(path, 'wb') as f:
            for chunk in response.iter_content(FETCH_BLOCKSIZE):
                f.write(chunk)
    except requests.RequestException:
        # RequestException subclasses OSError; it is a transport failure, not a cache one
        path.unlink(missing_ok=True)
        raise
    except OSError as e:
        path.unlink(missing_ok=True)
        raise CacheError(f"write cache file {str(path)!r}: {e}") from e
    except BaseException:
        path.unlink(missing_ok=True)
        raise
