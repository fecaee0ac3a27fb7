"""HTTP fetcher that stages downloads before replacing the destination."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

import httpx
from result import Err, Ok, Result

from dotsetup.common import create_logger

from .models import NetworkError

logger = create_logger("deploy.fetcher")

CHUNK_SIZE = 8192


class HttpFetcher:
    """Download files over HTTP(S) with httpx.

    The body is streamed into a temporary file next to the file being replaced and
    moved into place with ``os.replace`` only after the download completed, so a
    failed transfer never clobbers a good existing file. A symlinked destination
    is written through: the link target is replaced and the link is kept.
    """

    def __init__(self, client: httpx.Client | None = None, *, timeout: float = 30.0) -> None:
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, url: str, destination: Path, *, mode: int | None = None) -> Result[Path, NetworkError]:
        logger.debug("Fetching", url=url, destination=str(destination))

        target = destination.resolve() if destination.is_symlink() else destination

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if mode is None:
                mode = _existing_mode(target)
            fd, staging_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
        except OSError as e:
            return Err(NetworkError(url=url, message=f"Cannot write to {target.parent}: {e}"))

        staging = Path(staging_name)

        try:
            with os.fdopen(fd, "wb") as handle, self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise _StatusError(response.status_code)
                for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                    handle.write(chunk)

            staging.chmod(mode)
            os.replace(staging, target)

        except _StatusError as e:
            staging.unlink(missing_ok=True)
            logger.error("Fetch failed", url=url, status=e.status_code)
            return Err(NetworkError(url=url, message=f"HTTP {e.status_code} while downloading {url}"))
        except httpx.HTTPError as e:
            staging.unlink(missing_ok=True)
            logger.error("Fetch failed", url=url, error=str(e))
            return Err(NetworkError(url=url, message=f"Failed to download {url}: {e}"))
        except OSError as e:
            staging.unlink(missing_ok=True)
            logger.error("Fetch failed", url=url, error=str(e))
            return Err(NetworkError(url=url, message=f"Failed to write {destination}: {e}"))
        except BaseException:
            staging.unlink(missing_ok=True)
            raise

        logger.debug("Fetched", url=url, destination=str(destination))
        return Ok(destination)


def _existing_mode(path: Path) -> int:
    """Permissions to keep for ``path``: its current mode, or 0666 minus the umask for a new file."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(status_code)
        self.status_code = status_code
