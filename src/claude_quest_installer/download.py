"""Asset retrieval - Stream a release asset to disk.

Redirects are followed by hand (not by httpx) so the hop count is bounded
and every hop gets the same headers.
"""

import logging
from pathlib import Path

import httpx

from .exceptions import FilesystemError
from .exceptions import NetworkError

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
DEFAULT_MAX_REDIRECTS = 10


def _remove_partial(dest_path: Path) -> None:
    try:
        dest_path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove partial download {dest_path}: {e}")


async def download(
    client: httpx.AsyncClient,
    url: str,
    dest_path: Path,
    headers: dict[str, str] | None = None,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
) -> None:
    """
    Download url to dest_path, following redirects.

    The body is written chunk by chunk as it arrives. On any failure the
    partially written file is removed before the error propagates.

    Args:
        client: HTTP client (must not follow redirects itself)
        url: Asset URL
        dest_path: File to write (parent must exist)
        headers: Headers for every hop (User-Agent etc.)
        max_redirects: Maximum redirect hops before giving up

    Raises:
        NetworkError: Transport failure, bad status, or too many redirects
        FilesystemError: dest_path could not be written
    """
    try:
        await _stream_to_file(client, url, dest_path, headers or {}, max_redirects)
    except BaseException:
        _remove_partial(dest_path)
        raise


async def _stream_to_file(
    client: httpx.AsyncClient,
    url: str,
    dest_path: Path,
    headers: dict[str, str],
    max_redirects: int,
) -> None:
    current_url = httpx.URL(url)

    for _hop in range(max_redirects + 1):
        try:
            async with client.stream("GET", current_url, headers=headers, follow_redirects=False) as response:
                if response.status_code in REDIRECT_STATUSES:
                    location = response.headers.get("location")
                    if not location:
                        raise NetworkError(
                            f"Redirect {response.status_code} without Location header",
                            context={"url": str(current_url)},
                            status_code=response.status_code,
                        )
                    current_url = current_url.join(location)
                    logger.debug(f"Redirected ({response.status_code}) to {current_url}")
                    continue

                if response.status_code != 200:
                    raise NetworkError(
                        f"Failed to download: {response.status_code}",
                        context={"url": str(current_url)},
                        status_code=response.status_code,
                    )

                await _write_body(response, dest_path)
                return

        except httpx.HTTPError as e:
            raise NetworkError(f"Download failed: {e}", context={"url": str(current_url)}) from e

    raise NetworkError(
        f"Too many redirects (more than {max_redirects})",
        context={"url": url},
    )


async def _write_body(response: httpx.Response, dest_path: Path) -> None:
    written = 0
    try:
        with open(dest_path, "wb") as f:
            async for chunk in response.aiter_bytes():
                f.write(chunk)
                written += len(chunk)
    except OSError as e:
        raise FilesystemError(f"Cannot write {dest_path}: {e}", context={"path": str(dest_path)}) from e

    logger.debug(f"Wrote {written} bytes to {dest_path}")
