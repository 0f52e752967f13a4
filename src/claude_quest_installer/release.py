"""Release locator - Query the registry and pick the matching asset.

Transport failures and malformed bodies raise different errors so the user
can tell an unreachable registry from a broken response.
"""

import json
import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from .config import InstallerConfig
from .download import download
from .exceptions import AssetNotFoundError
from .exceptions import NetworkError
from .exceptions import ParseError
from .schema import AssetDescriptor
from .schema import ReleaseMetadata

logger = logging.getLogger(__name__)


def create_client(config: InstallerConfig) -> httpx.AsyncClient:
    """HTTP client for registry and download traffic.

    Redirects are left to the downloader, which caps the hop count itself.
    """
    return httpx.AsyncClient(
        headers=config.headers(),
        timeout=httpx.Timeout(config.request_timeout),
        follow_redirects=False,
    )


class GitHubReleaseSource:
    """Release source backed by the GitHub releases API."""

    def __init__(self, client: httpx.AsyncClient, config: InstallerConfig):
        self.client = client
        self.config = config

    async def fetch_latest(self) -> ReleaseMetadata:
        """
        Fetch metadata for the latest release.

        Returns:
            ReleaseMetadata parsed from the response body

        Raises:
            NetworkError: Connection, DNS, or timeout failure, or non-200 status
            ParseError: Body is not JSON or not shaped like release metadata
        """
        url = self.config.latest_release_url
        logger.debug(f"Fetching latest release from {url}")

        try:
            response = await self.client.get(url, headers=self.config.headers())
        except httpx.HTTPError as e:
            raise NetworkError(f"Cannot reach release registry: {e}", context={"url": url}) from e

        if response.status_code != 200:
            raise NetworkError(
                f"Release registry returned HTTP {response.status_code}",
                context={"url": url},
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Release registry returned invalid JSON: {e}", context={"url": url}) from e

        try:
            return ReleaseMetadata.model_validate(data)
        except ValidationError as e:
            raise ParseError(
                f"Release registry returned unexpected metadata: {e.error_count()} invalid field(s)",
                context={"url": url, "errors": e.errors(include_url=False)},
            ) from e

    async def download(self, url: str, dest_path: Path) -> None:
        await download(
            self.client,
            url,
            dest_path,
            headers=self.config.headers(),
            max_redirects=self.config.max_redirects,
        )


def select_asset(metadata: ReleaseMetadata, expected_name: str) -> AssetDescriptor:
    """
    Pick the asset whose name is exactly expected_name.

    Raises:
        AssetNotFoundError: No asset has that name; the message names it so
            drift between installer and publisher is easy to spot
    """
    asset = metadata.find_asset(expected_name)
    if asset is None:
        raise AssetNotFoundError(
            expected_name,
            context={"tag": metadata.tag, "available": [a.name for a in metadata.assets]},
        )
    return asset
