"""Protocols for release sources.

The orchestrator only needs these two calls; tests and alternative registries
provide their own implementation.
"""

from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from .schema import ReleaseMetadata


@runtime_checkable
class ReleaseSourceProtocol(Protocol):
    """Protocol for a release registry.

    Example implementations:
    - GitHubReleaseSource: GitHub "latest release" API
    - Test fakes backed by local files
    """

    async def fetch_latest(self) -> ReleaseMetadata:
        """Fetch metadata for the latest release.

        Raises:
            NetworkError: Registry unreachable or non-200 response
            ParseError: Response body is not valid release metadata
        """
        ...

    async def download(self, url: str, dest_path: Path) -> None:
        """Stream an asset to dest_path.

        Raises:
            NetworkError: Transport failure or bad status
            FilesystemError: dest_path could not be written
        """
        ...
