"""Install orchestration - Run the whole pipeline once.

DetectPlatform -> FetchRelease -> SelectAsset -> Download -> Extract ->
Install -> Cleanup. The first failure aborts the run; nothing is retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from .config import InstallerConfig
from .exceptions import FilesystemError
from .exceptions import InstallerError
from .exceptions import NetworkError
from .extract import extract_archive
from .installer import install_binary
from .installer import staging_area
from .lock import InstallLock
from .naming import archive_format
from .naming import asset_name
from .platforms import PlatformKey
from .platforms import detect_platform
from .protocols import ReleaseSourceProtocol
from .receipt import InstallReceipt
from .receipt import read_receipt
from .receipt import write_receipt
from .release import GitHubReleaseSource
from .release import create_client
from .release import select_asset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a successful run."""

    platform: PlatformKey
    tag: str
    asset: str
    binary_path: Path


async def run_install(
    config: InstallerConfig,
    platform_key: PlatformKey | None = None,
    source: ReleaseSourceProtocol | None = None,
) -> InstallResult:
    """
    Install the latest release binary under config.install_root.

    Apps/tests may inject:
    - platform_key: Skip host detection (tests)
    - source: Release source (default: GitHub, with a client built from config)

    Args:
        config: Installer configuration (paths, registry, timeouts)
        platform_key: Pre-resolved platform, or None to detect the host
        source: Release source, or None for GitHubReleaseSource

    Returns:
        InstallResult describing what was installed

    Raises:
        InstallerError: Any step failed (subclass names the category)
    """
    # Before any network activity: unsupported hosts fail here.
    key = platform_key or detect_platform()
    logger.info(f"Platform: {key.label}")

    try:
        async with asyncio.timeout(config.total_timeout):
            if source is not None:
                return await _run_pipeline(config, key, source)

            async with create_client(config) as client:
                return await _run_pipeline(config, key, GitHubReleaseSource(client, config))

    except TimeoutError as e:
        raise NetworkError(f"Installation timed out after {config.total_timeout:g}s") from e
    except InstallerError:
        raise
    except OSError as e:
        raise FilesystemError(f"Installation failed: {e}") from e


async def _run_pipeline(config: InstallerConfig, key: PlatformKey, source: ReleaseSourceProtocol) -> InstallResult:
    previous = read_receipt(config.receipt_path)
    if previous is not None:
        logger.debug(f"Previously installed: {previous.tag}")

    with InstallLock(config.lock_path, stale_after=config.lock_stale_after):
        release = await source.fetch_latest()
        logger.info(f"Latest version: {release.tag}")

        expected = asset_name(release.tag, key.os, key.arch)
        asset = select_asset(release, expected)

        with staging_area(config.staging_dir) as staging_dir:
            archive_path = staging_dir / asset.name
            logger.info(f"Downloading {asset.name}...")
            await source.download(asset.download_url, archive_path)

            logger.info("Extracting...")
            extract_archive(archive_path, staging_dir, archive_format(key.os))

            binary_path = install_binary(staging_dir, key, config.bin_dir)

        write_receipt(
            config.receipt_path,
            InstallReceipt.now(tag=release.tag, asset=asset.name, platform=key.label, binary=binary_path),
        )

    logger.info(f"Installed {binary_path}")
    return InstallResult(platform=key, tag=release.tag, asset=asset.name, binary_path=binary_path)
