"""claude-quest-installer - Fetch and install the prebuilt Claude Quest binary.

Public API: the pipeline pieces are exported individually so apps (and tests)
can run any step on its own; run_install sequences all of them.
"""

__version__ = "0.1.0"

from .config import InstallerConfig
from .download import download
from .exceptions import AssetNotFoundError
from .exceptions import ExtractionError
from .exceptions import FilesystemError
from .exceptions import InstallerError
from .exceptions import NetworkError
from .exceptions import ParseError
from .exceptions import UnsupportedPlatformError
from .extract import extract_archive
from .installer import install_binary
from .installer import staging_area
from .lock import InstallLock
from .naming import ArchiveFormat
from .naming import archive_format
from .naming import archive_member_name
from .naming import asset_name
from .naming import installed_binary_name
from .orchestrator import InstallResult
from .orchestrator import run_install
from .platforms import CpuArch
from .platforms import HostOS
from .platforms import PlatformKey
from .platforms import detect_platform
from .platforms import resolve_platform
from .protocols import ReleaseSourceProtocol
from .receipt import InstallReceipt
from .receipt import read_receipt
from .receipt import write_receipt
from .release import GitHubReleaseSource
from .release import select_asset
from .schema import AssetDescriptor
from .schema import ReleaseMetadata

__all__ = [
    # Configuration
    "InstallerConfig",
    # Platform
    "HostOS",
    "CpuArch",
    "PlatformKey",
    "resolve_platform",
    "detect_platform",
    # Naming
    "ArchiveFormat",
    "archive_format",
    "asset_name",
    "archive_member_name",
    "installed_binary_name",
    # Release metadata
    "AssetDescriptor",
    "ReleaseMetadata",
    "ReleaseSourceProtocol",
    "GitHubReleaseSource",
    "select_asset",
    # Retrieval and installation
    "download",
    "extract_archive",
    "install_binary",
    "staging_area",
    "InstallLock",
    "InstallReceipt",
    "read_receipt",
    "write_receipt",
    # Orchestration
    "InstallResult",
    "run_install",
    # Exceptions
    "InstallerError",
    "UnsupportedPlatformError",
    "NetworkError",
    "ParseError",
    "AssetNotFoundError",
    "ExtractionError",
    "FilesystemError",
]
