"""Release asset naming convention.

Must match what the release pipeline publishes exactly; asset selection is
exact-match only.
"""

from enum import Enum

from .platforms import CpuArch
from .platforms import HostOS
from .platforms import PlatformKey

PRODUCT_NAME = "claude-quest"
BINARY_NAME = "cq"
DELIMITER = "_"


class ArchiveFormat(str, Enum):
    """Archive container of a release asset. Value is the file extension."""

    TAR_GZ = "tar.gz"
    ZIP = "zip"


def archive_format(os_name: HostOS) -> ArchiveFormat:
    return ArchiveFormat.ZIP if os_name is HostOS.WINDOWS else ArchiveFormat.TAR_GZ


def asset_name(version: str, os_name: HostOS, arch: CpuArch) -> str:
    """
    Build the release asset filename.

    Args:
        version: Release tag, used verbatim (e.g. ``v1.2.3``)
        os_name: Target OS
        arch: Target CPU architecture

    Returns:
        Filename such as ``claude-quest_v1.2.3_linux_amd64.tar.gz``
    """
    stem = DELIMITER.join([PRODUCT_NAME, version, os_name.value, arch.value])
    return f"{stem}.{archive_format(os_name).value}"


def archive_member_name(key: PlatformKey) -> str:
    """Name of the binary inside the release archive (``cq-linux-amd64``)."""
    name = f"{BINARY_NAME}-{key.os.value}-{key.arch.value}"
    return f"{name}.exe" if key.is_windows else name


def installed_binary_name(key: PlatformKey) -> str:
    """Name of the binary once installed into ``bin/``."""
    return f"{BINARY_NAME}.exe" if key.is_windows else BINARY_NAME
