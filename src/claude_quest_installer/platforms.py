"""Host platform detection.

Maps whatever the interpreter reports for the host to the vocabulary used in
release asset names (darwin/linux/windows, amd64/arm64).
"""

import platform
import sys
from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import UnsupportedPlatformError


class HostOS(str, Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


class CpuArch(str, Enum):
    AMD64 = "amd64"
    ARM64 = "arm64"


_OS_ALIASES: dict[str, HostOS] = {
    "darwin": HostOS.DARWIN,
    "macos": HostOS.DARWIN,
    "linux": HostOS.LINUX,
    "linux2": HostOS.LINUX,
    "win32": HostOS.WINDOWS,
    "windows": HostOS.WINDOWS,
    "cygwin": HostOS.WINDOWS,
    "msys": HostOS.WINDOWS,
}

_ARCH_ALIASES: dict[str, CpuArch] = {
    "x86_64": CpuArch.AMD64,
    "amd64": CpuArch.AMD64,
    "x64": CpuArch.AMD64,
    "arm64": CpuArch.ARM64,
    "aarch64": CpuArch.ARM64,
}

# Recognized, but no binary is published for these yet.
_DENIED: dict[tuple[HostOS, CpuArch], str] = {
    (HostOS.WINDOWS, CpuArch.ARM64): "Windows ARM64 is not supported yet",
    (HostOS.LINUX, CpuArch.ARM64): "Linux ARM64 is not supported yet",
}


class PlatformKey(BaseModel):
    """Resolved (os, arch) pair."""

    model_config = ConfigDict(frozen=True)

    os: HostOS
    arch: CpuArch

    @property
    def is_windows(self) -> bool:
        return self.os is HostOS.WINDOWS

    @property
    def label(self) -> str:
        return f"{self.os.value}-{self.arch.value}"


def resolve_platform(host_os: str, host_arch: str) -> PlatformKey:
    """
    Resolve host identifiers to a supported PlatformKey.

    Args:
        host_os: OS identifier, e.g. ``sys.platform`` or ``platform.system()``
        host_arch: CPU identifier, e.g. ``platform.machine()``

    Returns:
        PlatformKey for a combination that has a published binary

    Raises:
        UnsupportedPlatformError: If either identifier is unknown, or the
            combination is on the deny-list
    """
    os_name = _OS_ALIASES.get(host_os.lower())
    arch = _ARCH_ALIASES.get(host_arch.lower())

    if os_name is None or arch is None:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {host_os}-{host_arch}",
            context={"os": host_os, "arch": host_arch, "reason": "unrecognized"},
        )

    denied = _DENIED.get((os_name, arch))
    if denied:
        raise UnsupportedPlatformError(
            denied,
            context={"os": os_name.value, "arch": arch.value, "reason": "denied"},
        )

    return PlatformKey(os=os_name, arch=arch)


def detect_platform() -> PlatformKey:
    """Resolve the platform of the running interpreter."""
    return resolve_platform(sys.platform, platform.machine())
