"""Installer exceptions.

One class per failure category so callers can tell "can't reach the registry"
apart from "registry returned garbage". Every message is meant to be shown to
the user as-is.
"""


class InstallerError(Exception):
    """Base exception for installer operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, URLs, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UnsupportedPlatformError(InstallerError):
    """Host operating system or architecture has no published binary."""


class NetworkError(InstallerError):
    """Registry or download host unreachable, or answered with a bad status."""

    def __init__(self, message: str, context: dict | None = None, status_code: int | None = None):
        super().__init__(message, context)
        self.status_code = status_code


class ParseError(InstallerError):
    """Registry answered, but the body is not valid release metadata."""


class AssetNotFoundError(InstallerError):
    """Latest release has no asset with the expected name."""

    def __init__(self, asset_name: str, context: dict | None = None):
        super().__init__(f"Could not find release asset: {asset_name}", context)
        self.asset_name = asset_name


class ExtractionError(InstallerError):
    """Archive is corrupt, unsupported, or tries to write outside its destination."""


class FilesystemError(InstallerError):
    """Local file operation failed."""
