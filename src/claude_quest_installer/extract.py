"""Archive extraction for release assets.

Dispatch is on the ArchiveFormat computed from the asset name, never on
sniffing the file. Every entry is checked against the destination before it
is written (zip-slip).
"""

import logging
import os
import shutil
import tarfile
import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path

from .exceptions import ExtractionError
from .naming import ArchiveFormat

logger = logging.getLogger(__name__)


def _safe_target(dest_dir: Path, entry_name: str) -> Path:
    """Resolve entry_name under dest_dir, rejecting anything that escapes it."""
    if not entry_name or os.path.isabs(entry_name) or entry_name.startswith(("/", "\\")):
        raise ExtractionError(
            f"Archive entry has an absolute path: {entry_name!r}",
            context={"entry": entry_name},
        )

    root = dest_dir.resolve()
    target = (root / entry_name).resolve()
    if target != root and not target.is_relative_to(root):
        raise ExtractionError(
            f"Archive entry escapes destination: {entry_name!r}",
            context={"entry": entry_name, "dest_dir": str(dest_dir)},
        )
    return target


def extract_tar_gz(archive_path: Path, dest_dir: Path) -> None:
    """Extract a gzip-compressed tarball, streaming entries in order."""
    try:
        with tarfile.open(archive_path, mode="r|gz") as tar:
            for member in tar:
                _safe_target(dest_dir, member.name)
                if not (member.isfile() or member.isdir() or member.issym() or member.islnk()):
                    raise ExtractionError(
                        f"Unsupported archive entry type for {member.name!r}",
                        context={"entry": member.name},
                    )
                # "data" also validates link targets and strips setuid bits.
                tar.extract(member, dest_dir, filter="data")
                logger.debug(f"Extracted {member.name}")
    except ExtractionError:
        raise
    except (tarfile.TarError, EOFError, zlib.error, OSError) as e:
        raise ExtractionError(f"Cannot extract {archive_path.name}: {e}", context={"archive": str(archive_path)}) from e


def extract_zip(archive_path: Path, dest_dir: Path) -> None:
    """Extract a zip archive, keeping Unix permission bits where the host has them."""
    keep_modes = os.name != "nt"
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                target = _safe_target(dest_dir, info.filename)

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)

                mode = (info.external_attr >> 16) & 0o777
                if keep_modes and mode:
                    target.chmod(mode)
                logger.debug(f"Extracted {info.filename}")
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, NotImplementedError, EOFError, zlib.error, OSError) as e:
        raise ExtractionError(f"Cannot extract {archive_path.name}: {e}", context={"archive": str(archive_path)}) from e


_EXTRACTORS: dict[ArchiveFormat, Callable[[Path, Path], None]] = {
    ArchiveFormat.TAR_GZ: extract_tar_gz,
    ArchiveFormat.ZIP: extract_zip,
}


def extract_archive(archive_path: Path, dest_dir: Path, fmt: ArchiveFormat) -> None:
    """
    Unpack archive_path into dest_dir.

    Args:
        archive_path: Downloaded archive
        dest_dir: Directory to unpack into (created if missing)
        fmt: Archive format, as computed from the asset name

    Raises:
        ExtractionError: Corrupt archive, unsupported entry, or path traversal
    """
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractionError(f"Cannot create {dest_dir}: {e}", context={"dest_dir": str(dest_dir)}) from e

    logger.debug(f"Extracting {archive_path} ({fmt.value}) into {dest_dir}")
    _EXTRACTORS[fmt](archive_path, dest_dir)
