"""Binary installation - Move the extracted binary into bin/.

Also owns the staging area lifecycle: whatever happens during a run, the
staging directory is gone afterwards.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .exceptions import FilesystemError
from .naming import archive_member_name
from .naming import installed_binary_name
from .platforms import PlatformKey

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def remove_staging(staging_dir: Path) -> None:
    """Remove the staging directory. Failures are logged, never raised."""
    if not staging_dir.exists():
        return
    try:
        shutil.rmtree(staging_dir)
        logger.debug(f"Removed staging directory {staging_dir}")
    except OSError as e:
        logger.warning(f"Could not remove staging directory {staging_dir}: {e}")


@contextmanager
def staging_area(staging_dir: Path) -> Iterator[Path]:
    """
    Create a fresh staging directory for one install run.

    Leftovers from an interrupted earlier run are removed first. The
    directory is removed on exit whether or not the body raised.

    Raises:
        FilesystemError: Staging directory could not be created
    """
    if staging_dir.exists():
        logger.debug(f"Removing stale staging directory {staging_dir}")
        remove_staging(staging_dir)

    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Cannot create staging directory {staging_dir}: {e}",
            context={"staging_dir": str(staging_dir)},
        ) from e

    try:
        yield staging_dir
    finally:
        remove_staging(staging_dir)


def _move_into_place(source: Path, dest: Path) -> None:
    try:
        os.replace(source, dest)
        return
    except OSError as e:
        if e.errno == errno.EXDEV:
            # Staging and bin/ on different devices: copy next to dest, then swap.
            temp = dest.with_name(f".{dest.name}.partial")
            try:
                shutil.copy2(source, temp)
                os.replace(temp, dest)
            finally:
                temp.unlink(missing_ok=True)
            return
        if not dest.exists():
            raise

    # Replace refused over an existing file (Windows): remove, then rename.
    dest.unlink()
    os.rename(source, dest)


def install_binary(staging_dir: Path, key: PlatformKey, bin_dir: Path) -> Path:
    """
    Install the extracted binary from staging_dir into bin_dir.

    Args:
        staging_dir: Directory the archive was extracted into
        key: Target platform (decides the file names)
        bin_dir: Final binary directory (created if missing)

    Returns:
        Path to the installed binary

    Raises:
        FilesystemError: Binary missing from the archive, or the move failed
    """
    source = staging_dir / archive_member_name(key)
    if not source.is_file():
        raise FilesystemError(
            f"Expected binary {source.name} not found in release archive",
            context={"staging_dir": str(staging_dir), "expected": source.name},
        )

    dest = bin_dir / installed_binary_name(key)

    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
        _move_into_place(source, dest)
        if not key.is_windows:
            dest.chmod(EXECUTABLE_MODE)
    except OSError as e:
        raise FilesystemError(f"Cannot install {dest}: {e}", context={"dest": str(dest)}) from e

    logger.debug(f"Installed {source.name} as {dest}")
    return dest
