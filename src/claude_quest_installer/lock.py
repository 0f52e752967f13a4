"""Install lock - Keep two runs from writing the same install root.

A plain lock file created with O_EXCL works the same on every platform. A
run that was killed leaves its lock behind, so locks older than a threshold
are treated as stale and taken over.
"""

import logging
import os
import time
from pathlib import Path

from .exceptions import FilesystemError

logger = logging.getLogger(__name__)


class InstallLock:
    """
    Exclusive lock on an install root (with injected lock path).

    Usage:
        >>> with InstallLock(lock_path=root / ".install.lock"):
        ...     run_the_install()
    """

    def __init__(self, lock_path: Path, stale_after: float = 900.0):
        """Initialize lock with app-provided path.

        Args:
            lock_path: Lock file location
            stale_after: Seconds after which an existing lock is considered abandoned
        """
        self.lock_path = lock_path
        self.stale_after = stale_after
        self._held = False

    def _is_stale(self) -> bool:
        try:
            age = time.time() - self.lock_path.stat().st_mtime
        except FileNotFoundError:
            return True
        return age > self.stale_after

    def _try_create(self) -> bool:
        try:
            fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            return False
        with os.fdopen(fd, "w") as f:
            f.write(str(os.getpid()))
        return True

    def acquire(self) -> None:
        """
        Take the lock.

        Raises:
            FilesystemError: Another run holds a fresh lock, or the lock file
                cannot be created
        """
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            if not self._try_create():
                if not self._is_stale():
                    raise FilesystemError(
                        f"Another installation is in progress (lock file: {self.lock_path})",
                        context={"lock_path": str(self.lock_path)},
                    )
                logger.warning(f"Taking over stale install lock {self.lock_path}")
                self.lock_path.unlink(missing_ok=True)
                if not self._try_create():
                    raise FilesystemError(
                        f"Another installation is in progress (lock file: {self.lock_path})",
                        context={"lock_path": str(self.lock_path)},
                    )
        except OSError as e:
            raise FilesystemError(f"Cannot create lock file {self.lock_path}: {e}") from e

        self._held = True
        logger.debug(f"Acquired install lock {self.lock_path}")

    def release(self) -> None:
        if not self._held:
            return
        try:
            self.lock_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove lock file {self.lock_path}: {e}")
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def __enter__(self) -> "InstallLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()
