"""Install receipt - Record what the last successful run installed.

Purely informational: lets a later run (or a human) see which release is on
disk. Nothing reads it to make install decisions.
"""

import json
import logging
from dataclasses import asdict
from dataclasses import dataclass
from datetime import UTC
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class InstallReceipt:
    """Receipt for one successful install."""

    tag: str
    asset: str
    platform: str
    binary: str
    installed_at: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "InstallReceipt":
        """Create from dictionary."""
        return cls(**data)

    @classmethod
    def now(cls, tag: str, asset: str, platform: str, binary: Path) -> "InstallReceipt":
        return cls(
            tag=tag,
            asset=asset,
            platform=platform,
            binary=str(binary),
            installed_at=datetime.now(UTC).isoformat(),
        )


def read_receipt(receipt_path: Path) -> InstallReceipt | None:
    """
    Load the receipt if there is a readable one.

    Returns:
        InstallReceipt, or None if missing or unreadable
    """
    if not receipt_path.exists():
        return None

    try:
        with open(receipt_path) as f:
            return InstallReceipt.from_dict(json.load(f))
    except (OSError, ValueError, TypeError) as e:
        logger.debug(f"Ignoring unreadable receipt {receipt_path}: {e}")
        return None


def write_receipt(receipt_path: Path, receipt: InstallReceipt) -> None:
    """Write the receipt. Failures are logged; the install itself already succeeded."""
    try:
        receipt_path.parent.mkdir(parents=True, exist_ok=True)
        with open(receipt_path, "w") as f:
            json.dump(receipt.to_dict(), f, indent=2)
        logger.debug(f"Wrote install receipt {receipt_path}")
    except OSError as e:
        logger.warning(f"Failed to write install receipt: {e}")
