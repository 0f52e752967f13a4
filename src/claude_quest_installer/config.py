"""Installer configuration.

All paths the pipeline touches hang off ``install_root`` and are handed to
each component explicitly, so every step can be tested against a temp dir.
"""

import os
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from . import __version__

DEFAULT_REPO = "Michaelliv/claude-quest"
DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = f"claude-quest-installer/{__version__}"

ENV_INSTALL_ROOT = "CLAUDE_QUEST_HOME"
ENV_API_URL = "CLAUDE_QUEST_API_URL"
ENV_TOKEN = "GITHUB_TOKEN"


def _default_install_root() -> Path:
    return Path.home() / ".claude-quest"


class InstallerConfig(BaseModel):
    """Where to install and how to talk to the release registry."""

    model_config = ConfigDict(frozen=True)

    install_root: Path = Field(default_factory=_default_install_root)
    repo: str = DEFAULT_REPO
    api_url: str = DEFAULT_API_URL
    github_token: str | None = None

    request_timeout: float = Field(default=30.0, gt=0)
    total_timeout: float = Field(default=600.0, gt=0)
    max_redirects: int = Field(default=10, ge=0)
    lock_stale_after: float = Field(default=900.0, gt=0)

    @property
    def bin_dir(self) -> Path:
        return self.install_root / "bin"

    @property
    def staging_dir(self) -> Path:
        return self.install_root / ".tmp"

    @property
    def lock_path(self) -> Path:
        return self.install_root / ".install.lock"

    @property
    def receipt_path(self) -> Path:
        return self.install_root / "install.json"

    @property
    def latest_release_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.repo}/releases/latest"

    def headers(self) -> dict[str, str]:
        """Headers sent with every registry and download request."""
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"
        return headers

    @classmethod
    def from_env(cls, install_root: Path | None = None, **overrides) -> "InstallerConfig":
        """
        Build config from environment variables.

        Explicit arguments win over the environment, the environment wins over
        defaults.

        Args:
            install_root: Installation root (overrides CLAUDE_QUEST_HOME)
            **overrides: Any other InstallerConfig field

        Returns:
            InstallerConfig instance
        """
        values: dict = {}

        env_root = os.environ.get(ENV_INSTALL_ROOT)
        if install_root is not None:
            values["install_root"] = Path(install_root).expanduser()
        elif env_root:
            values["install_root"] = Path(env_root).expanduser()

        if api_url := os.environ.get(ENV_API_URL):
            values["api_url"] = api_url
        if token := os.environ.get(ENV_TOKEN):
            values["github_token"] = token

        values.update(overrides)
        return cls(**values)
