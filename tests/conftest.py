"""Shared helpers: archive builders and a fake release registry."""

import io
import json
import stat
import tarfile
import zipfile
from pathlib import Path

import httpx
import pytest

API_URL = "https://api.test"
LATEST_PATH = "/repos/Michaelliv/claude-quest/releases/latest"


def make_tar_gz(archive_path: Path, entries: dict[str, bytes], mode: int = 0o755) -> Path:
    """Write a .tar.gz containing regular files."""
    with tarfile.open(archive_path, "w:gz") as tar:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = mode
            tar.addfile(info, io.BytesIO(data))
    return archive_path


def make_zip(archive_path: Path, entries: dict[str, bytes], mode: int = 0o755) -> Path:
    """Write a deflate-compressed .zip with Unix permission bits set."""
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in entries.items():
            info = zipfile.ZipInfo(name)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = (stat.S_IFREG | mode) << 16
            archive.writestr(info, data)
    return archive_path


def release_payload(tag: str, asset_names: list[str], base_url: str = "https://github.test/dl") -> dict:
    return {
        "tag_name": tag,
        "name": f"Release {tag}",
        "assets": [
            {"name": name, "browser_download_url": f"{base_url}/{name}", "size": 1234} for name in asset_names
        ],
    }


class FakeRegistry:
    """Routes requests for a fake registry + download host; records every request."""

    def __init__(self, release: dict | None = None, files: dict[str, bytes] | None = None):
        self.release = release
        self.files = files or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == LATEST_PATH:
            return httpx.Response(200, content=json.dumps(self.release).encode())

        # github.test redirects to the object store, like the real thing
        if request.url.host == "github.test":
            name = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(302, headers={"Location": f"https://objects.test/{name}"})

        if request.url.host == "objects.test":
            name = request.url.path.rsplit("/", 1)[-1]
            if name in self.files:
                return httpx.Response(200, content=self.files[name])

        return httpx.Response(404)

    def client(self, headers: dict[str, str] | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), headers=headers)


@pytest.fixture
def archive_bytes(tmp_path: Path):
    """Build an archive in tmp_path and return its bytes."""

    def _build(kind: str, entries: dict[str, bytes]) -> bytes:
        path = tmp_path / f"fixture.{kind}"
        if kind == "zip":
            make_zip(path, entries)
        else:
            make_tar_gz(path, entries)
        return path.read_bytes()

    return _build
