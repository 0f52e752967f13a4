"""Tests for the release locator (GitHub source + asset selection)."""

import httpx
import pytest
from claude_quest_installer import AssetNotFoundError
from claude_quest_installer import GitHubReleaseSource
from claude_quest_installer import InstallerConfig
from claude_quest_installer import NetworkError
from claude_quest_installer import ParseError
from claude_quest_installer import ReleaseMetadata
from claude_quest_installer import select_asset
from conftest import API_URL
from conftest import LATEST_PATH
from conftest import release_payload


def _source(handler, tmp_path) -> tuple[GitHubReleaseSource, httpx.AsyncClient]:
    config = InstallerConfig(install_root=tmp_path, api_url=API_URL)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubReleaseSource(client, config), client


@pytest.mark.asyncio
async def test_fetch_latest(tmp_path):
    """Test one GET to the latest-release endpoint, parsed into metadata."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=release_payload("v1.2.3", ["claude-quest_v1.2.3_linux_amd64.tar.gz"]))

    source, client = _source(handler, tmp_path)
    async with client:
        metadata = await source.fetch_latest()

    assert metadata.tag == "v1.2.3"
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert seen[0].url.path == LATEST_PATH
    assert seen[0].headers["user-agent"].startswith("claude-quest-installer/")


@pytest.mark.asyncio
async def test_fetch_latest_sends_token(tmp_path):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=release_payload("v1", []))

    config = InstallerConfig(install_root=tmp_path, api_url=API_URL, github_token="s3cret")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await GitHubReleaseSource(client, config).fetch_latest()

    assert seen[0].headers["authorization"] == "Bearer s3cret"


@pytest.mark.asyncio
async def test_fetch_latest_transport_error(tmp_path):
    """Test connection failures surface as NetworkError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    source, client = _source(handler, tmp_path)
    async with client:
        with pytest.raises(NetworkError, match="Cannot reach release registry"):
            await source.fetch_latest()


@pytest.mark.asyncio
async def test_fetch_latest_bad_status(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "API rate limit exceeded"})

    source, client = _source(handler, tmp_path)
    async with client:
        with pytest.raises(NetworkError) as exc_info:
            await source.fetch_latest()

    assert exc_info.value.status_code == 403
    assert "403" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_latest_invalid_json(tmp_path):
    """Test a garbage body is a ParseError, not a NetworkError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    source, client = _source(handler, tmp_path)
    async with client:
        with pytest.raises(ParseError, match="invalid JSON"):
            await source.fetch_latest()


@pytest.mark.asyncio
async def test_fetch_latest_wrong_shape(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"assets": "nope"})

    source, client = _source(handler, tmp_path)
    async with client:
        with pytest.raises(ParseError, match="unexpected metadata"):
            await source.fetch_latest()


def test_select_asset_exact_match():
    metadata = ReleaseMetadata.model_validate(
        release_payload(
            "v1.2.3",
            [
                "claude-quest_v1.2.3_linux_amd64.tar.gz.sha256",
                "claude-quest_v1.2.3_linux_amd64.tar.gz",
            ],
        )
    )

    asset = select_asset(metadata, "claude-quest_v1.2.3_linux_amd64.tar.gz")

    assert asset.name == "claude-quest_v1.2.3_linux_amd64.tar.gz"


def test_select_asset_missing_names_file():
    """Test a missing asset reports the exact filename sought."""
    metadata = ReleaseMetadata.model_validate(release_payload("v1.2.3", ["claude-quest_v1.2.3_darwin_amd64.tar.gz"]))

    with pytest.raises(AssetNotFoundError) as exc_info:
        select_asset(metadata, "claude-quest_v1.2.3_linux_amd64.tar.gz")

    assert exc_info.value.asset_name == "claude-quest_v1.2.3_linux_amd64.tar.gz"
    assert str(exc_info.value) == "Could not find release asset: claude-quest_v1.2.3_linux_amd64.tar.gz"
    assert exc_info.value.context["available"] == ["claude-quest_v1.2.3_darwin_amd64.tar.gz"]


def test_select_asset_no_fuzzy_match():
    metadata = ReleaseMetadata.model_validate(release_payload("v1.2.3", ["Claude-Quest_v1.2.3_linux_amd64.tar.gz"]))

    with pytest.raises(AssetNotFoundError):
        select_asset(metadata, "claude-quest_v1.2.3_linux_amd64.tar.gz")


@pytest.mark.asyncio
async def test_github_source_satisfies_protocol(tmp_path):
    from claude_quest_installer import ReleaseSourceProtocol

    async with httpx.AsyncClient() as client:
        source = GitHubReleaseSource(client, InstallerConfig(install_root=tmp_path))

        assert isinstance(source, ReleaseSourceProtocol)
