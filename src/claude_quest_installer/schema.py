"""Release metadata schema - Parse the registry's "latest release" JSON.

Only the fields the installer needs are modelled; everything else in the
payload is ignored.
"""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class AssetDescriptor(BaseModel):
    """A downloadable file attached to a release."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    download_url: str = Field(alias="browser_download_url")


class ReleaseMetadata(BaseModel):
    """
    A tagged release and its assets.

    Registry format (subset):
    {
      "tag_name": "v1.2.3",
      "assets": [
        {"name": "claude-quest_v1.2.3_linux_amd64.tar.gz",
         "browser_download_url": "https://github.com/.../claude-quest_v1.2.3_linux_amd64.tar.gz"}
      ]
    }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tag: str = Field(alias="tag_name")
    assets: tuple[AssetDescriptor, ...] = ()

    def find_asset(self, name: str) -> AssetDescriptor | None:
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None
