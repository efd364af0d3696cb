import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAME = ".content-bridge.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class UploadSettings(BaseModel):
    """Dimensions recorded for uploaded assets; the store does not inspect files."""

    default_width: int = Field(default=100, description="Width stored for uploaded assets")
    default_height: int = Field(default=100, description="Height stored for uploaded assets")


class BridgeSettings(BaseSettings):
    """Root configuration for a content source.

    Supports environment variable overrides with the pattern:
    CONTENT_BRIDGE_SECTION__KEY (e.g., CONTENT_BRIDGE_UPLOADS__DEFAULT_WIDTH)
    """

    project_id: str | None = Field(default=None, description="Project identifier in the content store")
    project_environment: str = Field(default="production", description="Store environment name")
    content_source_type: str = Field(default="example", description="Content source type reported to the host")
    manage_url_base: str = Field(
        default="https://example.com/project",
        description="Base of the store's management UI; the project id is appended",
    )
    site_localhost: str = Field(default="http://localhost:3000", description="Public base URL for asset files")
    local_dev: bool = Field(default=False, description="Running against a local development host")
    uploads: UploadSettings = Field(default_factory=UploadSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="CONTENT_BRIDGE_",
        env_nested_delimiter="__",
    )

    @property
    def project_manage_url(self) -> str:
        return f"{self.manage_url_base.rstrip('/')}/{self.project_id}"

    @classmethod
    def load(cls, root: Path | None = None) -> "BridgeSettings":
        """Loads configuration from .content-bridge.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (CONTENT_BRIDGE_SECTION__KEY)
        2. Config file (.content-bridge.toml)
        3. Defaults
        """
        root_path = root if root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILE_NAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)

        merged = _deep_merge(file_settings, env_settings)
        return cls.model_validate(merged)
