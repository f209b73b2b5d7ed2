"""Domain models for connecting to Nexus and writing settings output."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_BACKUP_TIMESTAMP_FORMAT = "-%Y%m%d%H%M%S"


def default_output_file() -> Path:
    return Path.home() / ".m2" / "settings.xml"


class ConnectionRequest(BaseModel):
    """Details needed to open a session against a Nexus server."""

    server_url: str = Field(..., description="Base URL of the Nexus server")
    username: str = Field(..., min_length=1, description="User to connect as")
    secret: SecretStr = Field(..., description="Password of the user")

    @field_validator("server_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        value = value.strip()
        parts = urlsplit(value)
        if parts.scheme.lower() not in ("http", "https"):
            raise ValueError(f"URL must start with http:// or https://, got: {value!r}")
        if not parts.hostname:
            raise ValueError(f"URL is missing a host: {value!r}")
        if parts.query or parts.fragment:
            raise ValueError(f"Base URL must not have a query or fragment: {value!r}")
        return value if value.endswith("/") else value + "/"

    @property
    def protocol(self) -> str:
        return urlsplit(self.server_url).scheme.lower()


class ServerStatus(BaseModel):
    """Status snapshot reported by the server."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(default="Nexus", description="Application name")
    edition: str = Field(..., description="Short edition name, e.g. PRO or OSS")
    version: str = Field(..., description="Raw version string")


class TemplateDescriptor(BaseModel):
    """A settings template available on the server."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Template identifier")


class OutputTarget(BaseModel):
    """Where and how the interpolated content is written."""

    path: Path = Field(default_factory=default_output_file, description="Output file path")
    encoding: str | None = Field(default=None, description="Text encoding (platform default if unset)")
    backup: bool = Field(default=True, description="Back up an existing file before writing")
    backup_timestamp_format: str = Field(
        default=DEFAULT_BACKUP_TIMESTAMP_FORMAT,
        description="strftime format appended to the backup file name",
    )
