"""Environment-backed configuration for the download command."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_BACKUP_TIMESTAMP_FORMAT, default_output_file


class Settings(BaseSettings):
    """Defaults read from M2SETTINGS_* variables; command line options take precedence."""

    model_config = SettingsConfigDict(env_prefix="M2SETTINGS_", case_sensitive=False)

    nexus_url: str | None = None
    username: str | None = None
    password: SecretStr | None = None
    template_id: str | None = None
    secure: bool = True
    output_file: Path = Field(default_factory=default_output_file)
    encoding: str | None = None
    backup: bool = True
    backup_timestamp_format: str = DEFAULT_BACKUP_TIMESTAMP_FORMAT
    strict: bool = False
    timeout: float = 30.0
