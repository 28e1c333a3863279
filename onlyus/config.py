"""
Runtime configuration helpers for the OnlyUs desktop client.

Values come from the environment first and fall back to the .env file
located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the shell
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    app_name: str = Field(default="OnlyUs", alias="ONLYUS_APP_NAME")

    # Backend
    api_base_url: str = Field(default="https://api.onlyus.app", alias="ONLYUS_API_BASE_URL")
    api_token: str | None = Field(default=None, alias="ONLYUS_API_TOKEN")
    http_timeout: float = Field(default=15.0, alias="ONLYUS_HTTP_TIMEOUT")

    # Avatar uploads
    upload_chunk_size: int = Field(default=64 * 1024, alias="ONLYUS_UPLOAD_CHUNK_SIZE")
    avatar_max_dimension: int = Field(default=1024, alias="ONLYUS_AVATAR_MAX_DIMENSION")
    avatar_jpeg_quality: int = Field(default=85, alias="ONLYUS_AVATAR_JPEG_QUALITY")
    camera_index: int = Field(default=0, alias="ONLYUS_CAMERA_INDEX")

    # Entry points declared by the platform manifest
    deep_link_host: str = Field(default="onlyus.app", alias="ONLYUS_DEEP_LINK_HOST")
    deep_link_scheme: str = Field(default="onlyus", alias="ONLYUS_DEEP_LINK_SCHEME")

    log_level: str = Field(default="INFO", alias="ONLYUS_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
