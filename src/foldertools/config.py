"""Configuration settings for foldertools."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or overrides."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, populate_by_name=True
    )

    upload_dir: str = Field(default="./uploads", validation_alias="FOLDERTOOLS_UPLOAD_DIR")
    host: str = Field(default="127.0.0.1", validation_alias="FOLDERTOOLS_HOST")
    port: int = Field(default=3001, validation_alias="FOLDERTOOLS_PORT")
    log_level: str = Field(default="INFO", validation_alias="FOLDERTOOLS_LOG_LEVEL")
    cors_origins: str = Field(default="*", validation_alias="FOLDERTOOLS_CORS_ORIGINS")

    def cors_origin_list(self) -> list[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]
