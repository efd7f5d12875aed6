"""DiskMon configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "DiskMon"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Disk report
    # Comma-separated in the environment: DISKMON_DF_COMMAND=/usr/bin/df,-P
    df_command: Annotated[list[str], NoDecode] = ["df", "-P"]
    df_timeout_seconds: float = 10.0

    # Display preferences (decoded by services.display_settings)
    fs_display: str = "both"
    fs_meter_unit: str = "percentage"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="DISKMON_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and value.startswith("["):
            value = json.loads(value)
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:5173"]

    @field_validator("df_command", mode="before")
    @classmethod
    def assemble_df_command(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and value.startswith("["):
            return json.loads(value)
        if isinstance(value, str):
            return [a.strip() for a in value.split(",") if a.strip()]
        return value

    @field_validator("df_command")
    @classmethod
    def check_df_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("df_command must name an executable")
        return value

    @field_validator("df_timeout_seconds")
    @classmethod
    def check_df_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("df_timeout_seconds must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
