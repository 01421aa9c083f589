from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EE_ENGINE_")

    check_timeout_seconds: float = Field(default=10.0, gt=0.0, le=300.0)
    degraded_risk: float = Field(default=0.5, ge=0.0, le=1.0)
    hard_veto: bool = Field(default=False)
    fail_on_screening_outage: bool = Field(default=False)


class ScreeningConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EE_SCREENING_")

    base_url: str | None = Field(default=None)
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=120.0)
    api_key: str | None = Field(default=None)


class ApiConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EE_API_")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    log_level: str = Field(default="INFO")
    policy_path: Path | None = Field(default=None)
    screening_table_path: Path | None = Field(default=None)

    engine: EngineConfig = Field(default_factory=EngineConfig)
    screening: ScreeningConfig = Field(default_factory=ScreeningConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
