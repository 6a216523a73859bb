"""Configuration management for the pool HQ vote service."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

NetworkName = Literal["mainnet", "testnet", "devnet"]


class Settings(BaseSettings):
    app_name: str = Field(default="NavPool HQ")
    version: str = Field(default="0.1.0")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str = Field(default="/openapi.json")

    database_url: str = Field(default="postgresql+psycopg://poolhq:poolhq@db:5432/poolhq")

    pool_url: str = Field(default="http://localhost:3000")
    selected_network: NetworkName = Field(default="mainnet")
    pool_timeout_seconds: float = Field(default=5.0, gt=0)

    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=True)
    otel_exporter_endpoint: str | None = Field(default=None)

    jwt_secret: str = Field(default="dev-only-change-me")
    jwt_algorithm: str = Field(default="HS256")
    jwt_identity_key: str = Field(default="id")

    log_level: str | None = Field(default=None)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["NetworkName", "Settings", "get_settings"]
