# src/eurofx/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or an optional .env file.

Files that USE this module:
- eurofx.app (loads settings for wiring and logging)
- eurofx.adapters.providers.bundesbank (base URL, series id, HTTP timeout)
- eurofx.adapters.persistence.sql_store (database URL)
- eurofx.application.refresh_service (worker pool size)

Files that this module USES:
- eurofx.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Level names for LOG_LEVEL validation
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from eurofx.shared.validators import validate_http_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # --- Bundesbank API ---
    bundesbank_base_url: str = Field(
        default="https://api.statistiken.bundesbank.de/rest/data",
        alias="BUNDESBANK_BASE_URL",
    )
    bundesbank_series_id: str = Field(default="BBEX3", alias="BUNDESBANK_SERIES_ID")
    
    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=30, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=120)
    
    # --- Persistence ---
    database_url: str = Field(default="sqlite:///./data/eurofx.db", alias="DATABASE_URL")
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    
    # --- Refresh ---
    refresh_max_workers: int = Field(default=4, alias="REFRESH_MAX_WORKERS", ge=1, le=32)
    
    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_console: bool = Field(default=True, alias="EUROFX_LOG_CONSOLE")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    
    @field_validator("bundesbank_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format and drop any trailing slash."""
        if not validate_http_url(v):
            raise ValueError("BUNDESBANK_BASE_URL must be an http(s) URL")
        return v.rstrip("/")
    
    @field_validator("bundesbank_series_id")
    @classmethod
    def validate_series_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("BUNDESBANK_SERIES_ID must not be blank")
        return v.strip()
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level
    
    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


# Global settings instance
settings = Settings()
