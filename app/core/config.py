"""
Application configuration.
Loads settings from environment variables and an optional .env file.
"""
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)

    # Application
    host: str = "0.0.0.0"
    port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"

    # Database
    database_path: str = "data/club_management.db"
    database_url: Optional[str] = None

    # CORS
    cors_origin: str = "*"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_window_ms: int = 15 * 60 * 1000
    rate_limit_max_requests: int = 100

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    redis_timeout_seconds: float = 0.5

    @field_validator("port", "rate_limit_window_ms", "rate_limit_max_requests", mode="before")
    @classmethod
    def int_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        """A malformed number falls back to the field default instead of failing startup."""
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return cls.model_fields[info.field_name].default
        return value

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{Path(self.database_path).as_posix()}"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]
