"""
Configuration management for the HR API.

Secrets and connection strings come from environment variables or a
local .env file; everything else has a development-friendly default.
"""

from functools import lru_cache
from typing import List, Union

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "HR System API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database Configuration
    database_url: str = "sqlite:///./hr_system.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    log_sql_queries: bool = False
    slow_query_threshold_seconds: float = 1.0

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "hr-system-api"
    jwt_audience: str = "hr-system-client"
    jwt_access_token_expire_minutes: int = 60
    jwt_refresh_token_expire_days: int = 7
    jwt_leeway_seconds: int = 30

    # Password hashing (argon2)
    argon2_time_cost: int = 2
    argon2_memory_cost: int = 19456
    argon2_parallelism: int = 1

    # API
    api_prefix: str = "/api"
    cors_origins: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]
    default_page_size: int = 20
    max_page_size: int = 100

    # HR rules
    vacation_eligibility_months: int = 3

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from a comma separated string or a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def validate_jwt_secret(self):
        """Ensure JWT secret is not using default in production."""
        if self.is_production and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value in production"
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()
