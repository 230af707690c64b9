"""
Configuration Management Module

Configures connection parameters via environment variables or .env file.
Targets MySQL/MariaDB through PyMySQL; a full SQLAlchemy URL may be given instead.
"""

from functools import lru_cache
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Data Access Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Debug mode: echoes SQL statements and lowers the log level
    DEBUG: bool = False

    # Connection Config
    DB_HOST: str = "localhost"
    # None leaves the driver default (3306)
    DB_PORT: Optional[int] = None
    DB_USERNAME: str = "root"
    DB_PASSWORD: SecretStr = SecretStr("")
    DB_DATABASE: str = ""
    # SQLAlchemy dialect+driver name
    DB_DRIVER: str = "mysql+pymysql"

    # Full SQLAlchemy URL; when set, the DB_* fields above are ignored
    # Example: "sqlite:///./local.db"
    DATABASE_URL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Configuration instance
    """
    return Settings()
