"""
Application configuration module.

Provides strongly-typed settings using Pydantic BaseSettings. Values are loaded
from environment variables and .env (via python-dotenv automatically loaded by
Pydantic). Use get_settings() to obtain a cached Settings instance.

The command-line front end (run.py) builds a Settings copy with any host, port
or cache directory given on the command line taking precedence.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# PUBLIC_INTERFACE
class Settings(BaseSettings):
    """Centralized application configuration powered by Pydantic BaseSettings."""

    # App
    APP_NAME: str = Field(default="Inventory Registration Service", description="Application name")
    APP_ENV: str = Field(default="development", description="Execution environment")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level (DEBUG, INFO, WARNING, ERROR)")
    CORS_ALLOWED_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed CORS origins or '*'")

    # Server
    HOST: str = Field(default="127.0.0.1", description="Address the HTTP server binds to")
    PORT: int = Field(default=3001, description="Port for the HTTP server")

    # Storage
    CACHE_DIR: str = Field(default="cache", description="Directory where uploaded photos are written")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Convenience helpers (non-env)
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS_ALLOWED_ORIGINS into a list. '*' returns ['*'] to indicate permissive mode.
        """
        raw = (self.CORS_ALLOWED_ORIGINS or "").strip()
        if raw == "*" or raw == "":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

    def cache_path(self) -> Path:
        """Absolute path of the photo cache directory."""
        return Path(self.CACHE_DIR).expanduser().resolve()

    def origin(self) -> str:
        return f"http://{self.HOST}:{self.PORT}"


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
