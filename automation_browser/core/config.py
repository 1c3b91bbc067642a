"""
Application configuration using Pydantic Settings.

All configuration is read from environment variables (12-factor app),
with defaults that serve the bundled sample snapshot locally.
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field

DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "automations.json"


class Settings(BaseSettings):
    """Central application configuration."""

    # Record source
    data_file: Path = Field(
        default=DEFAULT_DATA_FILE,
        description="Path to the JSON snapshot of automation records",
    )

    # Query defaults and bounds
    default_page: int = Field(default=1, description="Page used when none is given")
    default_limit: int = Field(
        default=50, description="Page size used when none is given"
    )
    max_limit: int = Field(
        default=50000,
        ge=1,
        le=50000,
        description="Largest accepted page size; may only tighten the 50000 cap",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Application log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API bind host")
    api_port: int = Field(default=3002, description="API bind port")
    cors_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API"
    )

    # Client
    server_url: str = Field(
        default="http://localhost:3002",
        description="Base URL the client gateway sends requests to",
    )
    http_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for client gateway requests",
    )
    filter_options_limit: int = Field(
        default=50000,
        description="Page size of the one-time fetch that feeds filter dropdowns",
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Shared instance; import this rather than building Settings()
settings = Settings()
