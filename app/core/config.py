"""
Application configuration using Pydantic Settings.

All configuration is read from environment variables (12-factor app),
with sensible defaults for local development.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Central application configuration."""

    # HTTP Client (for fetching pages)
    http_timeout: float = Field(
        default=10.0,
        description="Total timeout in seconds for outbound HTTP requests",
    )
    http_connect_timeout: float = Field(
        default=5.0,
        description="Connect timeout in seconds for outbound HTTP requests",
    )
    max_redirects: int = Field(
        default=10,
        description="Maximum number of redirects followed per fetch",
    )
    max_content_bytes: int = Field(
        default=2_000_000,
        description="Maximum number of body bytes parsed for metadata",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (compatible; page-metadata-service/1.0; "
            "+https://example.com/bot)"
        ),
        description="User-Agent header sent with outbound requests",
    )

    # Request validation
    max_url_length: int = Field(
        default=2048,
        description="Maximum accepted length of the url query parameter",
    )

    # CORS
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware",
    )

    # API docs
    enable_docs: bool = Field(
        default=False,
        description="Expose /docs, /redoc and /openapi.json",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Application log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API bind host")
    api_port: int = Field(default=8000, description="API bind port")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton, import this throughout the app
settings = Settings()
