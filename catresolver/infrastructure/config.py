"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Search backend
    search_api_url: str = Field(
        default="http://search:8080",
        description="Storefront search API base URL",
    )
    search_api_timeout: float = Field(default=10.0, gt=0)
    search_app_key: str | None = None
    search_app_token: str | None = None

    # Resolution
    platform_mode: str = Field(
        default="vtex",
        description="Default resolution strategy: vtex (classification) or gocommerce",
    )
    category_tree_levels: int = Field(default=3, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
