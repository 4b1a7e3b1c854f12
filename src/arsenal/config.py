"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with ARSENAL_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="ARSENAL_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    redis_url: str = "redis://localhost:6379/0"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Shopify Admin API ---
    shopify_store_url: str = ""
    shopify_access_token: str = ""
    shopify_api_version: str = "2023-10"
    shopify_timeout_seconds: float = 10.0

    # --- Admin ---
    admin_secret: str = ""

    # --- Metafields ---
    metafield_namespace: str = "rc_arsenal"
    metafield_fetch_limit: int = 20
    leaderboard_batch_size: int = 50
    bulk_batch_size: int = 100

    # --- Rate limits (15 minute window) ---
    rate_limit_requests: int = 100
    rate_limit_admin_requests: int = 20
    rate_limit_window_seconds: int = 900


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
