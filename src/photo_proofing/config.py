"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_ALLOWED_UPLOAD_TYPES = "image/jpeg,image/png,image/webp"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    stripe_secret_key: str
    stripe_currency: str = "usd"
    public_base_url: str | None = None
    storage_bucket: str = "gallery-images"
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_upload_types: str = DEFAULT_ALLOWED_UPLOAD_TYPES
    thumbnail_max_px: int = 300
    watermark_text: str | None = None
    watermark_position: str = "bottom-right"
    watermark_opacity: float = 0.5
    watermark_font_size: int = 24
    watermark_color: str = "white"
    stale_order_minutes: int = 30
    debug_errors: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_types(raw: str | None) -> set[str]:
    """Parse the comma-separated list of accepted upload content types."""
    if raw is None or not raw.strip():
        raw = DEFAULT_ALLOWED_UPLOAD_TYPES
    types: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value:
            types.add(value)
    return types
