from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load .env early for local development
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True)

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Frontend build output (index.html, view.html, edit.html, assets)
    static_dir: str = os.getenv("STATIC_DIR", "./frontend/out")

    # Text slots
    text_ttl_seconds: int = int(os.getenv("TEXT_TTL_SECONDS", str(60 * 60)))
    sweep_interval_seconds: float = float(os.getenv("SWEEP_INTERVAL_SECONDS", str(5 * 60)))
    store_shards: int = int(os.getenv("STORE_SHARDS", "16"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: str = os.getenv("LOG_DIR", "./logs")  # empty -> console only


settings = Settings()
