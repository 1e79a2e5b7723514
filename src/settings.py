"""Centralized settings for the live signal stream client.

Uses pydantic-settings to load from environment variables (prefixed
SIGNALSTREAM_) with defaults matching the hosted signals dashboard.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # --- Endpoints ---
    page_url: str = "http://localhost:8000"
    ws_path: str = "/ws"
    status_path: str = "/api/admin/live-streaming"
    test_signal_path: str = "/api/admin/live-streaming/test"
    request_timeout: float = 10.0

    # --- Streaming behaviour ---
    status_poll_interval: float = 30.0
    max_reconnect_attempts: int = 5
    reconnect_base_delay: float = 1.0
    signal_buffer_capacity: int = 50
    default_test_symbol: str = "BTCUSDT"

    # --- Account ---
    subscription_tier: str = "none"

    model_config = {
        "env_prefix": "SIGNALSTREAM_",
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
