"""
Configuration management for Anlık Eleman.
"""

from pydantic_settings import BaseSettings

PLACEHOLDER_URL = "https://placeholder.supabase.co"
PLACEHOLDER_KEY = "placeholder-key"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Hosted platform
    supabase_url: str = ""
    supabase_anon_key: str = ""
    client_info: str = "anlik-eleman-web"
    storage_bucket: str = "uploads"

    # Session persistence (empty = memory only)
    session_file: str = ""

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173"
    # The API acts as the one signed-in user; keep it reachable from this machine only
    allowed_hosts: str = "localhost,127.0.0.1"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def is_configured(self) -> bool:
        """True when the platform URL and key are real values."""
        return bool(
            self.supabase_url
            and self.supabase_anon_key
            and self.supabase_url != PLACEHOLDER_URL
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
