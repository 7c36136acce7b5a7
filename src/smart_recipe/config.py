"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    google_client_id: str
    google_client_secret: str
    session_secret: str
    supabase_url: str
    supabase_service_key: str
    api_base_url: str = "http://localhost:8000"
    public_base_url: str = "http://localhost:8000"
    session_cookie_name: str = "session-token"
    session_max_age_seconds: int = 30 * 24 * 60 * 60
    s3_bucket: str = "smart-recipe-generator"
    aws_region: str = "us-east-2"
    about_url: str = "https://github.com/Sanjukktha"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def google_redirect_uri(self) -> str:
        """OAuth callback registered with Google."""
        return f"{self.public_base_url.rstrip('/')}/auth/callback/google"

    @property
    def secure_cookies(self) -> bool:
        return self.environment != "local"

