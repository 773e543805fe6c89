"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./finny.db"

    # Sessions
    session_secret_key: str = "change-me-in-production"
    session_max_age_seconds: int = 30 * 24 * 60 * 60  # 30 days
    session_cookie_name: str = "finny_session"

    # Service
    service_name: str = "finny"
    log_level: str = "INFO"

    # API client (used by the budget sync layer)
    api_base_url: str = "http://localhost:8000/api/v1"
    http_timeout_seconds: float = 5.0


settings = Settings()
