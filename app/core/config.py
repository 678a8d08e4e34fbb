"""
Centralized application configuration implementing the 12-Factor App methodology.
Every value can be overridden through environment variables or a local .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable configuration schema backed by environment variables."""

    APP_NAME: str = "Selefni Credit Simulator"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Any SQLAlchemy URL works; PostgreSQL in production, SQLite locally
    DATABASE_URL: str = "sqlite:///./selefni.db"

    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    LOG_LEVEL: str = "INFO"

    # Display / export
    DEFAULT_CURRENCY: str = "MAD"
    PDF_AMORTIZATION_ROWS: int = 24

    # Bootstrap administrator, created on first startup only
    ADMIN_EMAIL: str = "admin@selefni.ma"
    ADMIN_PASSWORD: str = "admin123"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
