"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database (SQLite file by default, PostgreSQL accepted)
    DATABASE_URL: str = "sqlite:///./timekeeper.sqlite"

    # Security
    SECRET_KEY: str = "super-secret-key-change-me"  # replace in production

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Seed PRJ-1001 / PRJ-2002 on startup when the project table is empty
    SEED_SAMPLE_PROJECTS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to SQLAlchemy format (postgresql+psycopg://)
        """
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
