"""
Application configuration using pydantic-settings.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


def find_env_file() -> str:
    """Find .env file by checking multiple locations."""
    current_dir = Path(__file__).parent
    candidates = [
        current_dir / ".env",  # mechanic_shop/.env
        current_dir.parent / ".env",  # project root/.env
        Path.cwd() / ".env",
    ]

    for candidate in candidates:
        if candidate.exists():
            return str(candidate)

    # Default to project root
    return str(current_dir.parent / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: str = ""  # Empty means stderr

    # Database
    DB_DRIVER: str = "postgresql+psycopg2"
    DB_HOST: str = "localhost"
    DB_PASSWORD: str = ""  # Course databases run with trust auth
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = True

    # Input formats
    DATE_FORMAT: str = "%Y-%m-%d"

    def database_url(self, dbname: str, port: int, user: str, host: str | None = None) -> URL:
        """Build the connection URL for a database name, port and user."""
        return URL.create(
            self.DB_DRIVER,
            username=user,
            password=self.DB_PASSWORD or None,
            host=host or self.DB_HOST,
            port=port,
            database=dbname,
        )


settings = Settings()
