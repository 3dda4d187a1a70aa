"""Application configuration from environment."""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Loyalty Points"
    debug: bool = False
    log_level: str = "INFO"

    # Any async SQLAlchemy URL. Supported: SQLite (sqlite+aiosqlite://, default)
    # and PostgreSQL (postgresql+asyncpg://, install the "postgres" extra).
    database_url: str = "sqlite+aiosqlite:///./loyalty.db"
    create_tables: bool = True

    # JWT session tokens
    secret_key: str = Field(
        default="loyalty-secret-key-123",
        validation_alias=AliasChoices("secret_key", "SECRET_KEY", "JWT_SECRET"),
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 24 hours

    # bcrypt cost factor
    bcrypt_rounds: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Built browser client (index.html + assets); not served when unset
    static_dir: Path | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
