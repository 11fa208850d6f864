from enum import Enum
from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict
from framework.repository.options import RemoveStrategy


class DatabaseProvider(str, Enum):
    """Supported database backends."""
    SQLITE = "sqlite"
    MYSQL = "mysql"


class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "Catalog API"
    APP_DESCRIPTION: str = "Catalog management service for categories and products"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Database ---
    DB_PROVIDER: DatabaseProvider = DatabaseProvider.SQLITE
    SQLITE_PATH: str = "catalog.db"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "catalog"
    DB_ECHO: bool = False
    DB_CREATE_ALL: bool = False  # Create tables on startup instead of running Alembic

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_PROVIDER == DatabaseProvider.SQLITE:
            return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"
        # Build async MySQL connection URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- API behavior ---
    MAX_ITEMS_PER_PAGE: int = 100
    DEFAULT_ITEMS_PER_PAGE: int = 10
    REMOVE_STRATEGY: RemoveStrategy = RemoveStrategy.DELETE  # delete, hide

    # --- Logging ---
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # --- API route prefixes ---
    API_CATEGORIES_PREFIX: str = "/api/categories"
    API_PRODUCTS_PREFIX: str = "/api/products"

    # --- Gunicorn process name (optional) ---
    GUNICORN_PROC_NAME: Optional[str] = None  # Fallback to APP_NAME when empty

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
