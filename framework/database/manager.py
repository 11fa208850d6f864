from typing import Optional
from .sql_driver import SQLDriver


class DatabaseManager:
    """Process-wide owner of the SQL driver; built from settings on first use."""

    _instance: Optional["DatabaseManager"] = None

    def __init__(self, settings):
        self.provider = settings.DB_PROVIDER
        self.sql = SQLDriver(settings.DATABASE_URL, echo=settings.DB_ECHO)

    @classmethod
    def get_instance(cls, settings=None) -> "DatabaseManager":
        if cls._instance is None:
            if settings is None:
                from framework.config import settings as app_settings
                settings = app_settings
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    async def shutdown(cls) -> None:
        """Dispose the engine and forget the instance (next get_instance() builds a new one)."""
        if cls._instance is not None:
            await cls._instance.sql.disconnect()
            cls._instance = None
