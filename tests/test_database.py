"""Database driver and manager test cases."""
import pytest
from sqlalchemy import text
from framework.config import DatabaseProvider, Settings
from framework.database.manager import DatabaseManager
from framework.database.sql_driver import SQLDriver


class TestSettings:
    """Test DATABASE_URL composition."""

    def test_sqlite_url(self):
        settings = Settings(DB_PROVIDER=DatabaseProvider.SQLITE, SQLITE_PATH="data/catalog.db")
        assert settings.DATABASE_URL == "sqlite+aiosqlite:///data/catalog.db"

    def test_mysql_url_escapes_password(self):
        settings = Settings(
            DB_PROVIDER=DatabaseProvider.MYSQL, DB_USER="catalog", DB_PASSWORD="p@ss/word",
            DB_HOST="db", DB_PORT=3307, DB_NAME="shop"
        )
        assert settings.DATABASE_URL == "mysql+aiomysql://catalog:p%40ss%2Fword@db:3307/shop"


class TestSQLDriver:
    """Test the async SQL driver against a file database."""

    @pytest.mark.asyncio
    async def test_lifecycle(self, tmp_path):
        driver = SQLDriver(f"sqlite+aiosqlite:///{tmp_path / 'driver.db'}")
        await driver.connect()
        await driver.create_all()

        async for session in driver.get_session():
            result = await session.execute(text("SELECT COUNT(*) FROM categories"))
            assert result.scalar() == 0

        await driver.disconnect()


class TestDatabaseManager:
    """Test the manager singleton."""

    @pytest.mark.asyncio
    async def test_singleton_and_shutdown(self, tmp_path):
        settings = Settings(SQLITE_PATH=str(tmp_path / "manager.db"))
        await DatabaseManager.shutdown()

        manager = DatabaseManager.get_instance(settings)
        assert DatabaseManager.get_instance() is manager
        assert manager.provider == DatabaseProvider.SQLITE

        await DatabaseManager.shutdown()
        assert DatabaseManager._instance is None
