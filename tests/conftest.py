"""Test config and shared fixtures."""
import pytest
from decimal import Decimal
from typing import AsyncGenerator, List
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, delete
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
from apps.catalog.models import Category, Product


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """
    Factory over a file database, for tests needing several independent sessions
    (one per unit of work) against the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def client(
    async_session: AsyncSession
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the test session."""
    from apps.catalog.api.deps import get_db

    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def sample_category(async_session: AsyncSession) -> Category:
    """Create sample category."""
    category = Category(name="Drinks", image_uri="drinks.jpeg")
    async_session.add(category)
    await async_session.commit()
    await async_session.refresh(category)
    return category


@pytest.fixture
async def sample_categories(async_session: AsyncSession) -> List[Category]:
    """Create three categories; ids ascend in insertion order."""
    categories = [
        Category(name="Drinks", image_uri="drinks.jpeg"),
        Category(name="Snacks", image_uri="snacks.jpeg"),
        Category(name="Desserts", image_uri="desserts.jpeg"),
    ]
    async_session.add_all(categories)
    await async_session.commit()
    for category in categories:
        await async_session.refresh(category)
    return categories


@pytest.fixture
async def sample_products(async_session: AsyncSession, sample_category: Category) -> List[Product]:
    """Create two products in sample_category."""
    products = [
        Product(
            name="Milk 2 L",
            description="Milk jug - 2 L",
            price=Decimal("7.50"),
            stock=100,
            image_uri="milk.jpeg",
            category_id=sample_category.id
        ),
        Product(
            name="Orange juice 1 L",
            description="Orange juice box - 1 L",
            price=Decimal("8.90"),
            stock=85,
            image_uri="orange-juice.jpeg",
            category_id=sample_category.id
        ),
    ]
    async_session.add_all(products)
    await async_session.commit()
    for product in products:
        await async_session.refresh(product)
    return products


@pytest.fixture(autouse=True)
async def cleanup_test_data(async_session: AsyncSession, request):
    """
    Fixture to auto-cleanup test data.

    Cleans test data after each test. Disable with pytest option --no-cleanup.

    Note: This fixture is for in-memory DB (test env) only; it does not affect production.
    """
    yield

    if request.config.getoption("--no-cleanup", default=False):
        return

    try:
        await async_session.exec(delete(Product))
        await async_session.exec(delete(Category))
        await async_session.commit()
    except Exception as e:
        await async_session.rollback()
        # In test env, cleanup failure should not fail the test
        print(f"Warning: Error during test data cleanup: {e}")


def pytest_addoption(parser):
    """Add pytest command-line options."""
    parser.addoption(
        "--clean-test-data",
        action="store_true",
        default=False,
        help="Explicitly clean catalog data in the configured database and exit"
    )
    parser.addoption(
        "--no-cleanup",
        action="store_true",
        default=False,
        help="Disable auto-cleanup of test data"
    )


def pytest_configure(config):
    """Configure pytest."""
    if config.getoption("--clean-test-data"):
        import asyncio
        import sys
        from framework.database.manager import DatabaseManager
        from framework.config import settings

        async def clean_all_test_data():
            """Delete all products and categories from the configured database."""
            manager = DatabaseManager.get_instance()
            async for session in manager.sql.get_session():
                try:
                    print("=" * 60)
                    print(f"Cleaning catalog data in {settings.DATABASE_URL}")
                    print("=" * 60)

                    result = await session.exec(delete(Product))
                    print(f"  Deleted {result.rowcount} product(s)")

                    result = await session.exec(delete(Category))
                    print(f"  Deleted {result.rowcount} categor(y/ies)")

                    await session.commit()
                except Exception as e:
                    await session.rollback()
                    print(f"Test data cleanup failed: {e}")
                    sys.exit(1)
            await DatabaseManager.shutdown()

        asyncio.run(clean_all_test_data())
        sys.exit(0)
