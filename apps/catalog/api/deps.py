from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.repository.options import RemoveStrategy
from ..service import CategoryService, ProductService
from ..unit_of_work import CatalogUnitOfWork

async def get_db():
    """Get database session (one per request)."""
    manager = DatabaseManager.get_instance()
    async for session in manager.sql.get_session():
        yield session

def get_uow(
    db: AsyncSession = Depends(get_db)
) -> CatalogUnitOfWork:
    """Dependency: create CatalogUnitOfWork."""
    return CatalogUnitOfWork(session=db)

def get_category_service(uow: CatalogUnitOfWork = Depends(get_uow)) -> CategoryService:
    """Dependency: create CategoryService."""
    return CategoryService(uow)

def get_product_service(uow: CatalogUnitOfWork = Depends(get_uow)) -> ProductService:
    """Dependency: create ProductService."""
    return ProductService(uow)

def get_remove_strategy() -> RemoveStrategy:
    """Dependency: remove strategy configured for DELETE endpoints."""
    return settings.REMOVE_STRATEGY
