from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Tuple, TypeVar
from framework.exceptions.errors import ModelValidationException
from framework.logging.logger import get_logger
from framework.repository import BaseRepository, EntityBase, QueryOptions, RemoveStrategy
from .models import Category, Product
from .unit_of_work import CatalogUnitOfWork

logger = get_logger("catalog_service")

E = TypeVar("E", bound=EntityBase)


class EntityService(ABC, Generic[E]):
    """CRUD flow shared by catalog services: stage through a repository, then commit."""

    entity_name = "Entity"

    def __init__(self, uow: CatalogUnitOfWork):
        """Initialize service with UnitOfWork."""
        self.uow = uow

    @property
    @abstractmethod
    def repository(self) -> BaseRepository[E]:
        """Repository of the entity this service manages."""
        pass

    async def create(self, entity: E) -> E:
        await self.validate(entity)
        created = await self.repository.create(entity)
        await self.uow.commit_changes()
        logger.info(f"{self.entity_name} {created.id} created")
        return created

    async def list_page(self, limit: int, offset: int) -> Tuple[List[E], int]:
        """Visible entities in id order, windowed by offset/limit, plus the visible total."""
        options = QueryOptions.default()
        statement = self.repository.query(options).offset(offset).limit(limit)
        entities = await self.repository.fetch_all(statement, options)
        total = await self.repository.count(options)
        return entities, total

    async def get(self, key: int) -> Optional[E]:
        return await self.repository.find_by_id(key)

    async def update(self, key: int, source: E) -> Optional[E]:
        """Merge present fields of source into the stored entity; None when missing or hidden."""
        current = await self.repository.find_by_id(key, QueryOptions(track_changes=True))
        if current is None:
            return None

        await self.validate(source)
        updated = await self.repository.update(current.merge_with(source))
        await self.uow.commit_changes()
        logger.info(f"{self.entity_name} {key} updated")
        return updated

    async def remove(self, key: int, strategy: RemoveStrategy) -> Optional[E]:
        removed = await self.repository.remove_by_id(key, strategy)
        await self.uow.commit_changes()
        if removed is not None:
            logger.info(f"{self.entity_name} {key} removed (strategy={strategy.value})")
        return removed

    async def validate(self, entity: E) -> None:
        """Cross-entity checks the request models cannot express; raise ModelValidationException."""


class CategoryService(EntityService[Category]):
    entity_name = "Category"

    @property
    def repository(self):
        return self.uow.categories

    async def list_products(self, key: int, limit: int, offset: int) -> List[Product]:
        return await self.uow.categories.get_products(key, limit=limit, offset=offset)


class ProductService(EntityService[Product]):
    entity_name = "Product"

    @property
    def repository(self):
        return self.uow.products

    async def validate(self, entity: Product) -> None:
        # category_id of 0/None means "unchanged" in partial updates
        if not entity.category_id:
            return

        category = await self.uow.categories.find_by_id(entity.category_id)
        if category is None:
            raise ModelValidationException(
                {"category_id": [f"Category '{entity.category_id}' does not exist."]}
            )
