"""Catalog unit of work: category and product repositories over one session."""

from framework.repository.unit_of_work import UnitOfWork
from .repository import CategoryRepository, ProductRepository


class CatalogUnitOfWork(UnitOfWork):
    """UnitOfWork exposing the catalog repositories (created on first access, then reused)."""

    @property
    def categories(self) -> CategoryRepository:
        return self.get_repository(CategoryRepository)

    @property
    def products(self) -> ProductRepository:
        return self.get_repository(ProductRepository)
