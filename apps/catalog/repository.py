"""Catalog module repository implementations."""

from typing import List, Optional
from sqlmodel import select, col
from framework.repository import BaseRepository, QueryOptions
from .models import Category, Product


class CategoryRepository(BaseRepository[Category]):
    """Category repository."""

    def __init__(self, session):
        super().__init__(session, Category)

    async def get_products(
        self,
        category_key: int,
        limit: int = 10,
        offset: int = 0
    ) -> List[Product]:
        """
        List visible products of a visible category.

        Equivalent to an inner join categories -> products on category_id,
        ordered by product id, then windowed by offset/limit.

        Returns:
            Products (empty when the category is missing, hidden or has none)
        """
        statement = (
            select(Product)
            .join(Category, col(Category.id) == col(Product.category_id))
            .where(
                col(Category.id) == category_key,
                col(Category.hidden) == False,
                col(Product.hidden) == False,
            )
            .order_by(col(Product.id))
            .offset(offset)
            .limit(limit)
        )
        return await self.fetch_all(statement)


class ProductRepository(BaseRepository[Product]):
    """Product repository."""

    def __init__(self, session):
        super().__init__(session, Product)

    async def query_multiple_by_category_id(
        self,
        category_key: int,
        options: Optional[QueryOptions] = None
    ) -> List[Product]:
        """List products by category_id (the category's own visibility is not checked)."""
        return await self.query_multiple_by_predicate(
            col(Product.category_id) == category_key,
            options
        )
