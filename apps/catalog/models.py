from decimal import Decimal
from typing import ClassVar, List, Optional, Tuple
from sqlmodel import Field, Relationship
from framework.repository.entity import EntityBase


class Category(EntityBase, table=True):
    """Product category (1..* Product)."""
    __tablename__ = "categories"

    name: str = Field(max_length=80, description="Category name")
    image_uri: str = Field(default="", max_length=300, description="Thumbnail image URI")

    # Deleting a category deletes its products (required foreign key)
    products: List["Product"] = Relationship(
        back_populates="category",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    mergeable_fields: ClassVar[Tuple[str, ...]] = ("name", "image_uri")


class Product(EntityBase, table=True):
    """Product for sale."""
    __tablename__ = "products"

    name: str = Field(max_length=80, description="Product name")
    description: str = Field(default="", max_length=500, description="Product description")
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2, description="Unit price")
    stock: float = Field(default=0.0, description="Quantity in stock")
    image_uri: str = Field(default="", max_length=300, description="Thumbnail image URI")

    category_id: int = Field(foreign_key="categories.id", index=True, ondelete="CASCADE")
    category: Optional[Category] = Relationship(back_populates="products")

    mergeable_fields: ClassVar[Tuple[str, ...]] = (
        "name", "description", "price", "stock", "image_uri", "category_id",
    )
