"""
Request/response models for the catalog API and their entity mappings.

Requests map to entities with to_entity(); responses are built with
from_entity() / from_entities(). Mappings never touch the session.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from .models import Category, Product

NAME_MAX_LENGTH = 80
DESCRIPTION_MAX_LENGTH = 500
IMAGE_URI_MAX_LENGTH = 300


class EntityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity):
        if entity is None:
            raise ValueError("entity must not be None")
        return cls.model_validate(entity)

    @classmethod
    def from_entities(cls, entities: Iterable) -> list:
        if entities is None:
            raise ValueError("entities must not be None")
        return [cls.from_entity(entity) for entity in entities if entity is not None]


# --- Categories ---

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    image_uri: str = Field(default="", max_length=IMAGE_URI_MAX_LENGTH)

    def to_entity(self) -> Category:
        return Category(name=self.name, image_uri=self.image_uri)


class CategoryUpdate(BaseModel):
    id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    image_uri: str = Field(max_length=IMAGE_URI_MAX_LENGTH)

    def to_entity(self) -> Category:
        return Category(id=self.id, name=self.name, image_uri=self.image_uri)


class CategoryPatch(BaseModel):
    id: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    image_uri: Optional[str] = Field(default=None, max_length=IMAGE_URI_MAX_LENGTH)

    def to_entity(self) -> Category:
        # Unset fields stay None so merge_with() skips them
        return Category(id=self.id, name=self.name, image_uri=self.image_uri)


class CategoryRead(EntityResponse):
    name: str
    image_uri: str


# --- Products ---

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock: float = Field(default=0.0, ge=0)
    image_uri: str = Field(default="", max_length=IMAGE_URI_MAX_LENGTH)
    category_id: int = Field(ge=1)

    def to_entity(self) -> Product:
        return Product(
            name=self.name,
            description=self.description,
            price=self.price,
            stock=self.stock,
            image_uri=self.image_uri,
            category_id=self.category_id,
        )


class ProductUpdate(BaseModel):
    id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock: float = Field(ge=0)
    image_uri: str = Field(max_length=IMAGE_URI_MAX_LENGTH)
    category_id: int = Field(ge=1)

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            price=self.price,
            stock=self.stock,
            image_uri=self.image_uri,
            category_id=self.category_id,
        )


class ProductPatch(BaseModel):
    id: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[float] = Field(default=None, ge=0)
    image_uri: Optional[str] = Field(default=None, max_length=IMAGE_URI_MAX_LENGTH)
    category_id: Optional[int] = Field(default=None, ge=1)

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            price=self.price,
            stock=self.stock,
            image_uri=self.image_uri,
            category_id=self.category_id,
        )


class ProductRead(EntityResponse):
    name: str
    description: str
    price: Decimal
    stock: float
    image_uri: str
    category_id: int

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        # JSON clients expect a number, not pydantic's default decimal string
        return float(price)
