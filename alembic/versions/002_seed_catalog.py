"""seed categories and products

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 09:30:00.000000

"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORIES = [
    {"id": 1, "name": "Drinks", "image_uri": "drinks.jpeg"},
    {"id": 2, "name": "Snacks", "image_uri": "snacks.jpeg"},
    {"id": 3, "name": "Desserts", "image_uri": "desserts.jpeg"},
]

PRODUCTS = [
    # Drinks
    {"category_id": 1, "name": "Milk 2 L", "description": "Milk jug - 2 L",
     "price": Decimal("7.50"), "stock": 100.0, "image_uri": "milk.jpeg"},
    {"category_id": 1, "name": "Orange juice 1 L", "description": "Orange juice box - 1 L",
     "price": Decimal("8.90"), "stock": 85.0, "image_uri": "orange-juice.jpeg"},
    # Snacks
    {"category_id": 2, "name": "Peanuts 1 kg", "description": "Roasted peanuts packet - Large 1 kg",
     "price": Decimal("22.50"), "stock": 120.0, "image_uri": ""},
    {"category_id": 2, "name": "Sandwich", "description": "Natural sandwich - cheese, ham, lettuce and tomato",
     "price": Decimal("21.90"), "stock": 12.0, "image_uri": "sandwich.jpeg"},
    # Desserts
    {"category_id": 3, "name": "Pudding 85g", "description": "Condensed milk pudding - 1 serving 85g",
     "price": Decimal("12.75"), "stock": 25.0, "image_uri": "pudding.jpeg"},
    {"category_id": 3, "name": "Dark Chocolate 125g", "description": "Dark chocolate bar - 125g",
     "price": Decimal("15.90"), "stock": 90.0, "image_uri": "chocolate.jpeg"},
]

categories = sa.table(
    "categories",
    sa.column("id", sa.Integer),
    sa.column("created_at", sa.DateTime),
    sa.column("hidden", sa.Boolean),
    sa.column("name", sa.String),
    sa.column("image_uri", sa.String),
)

products = sa.table(
    "products",
    sa.column("created_at", sa.DateTime),
    sa.column("hidden", sa.Boolean),
    sa.column("name", sa.String),
    sa.column("description", sa.String),
    sa.column("price", sa.Numeric(10, 2)),
    sa.column("stock", sa.Float),
    sa.column("image_uri", sa.String),
    sa.column("category_id", sa.Integer),
)


def upgrade() -> None:
    now = datetime.now(timezone.utc)
    op.bulk_insert(categories, [{**row, "created_at": now, "hidden": False} for row in CATEGORIES])
    op.bulk_insert(products, [{**row, "created_at": now, "hidden": False} for row in PRODUCTS])


def downgrade() -> None:
    op.execute(products.delete())
    op.execute(categories.delete())
