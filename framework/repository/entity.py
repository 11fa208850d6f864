"""
Base for persisted entities: identity, timestamps and the soft-delete flag.
"""

from datetime import datetime, timezone
from typing import ClassVar, Optional, Tuple
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityBase(SQLModel):
    """Common columns; each concrete table=True subclass maps to its own table."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, description="Created at")
    updated_at: Optional[datetime] = Field(default=None, description="Last modified at")
    hidden: bool = Field(default=False, index=True, description="Soft-delete flag")

    # Fields copied by merge_with(); identity, timestamps and hidden are never merged
    mergeable_fields: ClassVar[Tuple[str, ...]] = ()

    def merge_with(self, other: "EntityBase") -> "EntityBase":
        """
        Copy present values from `other` into this entity.

        A value is present when it is not None, not an empty string and not zero.
        Returns self.
        """
        if other is None:
            raise ValueError("other must not be None")

        for field in self.mergeable_fields:
            value = getattr(other, field, None)
            if value is None or value == "" or value == 0:
                continue
            if value != getattr(self, field):
                setattr(self, field, value)
        return self
