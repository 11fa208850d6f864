"""
Query options: which rows are visible, whether results stay tracked, and how many are fetched.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict
from framework.pagination import PaginationParameters


class RemoveStrategy(str, Enum):
    """How a remove operation treats matching entities."""
    DELETE = "delete"  # Physically delete the row
    HIDE = "hide"  # Set hidden=True and update the row


class QueryOptions(BaseModel):
    """
    Immutable options for repository queries.

    Pagination is applied only when `pagination` is set; None means no limit.
    """

    model_config = ConfigDict(frozen=True)

    include_hidden_entities: bool = False
    track_changes: bool = False
    pagination: Optional[PaginationParameters] = None

    @classmethod
    def default(cls) -> "QueryOptions":
        """Hidden entities excluded, untracked, unpaginated."""
        return cls()

    @classmethod
    def default_paginated(cls) -> "QueryOptions":
        """Same as default() with the first page of DEFAULT_PAGE_SIZE rows."""
        return cls(pagination=PaginationParameters.default())
