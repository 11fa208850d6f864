"""
Pagination parameters: validated page number / page size pair used by QueryOptions.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from framework.exceptions.errors import ModelValidationException

PAGE_NUMBER_MIN_VALUE = 1
PAGE_NUMBER_MAX_VALUE = 2_147_483_647
DEFAULT_PAGE_NUMBER = 1

PAGE_SIZE_MIN_VALUE = 1
PAGE_SIZE_MAX_VALUE = 100
DEFAULT_PAGE_SIZE = 10


class PaginationParameters(BaseModel):
    """
    1-indexed page request.

    Build instances through create_new() / try_create_new(); a constructed
    value is immutable and always within bounds.
    """

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(
        default=DEFAULT_PAGE_NUMBER, ge=PAGE_NUMBER_MIN_VALUE, le=PAGE_NUMBER_MAX_VALUE
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=PAGE_SIZE_MIN_VALUE, le=PAGE_SIZE_MAX_VALUE
    )

    @property
    def skip(self) -> int:
        """Rows to skip before the requested page."""
        return (self.page_number - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size

    @classmethod
    def default(cls) -> "PaginationParameters":
        return cls()

    @classmethod
    def create_new(
        cls,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> "PaginationParameters":
        """
        Create validated pagination parameters, applying defaults for omitted values.

        Raises:
            ModelValidationException: page_number < 1 or page_size outside [1, 100].
        """
        try:
            return cls(
                page_number=DEFAULT_PAGE_NUMBER if page_number is None else page_number,
                page_size=DEFAULT_PAGE_SIZE if page_size is None else page_size,
            )
        except ValidationError as e:
            errors = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "__root__"
                errors.setdefault(field, []).append(error["msg"])
            raise ModelValidationException(errors) from None

    @classmethod
    def try_create_new(
        cls,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[bool, Optional["PaginationParameters"]]:
        """Non-raising variant of create_new(); returns (success, parameters)."""
        try:
            return True, cls.create_new(page_number=page_number, page_size=page_size)
        except ModelValidationException:
            return False, None
