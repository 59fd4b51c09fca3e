from __future__ import annotations

from dataclasses import dataclass

from car_market.domain.errors import ValidationError

DEFAULT_PAGE_LIMIT = 10
ALL_ROWS_LIMIT = 1000
MAX_PAGE_LIMIT = 1000


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def offset(self) -> int:
        """Rows to skip before this page starts."""
        return (self.page - 1) * self.limit

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit < 1:
            raise PagingValidationError("limit must be >= 1")
        if self.limit > MAX_PAGE_LIMIT:
            raise PagingValidationError(f"limit must be <= {MAX_PAGE_LIMIT}")


@dataclass(frozen=True, slots=True)
class PaginationInfo:
    """Pagination metadata returned alongside a page of results."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def compute(cls, total: int, paging: Paging) -> PaginationInfo:
        """
        Derive page metadata from a total row count.

        Pure function of (total, page, limit). A page past the last one is
        not an error: it simply has no next page.
        """
        total_pages = -(-total // paging.limit)  # ceil without floats
        return cls(
            total=total,
            page=paging.page,
            limit=paging.limit,
            total_pages=total_pages,
            has_next_page=paging.page < total_pages,
            has_prev_page=paging.page > 1,
        )
