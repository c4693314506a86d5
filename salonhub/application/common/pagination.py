"""Page requests and page results for list queries such as the audit log."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from salonhub.domain.common.exceptions import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """A 1-indexed page of at most ``page_size`` items."""

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be at least 1", field="page", value=self.page)
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}",
                field="page_size",
                value=self.page_size,
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    One page of query results.

    Example:
        entries, total = audit_log_repository.find(filters, pagination)
        return PaginatedResult(items=entries, total=total, pagination=pagination)
    """

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        # ceiling division; an empty result has no pages
        return -(-self.total // self.page_size)
