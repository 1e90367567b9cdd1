from dataclasses import dataclass
from math import ceil
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

@dataclass(slots=True)
class PageDTO(Generic[T]):
    """Pagination envelope; `total` and `total_pages` describe the whole result set."""
    items: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, items: Sequence[T], *, page: int, page_size: int, total: int) -> "PageDTO[T]":
        total_pages = ceil(total / page_size) if page_size > 0 else 0
        return cls(
            items=list(items),
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
