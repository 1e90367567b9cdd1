from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from ferreteria.v1_0.entities import MovementDTO, PageDTO
from ferreteria.v1_0.schemas import SortDirection, SortKey
from .columns import COLUMNS_BY_KEY

T = TypeVar("T")


@dataclass(frozen=True)
class SortConfig:
    key: SortKey = "timestamp"
    direction: SortDirection = "desc"

    def toggle(self, key: SortKey) -> "SortConfig":
        """Same key flips the direction; a new key starts ascending."""
        if key == self.key:
            return SortConfig(key, "desc" if self.direction == "asc" else "asc")
        return SortConfig(key, "asc")


@dataclass(frozen=True)
class HistoryFilters:
    search: str = ""
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def active(self) -> bool:
        return bool(self.search or self.start or self.end)


def sort_movements(records: Iterable[MovementDTO], sort: SortConfig) -> List[MovementDTO]:
    column = COLUMNS_BY_KEY.get(sort.key)
    if column is None:
        raise ValueError(f"columna de orden desconocida: {sort.key}")

    def _key(m: MovementDTO):
        v = column.sort_value(m)
        return (v is None, v if v is not None else 0)

    # sorted() es estable también con reverse=True
    return sorted(records, key=_key, reverse=sort.direction == "desc")


def matches_search(m: MovementDTO, search: str) -> bool:
    if not search:
        return True
    return search.lower() in (m.product_code or "").lower()


def matches_range(m: MovementDTO, start: Optional[date], end: Optional[date]) -> bool:
    day = m.display_timestamp.date()
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def filter_movements(records: Iterable[MovementDTO], filters: HistoryFilters) -> List[MovementDTO]:
    return [
        m for m in records
        if matches_search(m, filters.search) and matches_range(m, filters.start, filters.end)
    ]


def paginate(items: Sequence[T], page: int, page_size: int) -> PageDTO[T]:
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    page = max(page, 1)
    start = (page - 1) * page_size
    return PageDTO.build(items[start:start + page_size], page=page, page_size=page_size, total=len(items))


def apply_view(
    records: Iterable[MovementDTO],
    *,
    filters: HistoryFilters,
    sort: SortConfig,
    page: int,
    page_size: int,
) -> Tuple[List[MovementDTO], PageDTO[MovementDTO]]:
    """Sort, filter and slice. Returns the whole visible set and the requested page."""
    visible = filter_movements(sort_movements(records, sort), filters)
    return visible, paginate(visible, page, page_size)
