from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from fastapi import HTTPException, Response

from ferreteria.core.errors import FerreteriaError
from ferreteria.core.logger import logger
from ferreteria.core.settings import settings
from ferreteria.v1_0.clients import HistoryClient
from ferreteria.v1_0.entities import MovementDTO, MovementPageDTO
from ferreteria.v1_0.helper.history import (
    EXPORT_HEADER,
    HISTORY_EXPORT_FILENAME,
    HistoryFilters,
    SortConfig,
    apply_view,
    movements_to_csv,
    normalize_movements,
    rows_from_movements,
)
from ferreteria.v1_0.helper.io import write_csv
from ferreteria.v1_0.schemas import HistoryQuery


class HistoryService:
    """
    Stock-entry history: fetch from the inventory endpoint, then filter,
    sort, paginate and export in memory.
    """

    def __init__(
        self,
        history_client: HistoryClient,
        page_size: Optional[int] = None,
        fetch_limit: Optional[int] = None,
        max_pages: Optional[int] = None,
        tz_name: Optional[str] = None,
    ) -> None:
        self.history_client = history_client
        self.PAGE_SIZE = page_size or settings.HISTORY_PAGE_SIZE
        self.FETCH_LIMIT = fetch_limit or settings.HISTORY_FETCH_LIMIT
        self.MAX_PAGES = max_pages or settings.HISTORY_MAX_PAGES
        self.tz = ZoneInfo(tz_name or settings.DISPLAY_TZ)

    def _query_for(self, filters: HistoryFilters, page: int = 1) -> HistoryQuery:
        return HistoryQuery(
            page=page,
            limit=self.FETCH_LIMIT,
            search=filters.search,
            start_date=filters.start,
            end_date=filters.end,
        )

    async def fetch(self, filters: HistoryFilters) -> List[MovementDTO]:
        """
        Fetch and normalize the movement working set for `filters`.

        Upstream pages of FETCH_LIMIT records are requested until one comes
        back short, up to MAX_PAGES requests. Hitting the cap with a full last
        page is logged as a truncated load.

        Raises:
            TransportError: upstream unreachable or non-2xx.
            MalformedResponseError: upstream body without a `historial` list,
                or a record that cannot be normalized.
        """
        raw: List[dict] = []
        for page in range(1, self.MAX_PAGES + 1):
            chunk = await self.history_client.fetch_page(self._query_for(filters, page))
            raw.extend(chunk)
            if len(chunk) < self.FETCH_LIMIT:
                break
        else:
            logger.warning(
                "[HistoryService] truncated load: %d pages of %d records, more may exist upstream",
                self.MAX_PAGES,
                self.FETCH_LIMIT,
            )
        records = normalize_movements(raw, self.tz)
        logger.debug("[HistoryService] normalized %d records", len(records))
        return records

    def build_page(
        self,
        records: List[MovementDTO],
        filters: HistoryFilters,
        sort: SortConfig,
        page: int,
    ) -> Tuple[List[MovementDTO], MovementPageDTO]:
        return apply_view(records, filters=filters, sort=sort, page=page, page_size=self.PAGE_SIZE)

    def export_csv(self, records: List[MovementDTO], filters: HistoryFilters, sort: SortConfig) -> str:
        visible, _ = self.build_page(records, filters, sort, 1)
        return movements_to_csv(visible)

    async def list_entries(self, filters: HistoryFilters, sort: SortConfig, page: int) -> MovementPageDTO:
        """
        One page of stock entries after filtering and sorting.

        Args:
            filters: Search term and inclusive date range.
            sort: Column and direction.
            page: 1-based page; past the end yields an empty page.

        Returns:
            MovementPageDTO with the page items and totals of the filtered set.

        Raises:
            TransportError / MalformedResponseError: propagated as-is.
            HTTPException: 500 on unexpected failures.
        """
        logger.debug(f"[HistoryService] list page={page} filters={filters} sort={sort}")
        try:
            records = await self.fetch(filters)
            _, result = self.build_page(records, filters, sort, page)
            return result
        except FerreteriaError:
            raise
        except Exception as e:
            logger.error(f"[HistoryService] list failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error al cargar el historial")

    async def export(self, filters: HistoryFilters, sort: SortConfig) -> Response:
        """Whole filtered set as `historial_entradas.csv`, not just one page."""
        logger.info(f"[HistoryService] export filters={filters} sort={sort}")
        try:
            records = await self.fetch(filters)
            visible, _ = self.build_page(records, filters, sort, 1)
        except FerreteriaError:
            raise
        except Exception as e:
            logger.error(f"[HistoryService] export failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error al exportar el historial")
        return write_csv(EXPORT_HEADER, rows_from_movements(visible), HISTORY_EXPORT_FILENAME)
