import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional

from ferreteria.core.errors import GENERIC_HISTORY_ERROR, MalformedResponseError, TransportError
from ferreteria.core.logger import logger
from ferreteria.core.settings import settings
from ferreteria.v1_0.entities import MovementDTO
from ferreteria.v1_0.helper.debounce import Debouncer
from ferreteria.v1_0.helper.history import EXPORT_HEADER, HistoryFilters, SortConfig
from ferreteria.v1_0.schemas import SortKey
from ferreteria.v1_0.services.history_service import HistoryService

ViewState = Literal["loading", "error", "empty", "ready"]

NO_RESULTS = "No se encontraron resultados"
NO_RECORDS = "No hay registros disponibles"
INVALID_RANGE = "La fecha inicial no puede ser posterior a la fecha final"


@dataclass(frozen=True)
class HistorySnapshot:
    state: ViewState
    message: Optional[str] = None
    headers: List[str] = field(default_factory=lambda: list(EXPORT_HEADER))
    rows: List[MovementDTO] = field(default_factory=list)
    page: int = 1
    total: int = 0
    total_pages: int = 0
    range_label: Optional[str] = None
    sort: SortConfig = SortConfig()


class HistoryView:
    """
    State of the "Historial de Entradas" screen.

    Search input is debounced; the effective term and the date range drive
    remote fetches. Sort and page are applied in memory over the last
    accepted response. Every fetch carries a sequence number and only the
    latest one may update the state.
    """

    def __init__(self, service: HistoryService, debounce_sec: Optional[float] = None) -> None:
        self.service = service
        self.search_term = ""
        self.effective_search = ""
        self.start: Optional[date] = None
        self.end: Optional[date] = None
        self.sort = SortConfig()
        self.page = 1

        self._records: List[MovementDTO] = []
        self._loading = True
        self._error: Optional[str] = None
        self._seq = 0
        self._inflight: set[asyncio.Task] = set()
        self._closed = False
        delay = settings.DEBOUNCE_SECONDS if debounce_sec is None else debounce_sec
        self._debouncer: Debouncer[str] = Debouncer(self._apply_search, delay)

    @property
    def filters(self) -> HistoryFilters:
        return HistoryFilters(search=self.effective_search, start=self.start, end=self.end)

    # ---- lifecycle ----

    async def open(self) -> None:
        await self.refresh()

    async def close(self) -> None:
        """Tear down: no debounced update or late response may touch state after this."""
        self._closed = True
        self._debouncer.cancel()
        tasks = list(self._inflight)
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ---- inputs ----

    def set_search_term(self, text: str) -> None:
        self.search_term = text
        self._debouncer(text)

    async def flush_search(self) -> None:
        await self._debouncer.flush()

    async def _apply_search(self, term: str) -> None:
        if self._closed:
            return
        self.effective_search = term
        self.page = 1
        await self.refresh()

    async def set_date_range(self, start: Optional[date], end: Optional[date]) -> None:
        """
        Apply a date range and refetch.

        An inverted range (start after end) keeps the current range, drops
        any in-flight response and shows INVALID_RANGE as the error state.
        """
        if start and end and start > end:
            logger.warning("[HistoryView] rejected date range %s > %s", start, end)
            self._seq += 1
            self._fail(INVALID_RANGE)
            return
        self.start, self.end = start, end
        self.page = 1
        await self.refresh()

    async def clear_date_range(self) -> None:
        await self.set_date_range(None, None)

    def request_sort(self, key: SortKey) -> SortConfig:
        self.sort = self.sort.toggle(key)
        return self.sort

    def set_page(self, page: int) -> None:
        self.page = max(int(page), 1)

    # ---- fetch ----

    async def refresh(self) -> None:
        if self._closed:
            return
        self._seq += 1
        seq = self._seq
        self._loading = True
        task = asyncio.ensure_future(self.service.fetch(self.filters))
        self._inflight.add(task)
        try:
            records = await task
        except (TransportError, MalformedResponseError) as e:
            if self._accepts(seq):
                logger.warning("[HistoryView] fetch #%d failed: %s", seq, e)
                self._fail(getattr(e, "message", None) or GENERIC_HISTORY_ERROR)
            return
        except asyncio.CancelledError:
            if self._closed:
                return
            raise
        except Exception as e:
            if self._accepts(seq):
                logger.error("[HistoryView] fetch #%d crashed: %s", seq, e, exc_info=True)
                self._fail(GENERIC_HISTORY_ERROR)
            return
        finally:
            self._inflight.discard(task)

        if not self._accepts(seq):
            logger.debug("[HistoryView] discarding stale response #%d (latest #%d)", seq, self._seq)
            return
        self._records = records
        self._error = None
        self._loading = False

    def _fail(self, message: str) -> None:
        self._records = []
        self._error = message
        self._loading = False

    def _accepts(self, seq: int) -> bool:
        return not self._closed and seq == self._seq

    # ---- outputs ----

    def visible_records(self) -> List[MovementDTO]:
        visible, _ = self.service.build_page(self._records, self.filters, self.sort, 1)
        return visible

    def snapshot(self) -> HistorySnapshot:
        if self._loading:
            return HistorySnapshot(state="loading", sort=self.sort)
        if self._error is not None:
            return HistorySnapshot(state="error", message=self._error, sort=self.sort)

        _, page = self.service.build_page(self._records, self.filters, self.sort, self.page)
        if page.total == 0:
            return HistorySnapshot(
                state="empty",
                message=NO_RESULTS if self.filters.active else NO_RECORDS,
                page=self.page,
                sort=self.sort,
            )

        first = (page.page - 1) * page.page_size + 1
        last = min(page.page * page.page_size, page.total)
        return HistorySnapshot(
            state="ready",
            rows=page.items,
            page=page.page,
            total=page.total,
            total_pages=page.total_pages,
            range_label=f"Mostrando {first}-{last} de {page.total}" if page.items else None,
            sort=self.sort,
        )

    def export_csv(self) -> str:
        """CSV of every record that passes the current filters, in the current order."""
        return self.service.export_csv(self._records, self.filters, self.sort)
