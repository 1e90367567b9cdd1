from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from dependency_injector.wiring import inject, Provide

from ferreteria.core.security.deps import require_session
from ferreteria.app_containers import ApplicationContainer
from ferreteria.core.logger import logger

from ferreteria.v1_0.entities import MovementPageDTO
from ferreteria.v1_0.helper.history import HistoryFilters, SortConfig
from ferreteria.v1_0.schemas import SortDirection, SortKey
from ferreteria.v1_0.services import HistoryService

router = APIRouter(
    prefix="/inventory/history",
    tags=["Inventory history"],
    dependencies=[Depends(require_session)],
)


def history_filters(
    search: str = Query("", max_length=120),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
) -> HistoryFilters:
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="start_date debe ser anterior o igual a end_date",
        )
    return HistoryFilters(search=search.strip(), start=start_date, end=end_date)


def history_sort(
    sort_key: SortKey = Query("timestamp"),
    direction: SortDirection = Query("desc"),
) -> SortConfig:
    return SortConfig(sort_key, direction)


@router.get(
    "/entries",
    response_model=MovementPageDTO,
    summary="Stock entries, filtered, sorted and paginated",
)
@inject
async def list_entries(
    page: int = Query(1, ge=1),
    filters: HistoryFilters = Depends(history_filters),
    sort: SortConfig = Depends(history_sort),
    service: HistoryService = Depends(
        Provide[ApplicationContainer.api_container.history_service]
    ),
):
    logger.debug(f"[HistoryRouter] entries page={page}")
    return await service.list_entries(filters, sort, page)


@router.get(
    "/entries/export",
    summary="Export every filtered stock entry as CSV",
    responses={200: {"content": {"text/csv": {}}}},
)
@inject
async def export_entries(
    filters: HistoryFilters = Depends(history_filters),
    sort: SortConfig = Depends(history_sort),
    service: HistoryService = Depends(
        Provide[ApplicationContainer.api_container.history_service]
    ),
):
    logger.info("[HistoryRouter] export")
    return await service.export(filters, sort)
