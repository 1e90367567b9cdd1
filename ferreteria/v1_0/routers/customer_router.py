from typing import Dict, Optional
from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from ferreteria.core.errors import ValidationError
from ferreteria.core.security.deps import require_session
from ferreteria.storage.database.db_connector import get_db
from ferreteria.app_containers import ApplicationContainer
from ferreteria.core.logger import logger

from ferreteria.v1_0.schemas import CustomerCreate, CustomerUpdate
from ferreteria.v1_0.entities import CustomerDTO, CustomerPageDTO
from ferreteria.v1_0.services import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"], dependencies=[Depends(require_session)])

@router.post(
    "",
    response_model=CustomerDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new customer",
)
@inject
async def create_customer(
    request: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    service: CustomerService = Depends(
        Provide[ApplicationContainer.api_container.customer_service]
    ),
) -> CustomerDTO:
    logger.info("[CustomerRouter] create rif=%s", request.rif)
    try:
        return await service.create(payload=request, db=db)
    except (HTTPException, ValidationError):
        raise
    except Exception as e:
        logger.error("[CustomerRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="No se pudo crear el cliente")

@router.get(
    "/page",
    response_model=CustomerPageDTO,
    summary="List customers paginated",
)
@inject
async def list_customers_paginated(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    name: Optional[str] = Query(None, max_length=120),
    rif: Optional[str] = Query(None, max_length=10),
    municipality: Optional[str] = Query(None, max_length=80),
    search: Optional[str] = Query(None, max_length=120),
    db: AsyncSession = Depends(get_db),
    service: CustomerService = Depends(
        Provide[ApplicationContainer.api_container.customer_service]
    ),
):
    logger.debug(f"[CustomerRouter] list_paginated page={page} limit={limit}")
    try:
        return await service.list_paginated(
            page,
            db,
            limit=limit,
            name=name,
            rif=rif,
            municipality=municipality,
            search=search,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CustomerRouter] list_paginated error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="No se pudo listar los clientes")

@router.get(
    "/by-id/{customer_id}",
    response_model=CustomerDTO,
    summary="Get customer by ID",
)
@inject
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    service: CustomerService = Depends(
        Provide[ApplicationContainer.api_container.customer_service]
    ),
):
    logger.debug(f"[CustomerRouter] get id={customer_id}")
    try:
        return await service.get(customer_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CustomerRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="No se pudo obtener el cliente")

@router.patch(
    "/by-id/{customer_id}",
    response_model=CustomerDTO,
    summary="Update customer",
)
@inject
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    service: CustomerService = Depends(
        Provide[ApplicationContainer.api_container.customer_service]
    ),
) -> CustomerDTO:
    logger.info(
        "[CustomerRouter] update id=%s fields=%s",
        customer_id,
        sorted(data.model_dump(exclude_unset=True)),
    )
    try:
        return await service.update_partial(customer_id=customer_id, payload=data, db=db)
    except (HTTPException, ValidationError):
        raise
    except Exception as e:
        logger.error("[CustomerRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="No se pudo actualizar el cliente")

@router.delete(
    "/by-id/{customer_id}",
    response_model=Dict[str, str],
    summary="Delete a customer",
)
@inject
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    service: CustomerService = Depends(
        Provide[ApplicationContainer.api_container.customer_service]
    ),
) -> Dict[str, str]:
    logger.warning("[CustomerRouter] delete id=%s", customer_id)
    try:
        ok = await service.delete(customer_id=customer_id, db=db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[CustomerRouter] delete error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="No se pudo eliminar el cliente")

    if not ok:
        raise HTTPException(status_code=404, detail="Cliente no encontrado")

    return {"message": f"Cliente {customer_id} eliminado"}
