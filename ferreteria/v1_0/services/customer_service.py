from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ferreteria.core.errors import ValidationError
from ferreteria.core.logger import logger
from ferreteria.utils.tx import maybe_begin, transactional
from ferreteria.v1_0.schemas import CustomerCreate, CustomerUpdate
from ferreteria.v1_0.repositories import CustomerRepository
from ferreteria.v1_0.entities import CustomerDTO, CustomerPageDTO


def _duplicate_rif(rif: Optional[str]) -> ValidationError:
    return ValidationError("rif", "unique", f"Ya existe un cliente con el RIF {rif}")


class CustomerService:
    def __init__(self, customer_repository: CustomerRepository) -> None:
        self.customer_repository = customer_repository
        self.PAGE_SIZE = 10
        self.MAX_PAGE_SIZE = 100

    async def _require(self, customer_id: int, db: AsyncSession):
        """
        Ensure a customer exists or raise an HTTP 404 error.

        Args:
            customer_id: Identifier of the customer to fetch.
            db: Active async database session.

        Returns:
            ORM customer entity if found.

        Raises:
            HTTPException: If the customer does not exist.
        """
        c = await self.customer_repository.get_customer_by_id(customer_id, db)
        if not c:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente no encontrado.")
        return c

    async def create(self, payload: CustomerCreate, db: AsyncSession) -> CustomerDTO:
        """
        Create a new customer.

        Format rules (phone, RIF, email, color, categories) are already
        enforced by `CustomerCreate`; this adds the RIF uniqueness check.

        Args:
            payload: Validated customer fields.
            db: Active async database session.

        Returns:
            CustomerDTO of the created customer.

        Raises:
            ValidationError: field "rif", rule "unique" when the RIF exists.
            HTTPException: 500 if creation fails for any other reason.
        """
        logger.info("[CustomerService] Creating customer rif=%s", payload.rif)

        try:
            async with transactional(db):
                if await self.customer_repository.get_by_rif(payload.rif, db):
                    raise _duplicate_rif(payload.rif)
                c = await self.customer_repository.create_customer(payload, db)
                dto = CustomerDTO.from_model(c)
        except ValidationError:
            raise
        except IntegrityError as e:
            logger.warning("[CustomerService] Create rejected by unique index: %s", e)
            raise _duplicate_rif(payload.rif)
        except Exception as e:
            logger.error("[CustomerService] Create failed: %s", e, exc_info=True)
            raise HTTPException(
                status_code=500,
                detail="No se pudo crear el cliente",
            )

        logger.info("[CustomerService] Customer created ID=%s", dto.id)
        return dto

    async def get(self, customer_id: int, db: AsyncSession) -> CustomerDTO:
        logger.debug(f"[CustomerService] Get customer ID={customer_id}")
        try:
            async with maybe_begin(db):
                c = await self._require(customer_id, db)
                return CustomerDTO.from_model(c)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"[CustomerService] Get failed ID={customer_id}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="No se pudo obtener el cliente")

    async def list_paginated(
        self,
        page: int,
        db: AsyncSession,
        *,
        limit: Optional[int] = None,
        name: Optional[str] = None,
        rif: Optional[str] = None,
        municipality: Optional[str] = None,
        search: Optional[str] = None,
    ) -> CustomerPageDTO:
        """
        List customers in pages, optionally filtered by the indexed fields.

        Args:
            page: Page number to retrieve (1-based).
            db: Active async database session.
            limit: Page size; defaults to PAGE_SIZE, capped at MAX_PAGE_SIZE.
            name: Case-insensitive substring of the name.
            rif: Exact RIF.
            municipality: Case-insensitive substring of the municipality.
            search: Substring matched against name or RIF.

        Returns:
            CustomerPageDTO ordered by name.
        """
        page_size = min(limit or self.PAGE_SIZE, self.MAX_PAGE_SIZE)
        offset = max(page - 1, 0) * page_size

        try:
            async with maybe_begin(db):
                items, total = await self.customer_repository.search_paginated(
                    offset=offset,
                    limit=page_size,
                    session=db,
                    name=name,
                    rif=rif,
                    municipality=municipality,
                    search=search,
                )
                view_items = [CustomerDTO.from_model(c) for c in items]
        except Exception as e:
            logger.error(f"[CustomerService] List failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="No se pudo listar los clientes")

        return CustomerPageDTO.build(view_items, page=page, page_size=page_size, total=int(total or 0))

    async def update_partial(
        self,
        customer_id: int,
        payload: CustomerUpdate,
        db: AsyncSession,
    ) -> CustomerDTO:
        """
        Partially update a customer with the same format rules as creation.

        Raises:
            HTTPException: 404 if missing, 500 on unexpected failures.
            ValidationError: field "rif", rule "unique" when the new RIF belongs
                to another customer.
        """
        logger.info("[CustomerService] Updating customer ID=%s", customer_id)

        try:
            async with transactional(db):
                await self._require(customer_id, db)
                if payload.rif:
                    other = await self.customer_repository.get_by_rif(payload.rif, db)
                    if other and other.id != customer_id:
                        raise _duplicate_rif(payload.rif)
                c = await self.customer_repository.update_customer(customer_id, payload, db)
                dto = CustomerDTO.from_model(c)
        except (HTTPException, ValidationError):
            raise
        except IntegrityError as e:
            logger.warning("[CustomerService] Update rejected by unique index: %s", e)
            raise _duplicate_rif(payload.rif)
        except Exception as e:
            logger.error("[CustomerService] Update failed ID=%s: %s", customer_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="No se pudo actualizar el cliente")

        return dto

    async def delete(self, customer_id: int, db: AsyncSession) -> bool:
        logger.warning("[CustomerService] Deleting customer ID=%s", customer_id)
        try:
            async with transactional(db):
                ok = await self.customer_repository.delete_customer(customer_id, db)
        except Exception as e:
            logger.error("[CustomerService] Delete failed ID=%s: %s", customer_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="No se pudo eliminar el cliente")
        return ok
