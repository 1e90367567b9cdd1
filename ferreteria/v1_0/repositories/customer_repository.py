from typing import Optional, List, Tuple
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ferreteria.v1_0.models import Customer
from ferreteria.v1_0.schemas import CustomerCreate, CustomerUpdate
from .base_repository import BaseRepository, WhereExpr

class CustomerRepository(BaseRepository[Customer]):
    def __init__(self):
        super().__init__(Customer)

    async def create_customer(self, payload: CustomerCreate, session: AsyncSession) -> Customer:
        c = Customer(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            address=payload.address,
            municipality=payload.municipality,
            rif=payload.rif,
            categories=list(payload.categories),
            municipality_color=payload.municipality_color,
        )
        await self.add(c, session)
        return c

    async def get_customer_by_id(self, customer_id: int, session: AsyncSession) -> Optional[Customer]:
        return await super().get_by_id(customer_id, session)

    async def get_by_rif(self, rif: str, session: AsyncSession) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.rif == rif)
        return (await session.execute(stmt)).scalars().first()

    async def update_customer(self, customer_id: int, payload: CustomerUpdate, session: AsyncSession) -> Optional[Customer]:
        c = await self.get_customer_by_id(customer_id, session)
        if not c:
            return None

        allowed_fields = {
            "name", "phone", "email", "address", "municipality",
            "rif", "categories", "municipality_color",
        }
        required = {"name", "phone", "municipality", "rif", "categories", "municipality_color"}
        data = payload.model_dump(exclude_unset=True)
        for field, value in data.items():
            if field not in allowed_fields:
                continue
            if value is None and field in required:
                continue
            setattr(c, field, list(value) if field == "categories" else value)

        await self.update(c, session)
        return c

    async def delete_customer(self, customer_id: int, session: AsyncSession) -> bool:
        c = await self.get_customer_by_id(customer_id, session)
        if not c:
            return False
        await self.delete(c, session)
        return True

    async def search_paginated(
        self,
        *,
        offset: int,
        limit: int,
        session: AsyncSession,
        name: Optional[str] = None,
        rif: Optional[str] = None,
        municipality: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Customer], int]:
        filters: List[WhereExpr] = []
        if name:
            filters.append(func.lower(Customer.name).contains(name.strip().lower(), autoescape=True))
        if rif:
            filters.append(Customer.rif == rif.strip().upper())
        if municipality:
            filters.append(func.lower(Customer.municipality).contains(municipality.strip().lower(), autoescape=True))
        if search:
            term = search.strip().lower()
            filters.append(
                or_(
                    func.lower(Customer.name).contains(term, autoescape=True),
                    func.lower(Customer.rif).contains(term, autoescape=True),
                )
            )

        return await self.list_paginated(
            session,
            offset,
            limit,
            filters=filters,
            order_by=(Customer.name.asc(), Customer.id.asc()),
        )
