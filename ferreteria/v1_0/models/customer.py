from datetime import datetime, timezone
from typing import List
from sqlalchemy import JSON, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base

class Customer(Base):
    __tablename__ = "customer"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(11), nullable=False)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    municipality: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    rif: Mapped[str] = mapped_column(String(10), nullable=False, unique=True, index=True)
    categories: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    municipality_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#ffffff", server_default="#ffffff")
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
