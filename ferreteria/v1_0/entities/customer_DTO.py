from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from .page import PageDTO

@dataclass(slots=True)
class CustomerDTO:
    """Public projection of a customer; `id` travels as a string."""
    id: str
    name: str
    phone: str
    email: Optional[str]
    address: Optional[str]
    municipality: str
    rif: str
    categories: List[str] = field(default_factory=list)
    municipality_color: str = "#ffffff"
    registered_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, c) -> "CustomerDTO":
        return cls(
            id=str(c.id),
            name=c.name,
            phone=c.phone,
            email=c.email,
            address=c.address,
            municipality=c.municipality,
            rif=c.rif,
            categories=list(c.categories or []),
            municipality_color=c.municipality_color,
            registered_at=c.registered_at,
        )

CustomerPageDTO = PageDTO[CustomerDTO]
