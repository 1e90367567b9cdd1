from datetime import date
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

SortKey = Literal[
    "product_name",
    "product_code",
    "quantity",
    "previous_stock",
    "new_stock",
    "final_cost",
    "timestamp",
    "operation",
]
SortDirection = Literal["asc", "desc"]

Number = Union[int, float]


class MovementIn(BaseModel):
    """One movement as served by the inventory history endpoint."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_name: str = Field("", alias="nombreProducto")
    product_code: str = Field("", alias="codigoProducto")
    quantity: Number = Field(0, alias="cantidad")
    previous_stock: Optional[Number] = Field(None, alias="stockAnterior")
    new_stock: Optional[Number] = Field(None, alias="stockNuevo")
    final_cost: Optional[Number] = Field(None, alias="costoFinal")
    timestamp: Union[str, int, float] = Field(..., alias="fecha")
    operation: str = Field("", alias="operacion")


class HistoryQuery(BaseModel):
    """Query sent to the history endpoint."""
    page: int = Field(1, ge=1)
    limit: int = Field(10, gt=0)
    search: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tipo: Literal["entrada"] = "entrada"

    @model_validator(mode="after")
    def _range_order(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must be <= end_date")
        return self

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "page": self.page,
            "limit": self.limit,
            "search": self.search,
            "tipo": self.tipo,
        }
        if self.start_date:
            params["startDate"] = self.start_date.isoformat()
        if self.end_date:
            params["endDate"] = self.end_date.isoformat()
        return params
