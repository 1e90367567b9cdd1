from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional, Union
from .page import PageDTO

OperationKind = Literal["creacion", "entrada", "ajuste"]

OPERATION_LABELS = {
    "creacion": "Creación",
    "entrada": "Entrada",
    "ajuste": "Ajuste",
}

Number = Union[int, float]


def operation_kind_of(operation: str) -> OperationKind:
    op = (operation or "").strip().lower()
    if op == "creacion":
        return "creacion"
    if op == "entrada":
        return "entrada"
    return "ajuste"


@dataclass(slots=True, frozen=True)
class MovementDTO:
    """
    A stock movement ready to display.

    `display_timestamp` is what the table shows; `sort_timestamp` (UTC) is
    what the date column compares. The pipeline never mutates instances.
    """
    product_name: str
    product_code: str
    quantity: Number
    previous_stock: Optional[Number]
    new_stock: Optional[Number]
    final_cost: Optional[Number]
    operation: str
    operation_kind: OperationKind
    operation_label: str
    display_timestamp: datetime
    sort_timestamp: datetime
    key: str

    @classmethod
    def build(
        cls,
        *,
        product_name: str,
        product_code: str,
        quantity: Number,
        previous_stock: Optional[Number],
        new_stock: Optional[Number],
        final_cost: Optional[Number],
        operation: str,
        display_timestamp: datetime,
        sort_timestamp: datetime,
    ) -> "MovementDTO":
        kind = operation_kind_of(operation)
        return cls(
            product_name=product_name,
            product_code=product_code,
            quantity=quantity,
            previous_stock=previous_stock,
            new_stock=new_stock,
            final_cost=final_cost,
            operation=operation,
            operation_kind=kind,
            operation_label=OPERATION_LABELS[kind],
            display_timestamp=display_timestamp,
            sort_timestamp=sort_timestamp,
            key=f"{sort_timestamp.isoformat()}-{product_code}",
        )

    @property
    def quantity_label(self) -> str:
        return f"+{self.quantity}"


MovementPageDTO = PageDTO[MovementDTO]
