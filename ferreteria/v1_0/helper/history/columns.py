from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from ferreteria.v1_0.entities import MovementDTO
from ferreteria.v1_0.helper.io.normalizers import format_display


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    sort_value: Callable[[MovementDTO], Any]
    cell: Callable[[MovementDTO], Any]


# Table and CSV share this list: same columns, same order.
MOVEMENT_COLUMNS: List[Column] = [
    Column("product_name", "Producto", lambda m: m.product_name, lambda m: m.product_name),
    Column("product_code", "Código", lambda m: m.product_code, lambda m: m.product_code),
    Column("quantity", "Cantidad", lambda m: m.quantity, lambda m: m.quantity_label),
    Column("previous_stock", "Stock Anterior", lambda m: m.previous_stock, lambda m: m.previous_stock),
    Column("new_stock", "Stock Nuevo", lambda m: m.new_stock, lambda m: m.new_stock),
    Column("final_cost", "Costo Final", lambda m: m.final_cost, lambda m: m.final_cost),
    Column("timestamp", "Fecha y Hora", lambda m: m.sort_timestamp, lambda m: format_display(m.display_timestamp)),
    Column("operation", "Operación", lambda m: m.operation, lambda m: (m.operation or "").upper()),
]

COLUMNS_BY_KEY: Dict[str, Column] = {c.key: c for c in MOVEMENT_COLUMNS}

EXPORT_HEADER: List[str] = [c.header for c in MOVEMENT_COLUMNS]
