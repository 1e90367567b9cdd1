from typing import Any, Iterable, List

from ferreteria.v1_0.entities import MovementDTO
from ferreteria.v1_0.helper.io.writers import render_csv
from .columns import EXPORT_HEADER, MOVEMENT_COLUMNS

HISTORY_EXPORT_FILENAME = "historial_entradas.csv"

def rows_from_movements(records: Iterable[MovementDTO]) -> List[List[Any]]:
    return [[c.cell(m) for c in MOVEMENT_COLUMNS] for m in records]

def movements_to_csv(records: Iterable[MovementDTO]) -> str:
    return render_csv(EXPORT_HEADER, rows_from_movements(records))
