from .columns import Column, MOVEMENT_COLUMNS, COLUMNS_BY_KEY, EXPORT_HEADER
from .normalize import normalize_movement, normalize_movements
from .pipeline import (
    SortConfig,
    HistoryFilters,
    sort_movements,
    filter_movements,
    matches_search,
    matches_range,
    paginate,
    apply_view,
)
from .export import rows_from_movements, movements_to_csv, HISTORY_EXPORT_FILENAME

__all__ = [
    "Column", "MOVEMENT_COLUMNS", "COLUMNS_BY_KEY", "EXPORT_HEADER",
    "normalize_movement", "normalize_movements",
    "SortConfig", "HistoryFilters",
    "sort_movements", "filter_movements", "matches_search", "matches_range",
    "paginate", "apply_view",
    "rows_from_movements", "movements_to_csv", "HISTORY_EXPORT_FILENAME",
]
