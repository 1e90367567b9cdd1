from .history_view import HistoryView, HistorySnapshot, ViewState, NO_RESULTS, NO_RECORDS, INVALID_RANGE

__all__ = ["HistoryView", "HistorySnapshot", "ViewState", "NO_RESULTS", "NO_RECORDS", "INVALID_RANGE"]
