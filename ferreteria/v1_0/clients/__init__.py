from .history_client import HistoryClient

__all__ = ["HistoryClient"]
