from .customer_schema import CustomerCreate, CustomerUpdate, Category
from .history_schema import HistoryQuery, MovementIn, SortKey, SortDirection
from .auth_schema import LoginIn

__all__ = [
    "CustomerCreate", "CustomerUpdate", "Category",
    "HistoryQuery", "MovementIn", "SortKey", "SortDirection",
    "LoginIn",
]
