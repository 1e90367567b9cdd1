from .customer_service import CustomerService
from .history_service import HistoryService
from .auth_service import AuthService

__all__ = [
    "CustomerService",
    "HistoryService",
    "AuthService",
]
