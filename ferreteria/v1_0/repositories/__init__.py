from .base_repository import BaseRepository
from .customer_repository import CustomerRepository

__all__ = ["BaseRepository", "CustomerRepository"]
