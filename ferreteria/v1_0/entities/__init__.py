from .page import PageDTO
from .customer_DTO import CustomerDTO, CustomerPageDTO
from .movement_DTO import MovementDTO, MovementPageDTO, OperationKind, OPERATION_LABELS, operation_kind_of
from .auth_DTO import SessionDTO


__all__ = [
    "PageDTO",
    "CustomerDTO", "CustomerPageDTO",
    "MovementDTO", "MovementPageDTO", "OperationKind", "OPERATION_LABELS", "operation_kind_of",
    "SessionDTO",
]
