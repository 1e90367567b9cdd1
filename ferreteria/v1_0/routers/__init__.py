from .auth_router import router as auth_router
from .customer_router import router as customer_router
from .history_router import router as history_router
defined_routers = [
    auth_router,
    customer_router,
    history_router,
    ]
