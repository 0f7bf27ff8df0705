# API Routes

from .orders import router as orders_router
from .affirm import router as affirm_router
from .payments import router as payments_router

__all__ = ["orders_router", "affirm_router", "payments_router"]
