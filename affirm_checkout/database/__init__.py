# Database modules

from .orders import order_db, OrderDatabase
from .regions import region_db, RegionDatabase
from .payment_methods import payment_method_db, PaymentMethodDatabase

__all__ = [
    "order_db",
    "OrderDatabase",
    "region_db",
    "RegionDatabase",
    "payment_method_db",
    "PaymentMethodDatabase",
]
