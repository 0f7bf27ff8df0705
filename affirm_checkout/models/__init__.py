# Affirm Checkout Models

from .address import Address, Region
from .checkout import (
    Charge,
    ChargeEvent,
    CheckoutAddress,
    CheckoutContact,
    CheckoutDiscount,
    CheckoutItem,
    CheckoutName,
    CheckoutRecord,
    to_cents,
)
from .payment import Payment, PaymentMethod, PaymentState
from .order import LineItem, Order, OrderState

__all__ = [
    "Address",
    "Region",
    "Charge",
    "ChargeEvent",
    "CheckoutAddress",
    "CheckoutContact",
    "CheckoutDiscount",
    "CheckoutItem",
    "CheckoutName",
    "CheckoutRecord",
    "to_cents",
    "Payment",
    "PaymentMethod",
    "PaymentState",
    "LineItem",
    "Order",
    "OrderState",
]
