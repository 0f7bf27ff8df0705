"""Payment models for Affirm checkout"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .checkout import CheckoutRecord


class PaymentState(str, Enum):
    CHECKOUT = "checkout"
    PENDING = "pending"
    COMPLETED = "completed"
    VOID = "void"
    CREDITED = "credited"


class PaymentMethod(BaseModel):
    """Configured Affirm payment method"""
    id: str
    name: str = "Affirm"
    product_key: Optional[str] = None
    environment: str = "sandbox"


class Payment(BaseModel):
    """Payment on an order, sourced from an Affirm checkout"""
    id: str = Field(default_factory=lambda: f"PAY-{uuid.uuid4().hex[:8].upper()}")
    order_id: str
    payment_method_id: str
    amount: float
    source: CheckoutRecord
    state: PaymentState = PaymentState.CHECKOUT
    # Affirm charge id once the checkout is authorized
    response_code: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def can_capture(self) -> bool:
        return self.state in (PaymentState.CHECKOUT, PaymentState.PENDING)

    def can_void(self) -> bool:
        return self.state in (PaymentState.CHECKOUT, PaymentState.PENDING)

    def can_credit(self) -> bool:
        return self.state == PaymentState.COMPLETED

    def update_state(self, new_state: PaymentState) -> None:
        self.state = new_state
        self.updated_at = datetime.now(timezone.utc)
