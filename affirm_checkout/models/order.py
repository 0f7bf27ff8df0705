"""Order models for Affirm checkout"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .address import Address
from .payment import Payment


class OrderState(str, Enum):
    CART = "cart"
    ADDRESS = "address"
    PAYMENT = "payment"
    CONFIRM = "confirm"
    COMPLETE = "complete"


# payment has two exits, see Order.next_state
_TRANSITIONS = {
    OrderState.CART: OrderState.ADDRESS,
    OrderState.ADDRESS: OrderState.PAYMENT,
    OrderState.CONFIRM: OrderState.COMPLETE,
}


class LineItem(BaseModel):
    """Item in an order"""
    sku: str
    name: str
    quantity: int = Field(gt=0)
    price: float


class Order(BaseModel):
    """Order being checked out"""
    id: str
    number: str
    token: str
    state: OrderState = OrderState.CART
    currency: str = "USD"
    item_total: float = 0.0
    tax_total: float = 0.0
    total: float = 0.0
    email: Optional[str] = None
    bill_address: Optional[Address] = None
    ship_address: Optional[Address] = None
    line_items: list[LineItem] = []
    payments: list[Payment] = []
    confirmation_required: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.state == OrderState.COMPLETE

    def next_state(self) -> Optional[OrderState]:
        """State the order moves to on advance, None when it cannot move"""
        if self.state == OrderState.PAYMENT:
            return OrderState.CONFIRM if self.confirmation_required else OrderState.COMPLETE
        return _TRANSITIONS.get(OrderState(self.state))

    def advance(self) -> bool:
        """Move the order one step forward"""
        next_state = self.next_state()
        if next_state is None:
            return False

        self.state = next_state
        self.updated_at = datetime.now(timezone.utc)
        if next_state == OrderState.COMPLETE:
            self.completed_at = self.updated_at
        return True
