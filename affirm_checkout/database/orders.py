"""Order storage for Affirm checkout"""

import asyncio
import uuid
import weakref
from datetime import datetime, timezone
from typing import Optional

from ..models.address import Address
from ..models.order import LineItem, Order, OrderState


class OrderDatabase:
    """
    In-memory order storage.

    Orders are stored and handed out as deep copies, so changes made to an
    order during a request only become visible to later lookups once saved.
    """

    TAX_RATE = 0.0875  # 8.75% tax

    def __init__(self):
        self.orders: dict[str, Order] = {}
        # Entries go away once no request holds the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def create_order(
        self,
        line_items: list[LineItem],
        email: Optional[str] = None,
        bill_address: Optional[Address] = None,
        ship_address: Optional[Address] = None,
        state: OrderState = OrderState.CART,
        confirmation_required: bool = False,
    ) -> Order:
        """Create an order from line items"""
        item_total = round(sum(item.price * item.quantity for item in line_items), 2)
        tax_total = round(item_total * self.TAX_RATE, 2)

        order = Order(
            id=str(uuid.uuid4()),
            number=f"R{uuid.uuid4().int % 10**9:09d}",
            token=uuid.uuid4().hex,
            state=state,
            item_total=item_total,
            tax_total=tax_total,
            total=round(item_total + tax_total, 2),
            email=email,
            bill_address=bill_address,
            ship_address=ship_address,
            line_items=line_items,
            confirmation_required=confirmation_required,
        )
        return self.save(order)

    def save(self, order: Order) -> Order:
        """Persist an order"""
        order.updated_at = datetime.now(timezone.utc)
        self.orders[order.id] = order.model_copy(deep=True)
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        order = self.orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    def find_by_token(self, token: Optional[str]) -> Optional[Order]:
        """Get an order by its guest token"""
        if not token:
            return None
        order = next((o for o in self.orders.values() if o.token == token), None)
        return order.model_copy(deep=True) if order else None

    def find_by_number(self, number: str) -> Optional[Order]:
        """Get an order by its number"""
        order = next((o for o in self.orders.values() if o.number == number), None)
        return order.model_copy(deep=True) if order else None

    def lock(self, order_id: str) -> asyncio.Lock:
        """Lock serializing payment work on one order"""
        lock = self._locks.get(order_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[order_id] = lock
        return lock


# Singleton instance
order_db = OrderDatabase()
