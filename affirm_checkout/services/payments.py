"""Capture, void and credit of Affirm payments"""

import logging
from typing import Optional

from ..database.orders import OrderDatabase
from ..errors import NotFoundError, StateConflictError, ValidationError
from ..models.checkout import to_cents
from ..models.order import Order
from ..models.payment import Payment, PaymentState
from .affirm_client import AffirmClient

logger = logging.getLogger(__name__)


class PaymentProcessor:
    """Runs Affirm charge actions for payments on an order.

    Each action takes the order lock before loading the payment, so the
    state check and the Affirm call see the latest saved payment.
    """

    def __init__(self, orders: OrderDatabase, gateway: AffirmClient):
        self.orders = orders
        self.gateway = gateway

    def _find_order(self, order_number: str) -> Order:
        order = self.orders.find_by_number(order_number)
        if order is None:
            raise NotFoundError(f"Order {order_number} not found")
        return order

    def _find(self, order_number: str, payment_id: str) -> tuple[Order, Payment]:
        order = self._find_order(order_number)

        payment = next((p for p in order.payments if p.id == payment_id), None)
        if payment is None:
            raise NotFoundError(f"Payment {payment_id} not found on order {order_number}")
        if not payment.response_code:
            raise StateConflictError(f"Payment {payment_id} has no authorized charge")

        return order, payment

    async def capture(self, order_number: str, payment_id: str) -> Payment:
        """Capture the authorized charge of a payment"""
        async with self.orders.lock(self._find_order(order_number).id):
            order, payment = self._find(order_number, payment_id)
            if not payment.can_capture():
                raise StateConflictError(f"Payment {payment_id} cannot be captured in state {payment.state.value}")

            await self.gateway.capture(payment.response_code)
            payment.update_state(PaymentState.COMPLETED)
            self.orders.save(order)

        logger.info(f"Captured payment {payment.id} on order {order.number}")
        return payment

    async def void(self, order_number: str, payment_id: str) -> Payment:
        """Void the uncaptured charge of a payment"""
        async with self.orders.lock(self._find_order(order_number).id):
            order, payment = self._find(order_number, payment_id)
            if not payment.can_void():
                raise StateConflictError(f"Payment {payment_id} cannot be voided in state {payment.state.value}")

            await self.gateway.void(payment.response_code)
            payment.update_state(PaymentState.VOID)
            self.orders.save(order)

        logger.info(f"Voided payment {payment.id} on order {order.number}")
        return payment

    async def credit(
        self,
        order_number: str,
        payment_id: str,
        amount: Optional[float] = None,
    ) -> Payment:
        """Refund a captured payment, in full unless an amount is given"""
        async with self.orders.lock(self._find_order(order_number).id):
            order, payment = self._find(order_number, payment_id)
            if not payment.can_credit():
                raise StateConflictError(f"Payment {payment_id} cannot be credited in state {payment.state.value}")

            amount = payment.amount if amount is None else amount
            if amount <= 0 or amount > payment.amount:
                raise ValidationError(f"Credit amount {amount} is outside 0 - {payment.amount}")

            await self.gateway.refund(payment.response_code, to_cents(amount))
            payment.update_state(PaymentState.CREDITED)
            self.orders.save(order)

        logger.info(f"Credited {amount} on payment {payment.id} of order {order.number}")
        return payment
