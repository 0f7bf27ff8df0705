"""Attaches reconciled Affirm checkouts to orders as payments"""

import logging
from typing import Optional

from ..database.orders import OrderDatabase
from ..errors import StateConflictError
from ..models.checkout import Charge, CheckoutRecord
from ..models.order import Order, OrderState
from ..models.payment import Payment, PaymentMethod, PaymentState

logger = logging.getLogger(__name__)


class PaymentRegistrar:
    """Creates the Affirm payment on an order and moves the order forward"""

    REGISTRABLE_STATES = (OrderState.PAYMENT, OrderState.CONFIRM)

    def __init__(self, orders: OrderDatabase):
        self.orders = orders

    def find_payment(self, order: Order, checkout_token: str) -> Optional[Payment]:
        """Get the payment already sourced from a checkout, if any"""
        return next(
            (p for p in order.payments if p.source.token == checkout_token),
            None,
        )

    def ensure_registrable(self, order: Order) -> None:
        if order.state not in self.REGISTRABLE_STATES:
            raise StateConflictError(
                f"Order {order.number} is in state {OrderState(order.state).value}, "
                f"payments can only be added in payment or confirm"
            )

    def register_payment(
        self,
        order: Order,
        checkout: CheckoutRecord,
        payment_method: PaymentMethod,
        charge: Optional[Charge] = None,
    ) -> Payment:
        """
        Create a payment for the checkout and advance the order.

        An order in payment moves to confirm when it requires confirmation,
        otherwise straight to complete. An order already in confirm keeps its
        state, and a repeated checkout returns the existing payment.
        """
        self.ensure_registrable(order)

        existing = self.find_payment(order, checkout.token)
        if existing and order.state == OrderState.CONFIRM:
            logger.info(f"Order {order.number} already has payment {existing.id} for this checkout")
            return existing

        payment = Payment(
            order_id=order.id,
            payment_method_id=payment_method.id,
            amount=order.total,
            source=checkout,
            state=PaymentState.PENDING if charge else PaymentState.CHECKOUT,
            response_code=charge.id if charge else None,
        )
        order.payments.append(payment)

        if order.state == OrderState.PAYMENT:
            order.advance()

        self.orders.save(order)
        logger.info(
            f"Payment {payment.id} registered on order {order.number}, "
            f"order is now {OrderState(order.state).value}"
        )
        return payment
