"""
Affirm confirmation flow

Runs when Affirm sends the customer back with a checkout token: resolve the
order, reconcile the checkout with it, authorize the charge and register
the payment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..database.orders import OrderDatabase
from ..database.payment_methods import PaymentMethodDatabase
from ..errors import NotFoundError
from ..models.order import Order, OrderState
from ..models.payment import Payment
from .affirm_client import AffirmClient
from .reconciler import CheckoutReconciler
from .registrar import PaymentRegistrar

logger = logging.getLogger(__name__)

OrderResolver = Callable[[], Optional[Order]]


def checkout_state_path(order: Order) -> str:
    return f"/checkout/{OrderState(order.state).value}"


def order_path(order: Order) -> str:
    return f"/orders/{order.number}"


@dataclass
class ConfirmResult:
    """Where to send the customer after a confirm call"""
    redirect_url: str
    order: Order
    payment: Optional[Payment] = None


class ConfirmService:
    """Confirms Affirm checkouts against orders"""

    def __init__(
        self,
        orders: OrderDatabase,
        payment_methods: PaymentMethodDatabase,
        reconciler: CheckoutReconciler,
        registrar: PaymentRegistrar,
        gateway: AffirmClient,
    ):
        self.orders = orders
        self.payment_methods = payment_methods
        self.reconciler = reconciler
        self.registrar = registrar
        self.gateway = gateway

    async def confirm(
        self,
        resolve_order: OrderResolver,
        checkout_token: Optional[str],
        payment_method_id: Optional[str],
    ) -> ConfirmResult:
        """
        Confirm an Affirm checkout for the current order.

        Raises:
            NotFoundError: no current order, or unknown payment method
            ValidationError: the checkout cannot be reconciled with the order
            GatewayError: Affirm failed; no payment is created
            StateConflictError: the order is not ready for payment
        """
        order = resolve_order()
        if order is None:
            raise NotFoundError("No current order")

        if not checkout_token:
            logger.info(f"Order {order.number}: confirm without checkout token")
            return ConfirmResult(redirect_url=checkout_state_path(order), order=order)

        if order.is_complete:
            logger.info(f"Order {order.number} already completed")
            return ConfirmResult(redirect_url=order_path(order), order=order)

        async with self.orders.lock(order.id):
            # Another confirm may have finished while we waited
            order = self.orders.get_order(order.id)
            if order is None:
                raise NotFoundError("No current order")
            if order.is_complete:
                return ConfirmResult(redirect_url=order_path(order), order=order)

            payment_method = self.payment_methods.get(payment_method_id)
            if payment_method is None:
                raise NotFoundError(f"Payment method {payment_method_id!r} not found")

            existing = self.registrar.find_payment(order, checkout_token)
            if existing and order.state == OrderState.CONFIRM:
                logger.info(f"Order {order.number}: checkout {checkout_token} already confirmed")
                return ConfirmResult(
                    redirect_url=checkout_state_path(order),
                    order=order,
                    payment=existing,
                )

            self.registrar.ensure_registrable(order)

            checkout = await self.reconciler.reconcile(order, payment_method, checkout_token)
            charge = await self.gateway.authorize(checkout)
            payment = self.registrar.register_payment(order, checkout, payment_method, charge)

        if order.is_complete:
            logger.info(f"Order {order.number} processed successfully")
            return ConfirmResult(redirect_url=order_path(order), order=order, payment=payment)

        return ConfirmResult(redirect_url=checkout_state_path(order), order=order, payment=payment)
