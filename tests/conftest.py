"""Shared pytest fixtures for Affirm checkout tests."""

import asyncio
from typing import Any, Optional

import pytest

from affirm_checkout.database.orders import OrderDatabase
from affirm_checkout.database.payment_methods import PaymentMethodDatabase
from affirm_checkout.database.regions import RegionDatabase
from affirm_checkout.errors import GatewayError
from affirm_checkout.models import (
    Address,
    Charge,
    ChargeEvent,
    CheckoutRecord,
    LineItem,
    Order,
    OrderState,
    PaymentMethod,
    Region,
    to_cents,
)
from affirm_checkout.services.confirm import ConfirmService
from affirm_checkout.services.reconciler import CheckoutReconciler
from affirm_checkout.services.registrar import PaymentRegistrar

PRODUCT_KEY = "PRODUCT-KEY-123"
CHECKOUT_TOKEN = "TKLKJ71GOP9YSASU"


def make_address(region: Optional[Region] = None, **overrides) -> Address:
    """Create an address for John Doe in San Francisco."""
    fields = {
        "firstname": "John",
        "lastname": "Doe",
        "address1": "325 Pacific Ave",
        "city": "San Francisco",
        "zipcode": "94112",
        "phone": "415-555-0100",
        "country": "US",
        "region": region,
        "region_code": region.abbr if region else "CA",
    }
    fields.update(overrides)
    return Address(**fields)


def _contact(address: Address) -> dict[str, Any]:
    return {
        "name": {"first": address.firstname, "last": address.lastname},
        "address": {
            "line1": address.address1,
            "line2": address.address2,
            "city": address.city,
            "state": address.region.abbr if address.region else address.region_code,
            "zipcode": address.zipcode,
            "country": "USA",
        },
    }


def checkout_details(
    order: Order,
    billing_address_mismatch: bool = False,
    shipping_address_mismatch: bool = False,
    billing_email_mismatch: bool = False,
) -> dict[str, Any]:
    """Affirm checkout details for an order, optionally disagreeing with it."""
    billing = _contact(order.bill_address)
    if billing_address_mismatch:
        # Older checkouts use the street1/region1_code spelling
        billing = {
            "name": {"full": "Jane Q Roe"},
            "address": {
                "street1": "12 Congress Ave",
                "city": "Austin",
                "region1_code": "TX",
                "postal_code": "78701",
                "country_code": "USA",
            },
            "phone_number": "512-555-0199",
        }
    billing["email"] = "jane.roe@example.com" if billing_email_mismatch else order.email

    shipping = _contact(order.ship_address)
    if shipping_address_mismatch:
        shipping = {
            "name": {"first": "Jane", "last": "Roe"},
            "address": {
                "line1": "500 Pike St",
                "line2": "Apt 4",
                "city": "Seattle",
                "state": "Washington",
                "zipcode": "98101",
                "country": "USA",
            },
        }

    return {
        "currency": "USD",
        "billing": billing,
        "shipping": shipping,
        "items": {
            item.sku: {
                "sku": item.sku,
                "display_name": item.name,
                "qty": item.quantity,
                "unit_price": to_cents(item.price),
                "item_type": "physical",
            }
            for item in order.line_items
        },
        "discounts": {
            "RETURN5": {
                "discount_amount": 500,
                "discount_display_name": "Returning customer 5% discount",
            },
        },
        "config": {"financial_product_key": PRODUCT_KEY},
        "tax_amount": to_cents(order.tax_total),
        "total": to_cents(order.total),
    }


class FakeAffirmGateway:
    """Stands in for AffirmClient, recording the calls made to it."""

    def __init__(self, details: dict[str, Any]):
        self.details = details
        self.charge_amount: Optional[int] = None
        self.error: Optional[GatewayError] = None
        # Seconds each capture, void and refund call waits before answering
        self.delay = 0.0
        self.checkouts_fetched: list[str] = []
        self.authorized: list[str] = []
        self.captured: list[str] = []
        self.voided: list[str] = []
        self.refunded: list[tuple[str, int]] = []

    async def get_checkout(self, checkout_token: str) -> dict[str, Any]:
        self.checkouts_fetched.append(checkout_token)
        return self.details

    async def authorize(self, checkout: CheckoutRecord) -> Charge:
        if self.error:
            raise self.error
        self.authorized.append(checkout.token)
        amount = checkout.amount if self.charge_amount is None else self.charge_amount
        if amount != checkout.amount:
            raise GatewayError(f"Auth amount {amount} does not match checkout amount {checkout.amount}")
        return Charge(id="ALO4-UVGR", amount=amount, auth_hold=amount, order_id="JKLM4321")

    async def capture(self, charge_id: str) -> ChargeEvent:
        await asyncio.sleep(self.delay)
        self.captured.append(charge_id)
        return ChargeEvent(id="CAP-1", type="capture")

    async def void(self, charge_id: str) -> ChargeEvent:
        await asyncio.sleep(self.delay)
        self.voided.append(charge_id)
        return ChargeEvent(id="VOID-1", type="void")

    async def refund(self, charge_id: str, amount_cents: int) -> ChargeEvent:
        await asyncio.sleep(self.delay)
        self.refunded.append((charge_id, amount_cents))
        return ChargeEvent(id="REF-1", type="refund", amount=amount_cents)


@pytest.fixture
def orders() -> OrderDatabase:
    return OrderDatabase()


@pytest.fixture
def regions() -> RegionDatabase:
    return RegionDatabase.with_us_states()


@pytest.fixture
def payment_methods() -> PaymentMethodDatabase:
    database = PaymentMethodDatabase()
    database.add(PaymentMethod(id="affirm", product_key=PRODUCT_KEY))
    return database


@pytest.fixture
def payment_method(payment_methods) -> PaymentMethod:
    return payment_methods.get("affirm")


@pytest.fixture
def order(orders, regions) -> Order:
    """Order in the payment step with matching billing and shipping addresses."""
    california = regions.find_by_abbr("CA")
    return orders.create_order(
        line_items=[LineItem(sku="sweater-a92123", name="Sweater", quantity=1, price=50.0)],
        email="john.doe@example.com",
        bill_address=make_address(california),
        ship_address=make_address(california),
        state=OrderState.PAYMENT,
    )


@pytest.fixture
def gateway(order) -> FakeAffirmGateway:
    return FakeAffirmGateway(checkout_details(order))


@pytest.fixture
def reconciler(gateway, regions) -> CheckoutReconciler:
    return CheckoutReconciler(gateway, [regions.find_by_abbr, regions.find_by_name])


@pytest.fixture
def registrar(orders) -> PaymentRegistrar:
    return PaymentRegistrar(orders)


@pytest.fixture
def confirm_service(orders, payment_methods, reconciler, registrar, gateway) -> ConfirmService:
    return ConfirmService(
        orders=orders,
        payment_methods=payment_methods,
        reconciler=reconciler,
        registrar=registrar,
        gateway=gateway,
    )
