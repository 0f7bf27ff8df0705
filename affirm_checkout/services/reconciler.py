"""
Checkout Reconciler

Binds an Affirm checkout to the current order and corrects the order where
the customer changed their details on Affirm. A mismatching billing or
shipping block replaces the order's address with a new Address; a mismatching
billing email overwrites the order email. Anything else that disagrees
(line items, product key) cannot be corrected and fails validation.
"""

import logging
from typing import Callable, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models.address import Address, Region
from ..models.checkout import CheckoutContact, CheckoutRecord
from ..models.order import Order
from ..models.payment import PaymentMethod
from .affirm_client import AffirmClient
from .matchers import addresses_match, emails_match

logger = logging.getLogger(__name__)

RegionLookup = Callable[[str], Optional[Region]]

BILLING_ADDRESS = "billing_address"
SHIPPING_ADDRESS = "shipping_address"
BILLING_EMAIL = "billing_email"
LINE_ITEMS = "line_items"
PAYMENT_METHOD = "payment_method"


def checkout_errors(
    checkout: CheckoutRecord,
    order: Order,
    payment_method: PaymentMethod,
) -> dict[str, list[str]]:
    """Collect the ways a checkout disagrees with its order"""
    errors: dict[str, list[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if not addresses_match(order.bill_address, checkout.billing):
        add(BILLING_ADDRESS, "Billing address does not match order")
    if not addresses_match(order.ship_address, checkout.shipping):
        add(SHIPPING_ADDRESS, "Shipping address does not match order")
    if not emails_match(order.email, checkout.email):
        add(BILLING_EMAIL, "Billing email does not match order")

    for line_item in order.line_items:
        item = checkout.items.get(line_item.sku)
        if item is None:
            add(LINE_ITEMS, f"Line item {line_item.sku} is not in the checkout")
        elif item.qty != line_item.quantity:
            add(LINE_ITEMS, f"Quantity mismatch for {line_item.sku}")
    if len(order.line_items) != len(checkout.items):
        add(LINE_ITEMS, "Order size mismatch")

    if (
        payment_method.product_key
        and checkout.financial_product_key
        and checkout.financial_product_key != payment_method.product_key
    ):
        add(PAYMENT_METHOD, "Product key does not match payment method")

    return errors


def is_valid(checkout: CheckoutRecord, order: Order, payment_method: PaymentMethod) -> bool:
    return not checkout_errors(checkout, order, payment_method)


# Affirm sends ISO 3166 alpha-3 codes, addresses store alpha-2
ISO3_COUNTRY_CODES = {
    "USA": "US",
    "CAN": "CA",
    "MEX": "MX",
}


def country_code(
    affirm_country: Optional[str],
    region: Optional[Region],
    previous: Optional[Address] = None,
) -> str:
    """Alpha-2 country for a new address.

    The resolved region decides; otherwise a known alpha-3 code is converted
    and any other code is kept as Affirm sent it.
    """
    if region is not None:
        return region.country

    code = (affirm_country or "").strip().upper()
    if not code:
        return previous.country if previous else "US"
    return ISO3_COUNTRY_CODES.get(code, code)


class CheckoutReconciler:
    """Fetches Affirm checkouts and reconciles them with orders"""

    def __init__(self, gateway: AffirmClient, region_lookups: Sequence[RegionLookup]):
        """
        Args:
            gateway: Affirm API client
            region_lookups: Region lookups tried in order, first match wins
        """
        self.gateway = gateway
        self.region_lookups = list(region_lookups)

    async def fetch_checkout(
        self,
        order: Order,
        payment_method: PaymentMethod,
        checkout_token: str,
    ) -> CheckoutRecord:
        """Fetch an Affirm checkout and bind it to the order"""
        details = await self.gateway.get_checkout(checkout_token)

        try:
            return CheckoutRecord.from_details(order, payment_method.id, checkout_token, details)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid checkout details for {checkout_token}",
                errors=[error["msg"] for error in e.errors()],
            ) from e

    async def reconcile(
        self,
        order: Order,
        payment_method: PaymentMethod,
        checkout_token: str,
    ) -> CheckoutRecord:
        """
        Fetch the checkout and copy Affirm's billing, shipping and email
        details onto the order where they differ.

        The order is only changed in memory; saving it is up to the caller.

        Raises:
            ValidationError: the checkout still disagrees with the order, or
                Affirm's details do not make a valid address
        """
        checkout = await self.fetch_checkout(order, payment_method, checkout_token)
        errors = checkout_errors(checkout, order, payment_method)

        if BILLING_ADDRESS in errors:
            order.bill_address = self.build_address(checkout.billing, previous=order.bill_address)
            logger.info(f"Order {order.number}: billing address replaced from Affirm checkout")

        if SHIPPING_ADDRESS in errors:
            order.ship_address = self.build_address(checkout.shipping, previous=order.ship_address)
            logger.info(f"Order {order.number}: shipping address replaced from Affirm checkout")

        if BILLING_EMAIL in errors:
            order.email = checkout.email
            logger.info(f"Order {order.number}: email updated from Affirm checkout")

        remaining = checkout_errors(checkout, order, payment_method)
        if remaining:
            messages = [message for field in remaining.values() for message in field]
            logger.warning(f"Checkout {checkout_token} rejected for order {order.number}: {messages}")
            raise ValidationError(
                f"Checkout {checkout_token} does not match order {order.number}",
                errors=messages,
            )

        return checkout

    def resolve_region(self, code: Optional[str]) -> Optional[Region]:
        """Resolve a region code, trying each lookup in turn"""
        if not code:
            return None

        for lookup in self.region_lookups:
            region = lookup(code)
            if region:
                return region

        logger.warning(f"Could not resolve region {code!r}, address keeps the raw code")
        return None

    def build_address(
        self,
        contact: CheckoutContact,
        previous: Optional[Address] = None,
    ) -> Address:
        """Create a new Address from an Affirm billing or shipping block.

        The phone number of the address being replaced is kept when it has one.
        """
        firstname, lastname = contact.name.split()
        address = contact.address
        phone = previous.phone if previous and previous.phone else contact.phone_number
        region = self.resolve_region(address.state)

        try:
            return Address(
                firstname=firstname,
                lastname=lastname,
                address1=address.line1 or "",
                address2=address.line2 or None,
                city=address.city or "",
                zipcode=address.zipcode or "",
                phone=phone,
                country=country_code(address.country, region, previous),
                region=region,
                region_code=address.state,
            )
        except PydanticValidationError as e:
            raise ValidationError(
                "Affirm checkout contains an invalid address",
                errors=[f"{'.'.join(map(str, error['loc']))}: {error['msg']}" for error in e.errors()],
            ) from e
