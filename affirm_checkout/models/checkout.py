"""
Affirm checkout models

A CheckoutRecord is the immutable snapshot of an Affirm checkout decision
for one order. Affirm has served checkout details in two dialects over the
life of the v2 API (``line1``/``state``/``zipcode`` and
``street1``/``region1_code``/``postal_code``), both are accepted here.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..errors import GatewayError

if TYPE_CHECKING:
    from .order import Order


def to_cents(amount: float) -> int:
    """Convert a dollar amount to integer cents"""
    return int(round(amount * 100))


def _block(details: dict[str, Any], key: str) -> dict[str, Any]:
    """Nested object of the checkout details, empty when absent"""
    value = details.get(key) or {}
    if not isinstance(value, dict):
        raise GatewayError(
            f"Unexpected checkout response from Affirm: {key} is {type(value).__name__}, expected object"
        )
    return value


class CheckoutName(BaseModel):
    """Name block of a billing or shipping contact"""
    full: Optional[str] = None
    first: Optional[str] = None
    last: Optional[str] = None

    def split(self) -> tuple[Optional[str], Optional[str]]:
        """Return (first, last), falling back to splitting the full name"""
        first = self.first or None
        last = self.last or None

        if first is None and last is None and self.full:
            parts = self.full.split()
            last = parts.pop() if parts else None
            first = " ".join(parts) or None

        return first, last


class CheckoutAddress(BaseModel):
    """Address block of a billing or shipping contact"""
    line1: Optional[str] = Field(default=None, validation_alias=AliasChoices("line1", "street1"))
    line2: Optional[str] = Field(default=None, validation_alias=AliasChoices("line2", "street2"))
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, validation_alias=AliasChoices("state", "region1_code"))
    zipcode: Optional[str] = Field(default=None, validation_alias=AliasChoices("zipcode", "postal_code"))
    country: Optional[str] = Field(default=None, validation_alias=AliasChoices("country", "country_code"))


class CheckoutContact(BaseModel):
    """Billing or shipping details from an Affirm checkout"""
    name: CheckoutName = Field(default_factory=CheckoutName)
    address: CheckoutAddress = Field(default_factory=CheckoutAddress)
    phone_number: Optional[str] = None
    email: Optional[str] = None


class CheckoutItem(BaseModel):
    """Line item as Affirm recorded it"""
    model_config = ConfigDict(extra="allow")

    sku: str
    display_name: Optional[str] = None
    qty: int
    unit_price: int = 0
    item_type: Optional[str] = None
    item_url: Optional[str] = None
    item_image_url: Optional[str] = None


class CheckoutDiscount(BaseModel):
    """Discount applied to an Affirm checkout"""
    discount_amount: int
    discount_display_name: Optional[str] = None


class CheckoutRecord(BaseModel):
    """Snapshot of an Affirm checkout bound to an order"""
    model_config = ConfigDict(frozen=True)

    ACTIONS: ClassVar[tuple[str, ...]] = ("capture", "void", "credit")

    token: str
    order_id: str
    payment_method_id: str
    currency: str = "USD"
    amount: int
    tax_amount: int
    billing: CheckoutContact = Field(default_factory=CheckoutContact)
    shipping: CheckoutContact = Field(default_factory=CheckoutContact)
    email: Optional[str] = None
    items: dict[str, CheckoutItem] = {}
    discounts: dict[str, CheckoutDiscount] = {}
    financial_product_key: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def actions(self) -> list[str]:
        return list(self.ACTIONS)

    @classmethod
    def from_details(
        cls,
        order: "Order",
        payment_method_id: str,
        token: str,
        details: dict[str, Any],
    ) -> "CheckoutRecord":
        """Build a record from Affirm checkout details for an order

        Raises:
            GatewayError: a block of the details is not an object
        """
        billing = _block(details, "billing")
        config = _block(details, "config")

        return cls(
            token=token,
            order_id=order.id,
            payment_method_id=payment_method_id,
            currency=details.get("currency") or order.currency,
            amount=to_cents(order.total),
            tax_amount=to_cents(order.tax_total),
            billing=billing,
            shipping=_block(details, "shipping"),
            email=billing.get("email"),
            items=_block(details, "items"),
            discounts=_block(details, "discounts"),
            financial_product_key=config.get("financial_product_key"),
        )


class ChargeEvent(BaseModel):
    """Event on an Affirm charge (auth, capture, void, refund)"""
    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    created: Optional[datetime] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    transaction_id: Optional[str] = None


class Charge(BaseModel):
    """Charge returned by Affirm when a checkout is authorized"""
    model_config = ConfigDict(extra="allow")

    id: str
    amount: int
    currency: str = "USD"
    auth_hold: int = 0
    payable: int = 0
    void: bool = False
    pending: bool = True
    created: Optional[datetime] = None
    expires: Optional[datetime] = None
    order_id: Optional[str] = None
    events: list[ChargeEvent] = []
    details: dict[str, Any] = {}
