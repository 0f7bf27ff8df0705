"""Payment method storage for Affirm checkout"""

from typing import Optional

from ..core.config import Settings, settings
from ..models.payment import PaymentMethod


class PaymentMethodDatabase:
    """In-memory payment method storage"""

    def __init__(self):
        self.payment_methods: dict[str, PaymentMethod] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentMethodDatabase":
        """Create storage holding the configured Affirm payment method"""
        database = cls()
        database.add(PaymentMethod(
            id=settings.affirm_payment_method_id,
            product_key=settings.affirm_product_key,
            environment=settings.affirm_environment,
        ))
        return database

    def add(self, payment_method: PaymentMethod) -> PaymentMethod:
        self.payment_methods[payment_method.id] = payment_method
        return payment_method

    def get(self, payment_method_id: Optional[str]) -> Optional[PaymentMethod]:
        """Get a payment method by ID"""
        if not payment_method_id:
            return None
        return self.payment_methods.get(payment_method_id)


# Singleton instance
payment_method_db = PaymentMethodDatabase.from_settings(settings)
