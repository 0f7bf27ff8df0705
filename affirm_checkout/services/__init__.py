# Affirm checkout services

from .affirm_client import AffirmClient
from .confirm import ConfirmResult, ConfirmService
from .matchers import addresses_match, emails_match
from .payments import PaymentProcessor
from .reconciler import CheckoutReconciler, checkout_errors, is_valid
from .registrar import PaymentRegistrar

__all__ = [
    "AffirmClient",
    "ConfirmResult",
    "ConfirmService",
    "addresses_match",
    "emails_match",
    "PaymentProcessor",
    "CheckoutReconciler",
    "checkout_errors",
    "is_valid",
    "PaymentRegistrar",
]
