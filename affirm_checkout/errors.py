"""Errors raised by the Affirm checkout flow"""

from typing import Optional


class CheckoutError(Exception):
    """Base exception for checkout errors"""
    pass


class NotFoundError(CheckoutError):
    """No current order, payment method or payment could be resolved"""
    pass


class ValidationError(CheckoutError):
    """An address or checkout record failed validation"""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class GatewayError(CheckoutError):
    """The Affirm API call failed or returned an unexpected response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StateConflictError(CheckoutError):
    """The order or payment is not in a state that allows the operation"""
    pass
