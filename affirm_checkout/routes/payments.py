"""Payment action routes for Affirm checkout"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..database.orders import order_db
from ..models.payment import Payment
from ..services.payments import PaymentProcessor
from .affirm import affirm_client

router = APIRouter(prefix="/api/orders", tags=["Payments"])


class CreditRequest(BaseModel):
    """Request to credit a captured payment"""
    amount: Optional[float] = None


def get_payment_processor() -> PaymentProcessor:
    return PaymentProcessor(order_db, affirm_client)


@router.post("/{number}/payments/{payment_id}/capture", response_model=Payment)
async def capture_payment(
    number: str,
    payment_id: str,
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """Capture an authorized Affirm charge"""
    return await processor.capture(number, payment_id)


@router.post("/{number}/payments/{payment_id}/void", response_model=Payment)
async def void_payment(
    number: str,
    payment_id: str,
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """Void an uncaptured Affirm charge"""
    return await processor.void(number, payment_id)


@router.post("/{number}/payments/{payment_id}/credit", response_model=Payment)
async def credit_payment(
    number: str,
    payment_id: str,
    request: Optional[CreditRequest] = None,
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """Refund a captured Affirm charge"""
    amount = request.amount if request else None
    return await processor.credit(number, payment_id, amount)
