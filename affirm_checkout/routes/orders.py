"""Order API routes for Affirm checkout"""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException

from ..database.orders import order_db
from ..models.order import Order

router = APIRouter(tags=["Orders"])


def get_order_token(
    x_order_token: Optional[str] = Header(None),
    order_token: Optional[str] = Cookie(None),
) -> Optional[str]:
    """Extract the current order token from header or cookie"""
    return x_order_token or order_token


@router.get("/checkout/{state}", response_model=Order)
async def checkout_state(
    state: str,
    token: Optional[str] = Depends(get_order_token),
):
    """Current order at a checkout step"""
    order = order_db.find_by_token(token)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/orders/{number}", response_model=Order)
async def get_order(number: str):
    """Order summary"""
    order = order_db.find_by_number(number)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
