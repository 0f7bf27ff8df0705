"""Affirm API routes"""

from typing import NamedTuple, Optional

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import RedirectResponse

from ..core.config import settings
from ..database.orders import order_db
from ..database.payment_methods import payment_method_db
from ..database.regions import region_db
from ..services.affirm_client import AffirmClient
from ..services.confirm import ConfirmService, checkout_state_path
from ..services.reconciler import CheckoutReconciler
from ..services.registrar import PaymentRegistrar
from .orders import get_order_token

router = APIRouter(prefix="/affirm", tags=["Affirm"])

affirm_client = AffirmClient.from_settings(settings)


def get_confirm_service() -> ConfirmService:
    return ConfirmService(
        orders=order_db,
        payment_methods=payment_method_db,
        reconciler=CheckoutReconciler(
            affirm_client,
            region_lookups=[region_db.find_by_abbr, region_db.find_by_name],
        ),
        registrar=PaymentRegistrar(order_db),
        gateway=affirm_client,
    )


class ConfirmParams(NamedTuple):
    checkout_token: Optional[str]
    payment_method_id: Optional[str]


def get_confirm_params(
    form_checkout_token: Optional[str] = Form(None, alias="checkout_token"),
    form_payment_method_id: Optional[str] = Form(None, alias="payment_method_id"),
    query_checkout_token: Optional[str] = Query(None, alias="checkout_token"),
    query_payment_method_id: Optional[str] = Query(None, alias="payment_method_id"),
) -> ConfirmParams:
    """Read confirm fields from the form body, falling back to the query string"""
    return ConfirmParams(
        checkout_token=form_checkout_token or query_checkout_token,
        payment_method_id=form_payment_method_id or query_payment_method_id,
    )


@router.post("/confirm")
async def confirm(
    params: ConfirmParams = Depends(get_confirm_params),
    token: Optional[str] = Depends(get_order_token),
    service: ConfirmService = Depends(get_confirm_service),
):
    """
    Affirm confirmation callback.

    Affirm posts the checkout token here once the customer accepts the loan.
    Redirects to the order page when the order completes, otherwise to the
    current checkout step.
    """
    result = await service.confirm(
        lambda: service.orders.find_by_token(token),
        params.checkout_token,
        params.payment_method_id,
    )
    return RedirectResponse(result.redirect_url, status_code=302)


@router.get("/cancel")
async def cancel(
    service: ConfirmService = Depends(get_confirm_service),
    token: Optional[str] = Depends(get_order_token),
):
    """Customer left Affirm without confirming"""
    order = service.orders.find_by_token(token)
    if order is None:
        return RedirectResponse("/", status_code=302)
    return RedirectResponse(checkout_state_path(order), status_code=302)
