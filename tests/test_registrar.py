"""Tests for payment registration."""

import pytest

from affirm_checkout.errors import StateConflictError
from affirm_checkout.models import Charge, CheckoutRecord, OrderState, PaymentState

from conftest import CHECKOUT_TOKEN, checkout_details


@pytest.fixture
def checkout(order, payment_method):
    return CheckoutRecord.from_details(order, payment_method.id, CHECKOUT_TOKEN, checkout_details(order))


@pytest.fixture
def charge(checkout):
    return Charge(id="ALO4-UVGR", amount=checkout.amount)


def test_registers_one_payment_and_completes(registrar, orders, order, checkout, payment_method, charge):
    payment = registrar.register_payment(order, checkout, payment_method, charge)

    stored = orders.get_order(order.id)
    assert [p.id for p in stored.payments] == [payment.id]
    assert payment.source == checkout
    assert payment.amount == order.total
    assert payment.response_code == "ALO4-UVGR"
    assert payment.state == PaymentState.PENDING
    assert stored.state == OrderState.COMPLETE


def test_without_charge_payment_stays_in_checkout(registrar, order, checkout, payment_method):
    payment = registrar.register_payment(order, checkout, payment_method)

    assert payment.state == PaymentState.CHECKOUT
    assert payment.response_code is None


def test_confirmation_required_moves_to_confirm(registrar, orders, order, checkout, payment_method):
    order.confirmation_required = True

    registrar.register_payment(order, checkout, payment_method)

    assert orders.get_order(order.id).state == OrderState.CONFIRM


def test_confirm_state_is_not_advanced_again(registrar, orders, order, checkout, payment_method):
    order.confirmation_required = True
    first = registrar.register_payment(order, checkout, payment_method)
    second = registrar.register_payment(order, checkout, payment_method)

    stored = orders.get_order(order.id)
    assert second.id == first.id
    assert len(stored.payments) == 1
    assert stored.state == OrderState.CONFIRM


@pytest.mark.parametrize("state", [OrderState.CART, OrderState.ADDRESS, OrderState.COMPLETE])
def test_other_states_conflict(registrar, orders, order, checkout, payment_method, state):
    order.state = state

    with pytest.raises(StateConflictError):
        registrar.register_payment(order, checkout, payment_method)

    assert orders.get_order(order.id).payments == []
