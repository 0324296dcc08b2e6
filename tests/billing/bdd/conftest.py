"""Shared BDD fixtures and step definitions for the Billing domain."""

from datetime import UTC, datetime, timedelta

import pytest
from billing.exceptions import BillingError, InvalidStatusTransition
from billing.invoice.invoice import Invoice
from billing.payment.creation import CreatePayment
from billing.payment.payment import Payment
from billing.payment.status import UpdatePaymentStatus
from protean import current_domain
from pytest_bdd import given, parsers, then, when

_STALE_UPDATE = datetime(2020, 1, 1, tzinfo=UTC)


@pytest.fixture()
def error():
    """Container for captured billing errors."""
    return {"exc": None}


@pytest.fixture()
def create_payment():
    def _create(user_id, order_id, amount=99.99, currency="USD", method="CREDIT_CARD"):
        return current_domain.process(
            CreatePayment(amount=amount, currency=currency, method=method, user_id=user_id, order_id=order_id),
            asynchronous=False,
        )

    return _create


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a pending payment for user "{user_id}" and order "{order_id}"'),
    target_fixture="payment_id",
)
def pending_payment(create_payment, user_id, order_id):
    payment_id = create_payment(user_id, order_id)

    # Backdate the last update so a later refresh is observable
    repo = current_domain.repository_for(Payment)
    payment = repo.get(payment_id)
    payment.updated_at = _STALE_UPDATE
    repo.add(payment)
    return payment_id


@given(
    parsers.cfparse('an approved payment for user "{user_id}" and order "{order_id}"'),
    target_fixture="payment_id",
)
def approved_payment(create_payment, user_id, order_id):
    payment_id = create_payment(user_id, order_id)
    current_domain.process(UpdatePaymentStatus(payment_id=payment_id, status="APPROVED"), asynchronous=False)
    return payment_id


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the payment status is updated to "{status}"'))
def update_payment_status(payment_id, status, error):
    try:
        current_domain.process(UpdatePaymentStatus(payment_id=payment_id, status=status), asynchronous=False)
    except BillingError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(payment_id, status):
    assert current_domain.repository_for(Payment).get(payment_id).status == status


@then("the payment's update time is refreshed")
def payment_update_time_refreshed(payment_id):
    updated_at = current_domain.repository_for(Payment).get(payment_id).updated_at
    assert updated_at > _STALE_UPDATE + timedelta(days=1)


@then("the status update is rejected")
def status_update_rejected(error):
    assert isinstance(error["exc"], InvalidStatusTransition)


@then("no invoice exists for the payment")
def no_invoice_exists(payment_id):
    assert current_domain.repository_for(Invoice).find_by_payment_id(payment_id) is None
