"""BDD tests for the payment lifecycle."""

from datetime import UTC, datetime

from billing.invoice.invoice import Invoice
from billing.pagination import PageRequest
from billing.payment.payment import Payment
from billing.payment.queries import list_payments
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/payment_lifecycle.feature")


@when(
    parsers.cfparse('user "{user_id}" pays {amount:f} {currency} by {method} for order "{order_id}"'),
    target_fixture="payment_id",
)
def pay(create_payment, user_id, amount, currency, method, order_id):
    return create_payment(user_id, order_id, amount=amount, currency=currency, method=method)


@when(
    parsers.cfparse('user "{user_id}" repeats the payment of {amount:f} {currency} by {method} for order "{order_id}"'),
    target_fixture="repeated_payment_id",
)
def repeat_payment(create_payment, user_id, amount, currency, method, order_id):
    return create_payment(user_id, order_id, amount=amount, currency=currency, method=method)


@given(parsers.cfparse('{count:d} pending payments for user "{user_id}"'))
def pending_payments(create_payment, count, user_id):
    for index in range(count):
        create_payment(user_id, f"order-{user_id}-{index}")


@when(
    parsers.cfparse("pending payments are listed with page {page:d} and size {size:d}"),
    target_fixture="listing",
)
def list_pending(page, size):
    return list_payments(status="PENDING", page=page, size=size)


@then("the same payment is returned")
def same_payment(payment_id, repeated_payment_id):
    assert repeated_payment_id == payment_id


@then(parsers.cfparse('user "{user_id}" has {count:d} payment'))
def payment_count(user_id, count):
    repo = current_domain.repository_for(Payment)
    assert repo.find_page(PageRequest(page=0, size=100), user_id=user_id).total_elements == count


@then(parsers.cfparse('an invoice exists for the payment with status "{status}"'))
def invoice_exists(payment_id, status):
    invoice = current_domain.repository_for(Invoice).find_by_payment_id(payment_id)
    assert invoice is not None
    assert invoice.status == status


@then("the invoice is issued today")
def invoice_issued_today(payment_id):
    invoice = current_domain.repository_for(Invoice).find_by_payment_id(payment_id)
    assert invoice.issue_date == datetime.now(UTC).date()


@then(parsers.cfparse("the page holds {count:d} payments"))
def page_holds(listing, count):
    assert len(listing.content) == count


@then(parsers.cfparse("the listing reports {total:d} payments over {pages:d} pages"))
def listing_totals(listing, total, pages):
    assert listing.total_elements == total
    assert listing.total_pages == pages
