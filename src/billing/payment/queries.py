"""Read-side operations for payments."""

import structlog
from protean.utils.globals import current_domain

from billing.exceptions import InvalidPaymentRequest
from billing.pagination import Page, page_request, parse_status
from billing.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


def get_payment_by_id(payment_id: str) -> Payment:
    return current_domain.repository_for(Payment).find_by_id(payment_id)


def list_payments(
    status: str | None = None,
    user_id: str | None = None,
    order_id: str | None = None,
    page: int | None = None,
    size: int | None = None,
) -> Page:
    """List payments newest first, ANDing whichever filters are provided.

    Pagination and status are validated before the repository is touched.
    """
    request = page_request(page, size, InvalidPaymentRequest)
    status_filter = parse_status(status, PaymentStatus, InvalidPaymentRequest)

    logger.info(
        "Listing payments",
        status=status_filter.value if status_filter else None,
        user_id=user_id,
        order_id=order_id,
        page=request.page,
        size=request.size,
    )
    return current_domain.repository_for(Payment).find_page(
        request,
        status=status_filter,
        user_id=user_id,
        order_id=order_id,
    )
