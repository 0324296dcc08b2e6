"""Read-side operations for invoices."""

from datetime import date

import structlog
from protean.utils.globals import current_domain

from billing.exceptions import InvalidInvoiceRequest, InvoiceNotFound
from billing.invoice.invoice import Invoice, InvoiceStatus
from billing.pagination import Page, page_request, parse_status

logger = structlog.get_logger(__name__)


def get_invoice_by_id(invoice_id: str) -> Invoice:
    return current_domain.repository_for(Invoice).find_by_id(invoice_id)


def get_invoice_by_payment_id(payment_id: str) -> Invoice:
    invoice = current_domain.repository_for(Invoice).find_by_payment_id(payment_id)
    if invoice is None:
        logger.warning("Invoice not found for payment", payment_id=payment_id)
        raise InvoiceNotFound.for_payment(payment_id)
    return invoice


def list_invoices(
    status: str | None = None,
    user_id: str | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    page: int | None = None,
    size: int | None = None,
) -> Page:
    """List invoices by descending issue date.

    The issue date range filters only when both bounds are given, and then
    ``from_date`` must not be after ``to_date``. A single bound is ignored.
    """
    request = page_request(page, size, InvalidInvoiceRequest)
    if from_date is not None and to_date is not None and from_date > to_date:
        raise InvalidInvoiceRequest("fromDate must be <= toDate")
    status_filter = parse_status(status, InvoiceStatus, InvalidInvoiceRequest)

    logger.info(
        "Listing invoices",
        status=status_filter.value if status_filter else None,
        user_id=user_id,
        from_date=str(from_date) if from_date else None,
        to_date=str(to_date) if to_date else None,
        page=request.page,
        size=request.size,
    )
    return current_domain.repository_for(Invoice).find_page(
        request,
        status=status_filter,
        user_id=user_id,
        from_date=from_date,
        to_date=to_date,
    )
