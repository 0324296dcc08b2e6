"""Repository for the Invoice aggregate."""

from datetime import date

import structlog
from protean.exceptions import ObjectNotFoundError

from billing.domain import billing
from billing.exceptions import InvoiceNotFound
from billing.invoice.invoice import Invoice, InvoiceStatus
from billing.pagination import Page, PageRequest, provided

logger = structlog.get_logger(__name__)


@billing.repository(part_of=Invoice)
class InvoiceRepository:
    """Lookups by id and by payment, plus filtered listings."""

    def find_by_id(self, invoice_id: str) -> Invoice:
        """Fetch an invoice, raising InvoiceNotFound when it does not exist."""
        try:
            return self.get(invoice_id)
        except ObjectNotFoundError:
            logger.warning("Invoice not found", invoice_id=invoice_id)
            raise InvoiceNotFound.for_id(invoice_id) from None

    def find_by_payment_id(self, payment_id: str) -> Invoice | None:
        return self._dao.query.filter(payment_id=str(payment_id)).all().first

    def exists_for_payment(self, payment_id: str) -> bool:
        return self.find_by_payment_id(payment_id) is not None

    def find_page(
        self,
        page_request: PageRequest,
        status: InvoiceStatus | None = None,
        user_id: str | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> Page:
        """Page of invoices by descending issue date, ANDing every provided filter."""
        filters = {}
        if status is not None:
            filters["status"] = status.value
        if provided(user_id):
            filters["user_id"] = user_id
        # The issue date range applies only when both bounds are given
        if from_date is not None and to_date is not None:
            filters["issue_date__gte"] = from_date
            filters["issue_date__lte"] = to_date

        query = self._dao.query
        if filters:
            query = query.filter(**filters)

        results = query.order_by("-issue_date").offset(page_request.offset).limit(page_request.size).all()
        return Page(
            content=list(results.items),
            total_elements=results.total,
            page=page_request.page,
            size=page_request.size,
        )
