"""Repository for the Payment aggregate."""

import structlog
from protean.exceptions import ObjectNotFoundError

from billing.domain import billing
from billing.exceptions import PaymentNotFound
from billing.pagination import Page, PageRequest, provided
from billing.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


@billing.repository(part_of=Payment)
class PaymentRepository:
    """Lookups and filtered listings over stored payments."""

    def find_by_id(self, payment_id: str) -> Payment:
        """Fetch a payment, raising PaymentNotFound when it does not exist."""
        try:
            return self.get(payment_id)
        except ObjectNotFoundError:
            logger.warning("Payment not found", payment_id=payment_id)
            raise PaymentNotFound.for_id(payment_id) from None

    def find_pending_for_order(self, order_id: str, user_id: str) -> Payment | None:
        """The PENDING payment for an (order_id, user_id) idempotency key, if any."""
        return (
            self._dao.query.filter(
                order_id=order_id,
                user_id=user_id,
                status=PaymentStatus.PENDING.value,
            )
            .all()
            .first
        )

    def find_page(
        self,
        page_request: PageRequest,
        status: PaymentStatus | None = None,
        user_id: str | None = None,
        order_id: str | None = None,
    ) -> Page:
        """Newest-first page of payments matching every provided filter."""
        filters = {}
        if status is not None:
            filters["status"] = status.value
        if provided(user_id):
            filters["user_id"] = user_id
        if provided(order_id):
            filters["order_id"] = order_id

        query = self._dao.query
        if filters:
            query = query.filter(**filters)

        results = query.order_by("-created_at").offset(page_request.offset).limit(page_request.size).all()
        return Page(
            content=list(results.items),
            total_elements=results.total,
            page=page_request.page,
            size=page_request.size,
        )
