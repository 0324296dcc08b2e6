"""Payment status update: command and handler.

The Payment aggregate enforces the transition table. When a payment is
approved it raises PaymentApproved; invoice creation happens in
``billing.invoice.payment_events`` after this unit of work commits, so an
invoicing failure never fails the status update.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from billing.domain import billing
from billing.exceptions import InvalidPaymentRequest, InvalidStatusTransition
from billing.pagination import parse_status
from billing.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


@billing.command(part_of="Payment")
class UpdatePaymentStatus:
    """Move a payment to a new status."""

    payment_id = Identifier(required=True)
    status = String(max_length=20)


@billing.command_handler(part_of=Payment)
class UpdatePaymentStatusHandler:
    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        target = parse_status(command.status, PaymentStatus, InvalidPaymentRequest)

        repo = current_domain.repository_for(Payment)
        payment = repo.find_by_id(command.payment_id)
        previous = payment.status

        try:
            payment.transition_to(target)
        except InvalidStatusTransition as exc:
            logger.warning(
                "Rejected payment status transition",
                payment_id=str(payment.id),
                current=previous,
                target=target.value if target else None,
                reason=exc.message,
            )
            raise

        repo.add(payment)
        logger.info(
            "Payment status updated",
            payment_id=str(payment.id),
            previous=previous,
            status=payment.status,
        )
        return str(payment.id)
