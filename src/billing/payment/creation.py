"""Payment creation: command and handler.

Creation is idempotent on (order_id, user_id) while the earlier payment is
still PENDING: the existing payment is returned untouched and nothing is
written. Without an order_id every request creates a new payment.
"""

import structlog
from protean import handle
from protean.fields import Float, String
from protean.utils.globals import current_domain

from billing.domain import billing
from billing.pagination import provided
from billing.payment.payment import Payment

logger = structlog.get_logger(__name__)


@billing.command(part_of="Payment")
class CreatePayment:
    """Record a new payment for a user, optionally tied to an order."""

    amount = Float()
    currency = String(max_length=10)
    method = String(max_length=50)
    user_id = String(max_length=255)
    order_id = String(max_length=255)


@billing.command_handler(part_of=Payment)
class CreatePaymentHandler:
    @handle(CreatePayment)
    def create_payment(self, command):
        repo = current_domain.repository_for(Payment)

        if provided(command.order_id) and command.user_id:
            existing = repo.find_pending_for_order(command.order_id, command.user_id)
            if existing is not None:
                logger.info(
                    "Returning existing pending payment for order",
                    payment_id=str(existing.id),
                    order_id=command.order_id,
                    user_id=command.user_id,
                )
                return str(existing.id)

        payment = Payment.create(
            amount=command.amount,
            currency=command.currency,
            method=command.method,
            user_id=command.user_id,
            order_id=command.order_id if provided(command.order_id) else None,
        )
        repo.add(payment)
        logger.info("Payment created", payment_id=str(payment.id), user_id=payment.user_id)
        return str(payment.id)
