"""Invoicing reacts to payment approval.

PaymentApproved is raised inside the payment's unit of work and delivered
here once that unit of work has committed. Invoice creation failures are
logged and dropped: an approved payment stays approved whether or not its
invoice could be generated.
"""

import structlog
from protean import UnitOfWork
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from billing.domain import billing
from billing.invoice.generation import create_invoice_from_payment
from billing.invoice.invoice import Invoice
from billing.payment.events import PaymentApproved
from billing.payment.payment import Payment

logger = structlog.get_logger(__name__)


@billing.event_handler(part_of=Invoice, stream_category="billing::payment")
class PaymentInvoicingHandler:
    """Creates the invoice for every approved payment."""

    @handle(PaymentApproved)
    def on_payment_approved(self, event: PaymentApproved) -> None:
        payment_id = str(event.payment_id)
        try:
            # The invoice write commits here so commit failures are caught too
            with UnitOfWork():
                payment = current_domain.repository_for(Payment).find_by_id(payment_id)
                invoice = create_invoice_from_payment(payment)
        except Exception:
            logger.exception("Failed to create invoice for approved payment", payment_id=payment_id)
            return

        logger.info(
            "Invoice available for approved payment",
            payment_id=payment_id,
            invoice_id=str(invoice.id),
        )
