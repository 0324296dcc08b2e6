"""Invoice generation.

Two entry points share the same creation logic:

- ``create_invoice_from_payment`` is called when a payment is approved. It
  tolerates repeated calls and returns the existing invoice if there is one.
- ``CreateInvoice`` is the user-facing command. It insists on an APPROVED
  payment without an invoice and treats anything else as a conflict.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from billing.domain import billing
from billing.exceptions import ErrorKind, InvalidInvoiceRequest
from billing.invoice.invoice import Invoice
from billing.invoice.numbering import get_sequence
from billing.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


def create_invoice_from_payment(payment: Payment) -> Invoice:
    """Return the payment's invoice, creating it in CREATED state if missing."""
    repo = current_domain.repository_for(Invoice)

    existing = repo.find_by_payment_id(str(payment.id))
    if existing is not None:
        logger.warning(
            "Invoice already exists for payment, skipping creation",
            payment_id=str(payment.id),
            invoice_id=str(existing.id),
        )
        return existing

    invoice = Invoice.create_for_payment(payment, invoice_number=get_sequence().next_number())
    repo.add(invoice)
    logger.info(
        "Invoice created",
        invoice_id=str(invoice.id),
        invoice_number=invoice.invoice_number,
        payment_id=str(payment.id),
    )
    return invoice


@billing.command(part_of="Invoice")
class CreateInvoice:
    """Create the invoice for an approved payment on request."""

    payment_id = Identifier(required=True)


@billing.command_handler(part_of=Invoice)
class CreateInvoiceHandler:
    @handle(CreateInvoice)
    def create_invoice(self, command):
        payment = current_domain.repository_for(Payment).find_by_id(command.payment_id)

        if payment.status != PaymentStatus.APPROVED.value:
            message = (
                f"Cannot create invoice for payment with status {payment.status}. "
                "Only APPROVED payments can have invoices."
            )
            logger.warning("Invalid invoice creation request", payment_id=str(payment.id), reason=message)
            raise InvalidInvoiceRequest(message, kind=ErrorKind.CONFLICT)

        if current_domain.repository_for(Invoice).exists_for_payment(str(payment.id)):
            logger.warning("Duplicate invoice creation attempt", payment_id=str(payment.id))
            raise InvalidInvoiceRequest(
                f"Invoice already exists for payment ID: {payment.id}",
                kind=ErrorKind.CONFLICT,
            )

        invoice = create_invoice_from_payment(payment)
        return str(invoice.id)
