"""Invoice status update: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from billing.domain import billing
from billing.exceptions import InvalidInvoiceRequest, InvalidStatusTransition
from billing.invoice.invoice import Invoice, InvoiceStatus
from billing.pagination import parse_status

logger = structlog.get_logger(__name__)


@billing.command(part_of="Invoice")
class UpdateInvoiceStatus:
    """Move an invoice to a new status."""

    invoice_id = Identifier(required=True)
    status = String(max_length=20)


@billing.command_handler(part_of=Invoice)
class UpdateInvoiceStatusHandler:
    @handle(UpdateInvoiceStatus)
    def update_invoice_status(self, command):
        target = parse_status(command.status, InvoiceStatus, InvalidInvoiceRequest)

        repo = current_domain.repository_for(Invoice)
        invoice = repo.find_by_id(command.invoice_id)
        previous = invoice.status

        try:
            invoice.transition_to(target)
        except InvalidStatusTransition as exc:
            logger.warning(
                "Rejected invoice status transition",
                invoice_id=str(invoice.id),
                current=previous,
                target=target.value if target else None,
                reason=exc.message,
            )
            raise

        repo.add(invoice)
        logger.info(
            "Invoice status updated",
            invoice_id=str(invoice.id),
            previous=previous,
            status=invoice.status,
        )
        return str(invoice.id)
