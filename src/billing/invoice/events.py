"""Domain events for the Invoice aggregate.

All events are versioned, immutable facts representing invoice state changes.
"""

from protean.fields import Date, Float, Identifier, String

from billing.domain import billing


@billing.event(part_of="Invoice")
class InvoiceCreated:
    """A new invoice was generated for an approved payment."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    user_id = String(required=True)
    invoice_number = String(required=True)
    amount = Float(required=True)
    currency = String(required=True)
    issue_date = Date(required=True)


@billing.event(part_of="Invoice")
class InvoiceSent:
    """An invoice was sent to the customer."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    sent_at = Date(required=True)


@billing.event(part_of="Invoice")
class InvoicePaid:
    """An invoice was marked as paid."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    paid_at = Date(required=True)


@billing.event(part_of="Invoice")
class InvoiceCancelled:
    """An invoice was cancelled."""

    __version__ = 1

    invoice_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    cancelled_at = Date(required=True)
