"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from billing.domain import billing


@billing.event(part_of="Payment")
class PaymentCreated:
    """A new payment was recorded in PENDING state."""

    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = String(required=True)
    order_id = String()
    amount = Float(required=True)
    currency = String(required=True)
    method = String(required=True)
    created_at = DateTime(required=True)


@billing.event(part_of="Payment")
class PaymentStatusChanged:
    """A payment moved from one status to another."""

    __version__ = 1

    payment_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)


@billing.event(part_of="Payment")
class PaymentApproved:
    """A payment reached APPROVED. Consumed by invoicing."""

    __version__ = 1

    payment_id = Identifier(required=True)
    user_id = String(required=True)
    order_id = String()
    amount = Float(required=True)
    currency = String(required=True)
    approved_at = DateTime(required=True)
