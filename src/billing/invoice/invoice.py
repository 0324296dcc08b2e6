"""Invoice aggregate: the billing document for an approved payment.

An invoice is derived from exactly one APPROVED payment and copies the
payment's user, amount, currency and order at creation time; it is never
resynced afterwards.

State Machine:
    CREATED → SENT → PAID
    CREATED → PAID
    CREATED → CANCELLED
"""

from datetime import UTC, date, datetime
from enum import Enum

from protean.fields import Date, Float, Identifier, String

from billing.domain import billing
from billing.invoice.events import (
    InvoiceCancelled,
    InvoiceCreated,
    InvoicePaid,
    InvoiceSent,
)
from billing.state_machine import assert_transition, is_terminal


class InvoiceStatus(Enum):
    CREATED = "CREATED"
    SENT = "SENT"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


_VALID_TRANSITIONS = {
    InvoiceStatus.CREATED: (InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED),
    InvoiceStatus.SENT: (InvoiceStatus.PAID,),
    InvoiceStatus.PAID: (),  # Terminal
    InvoiceStatus.CANCELLED: (),  # Terminal
}


def today() -> date:
    return datetime.now(UTC).date()


@billing.aggregate
class Invoice:
    invoice_number = String(required=True, max_length=50)
    payment_id = Identifier(required=True)
    user_id = String(required=True, max_length=255)
    amount = Float(required=True)
    currency = String(required=True, max_length=3)
    status = String(
        max_length=20,
        choices=InvoiceStatus,
        default=InvoiceStatus.CREATED.value,
    )
    issue_date = Date(required=True)
    due_date = Date()
    sent_at = Date()
    paid_at = Date()
    cancelled_at = Date()
    order_id = String(max_length=255)

    @classmethod
    def create_for_payment(cls, payment, invoice_number: str):
        """Build a CREATED invoice from an approved payment."""
        issued_on = today()
        invoice = cls(
            invoice_number=invoice_number,
            payment_id=str(payment.id),
            user_id=payment.user_id,
            amount=payment.amount,
            currency=payment.currency,
            status=InvoiceStatus.CREATED.value,
            issue_date=issued_on,
            order_id=payment.order_id,
        )
        invoice.raise_(
            InvoiceCreated(
                invoice_id=str(invoice.id),
                payment_id=str(payment.id),
                user_id=payment.user_id,
                invoice_number=invoice_number,
                amount=payment.amount,
                currency=payment.currency,
                issue_date=issued_on,
            )
        )
        return invoice

    @property
    def is_terminal(self) -> bool:
        return is_terminal(InvoiceStatus(self.status), _VALID_TRANSITIONS)

    def transition_to(self, target: InvoiceStatus | None) -> None:
        """Move the invoice to ``target``.

        The matching date stamp is set only if it is still empty, so a stamp
        is never overwritten once recorded.
        """
        current = InvoiceStatus(self.status)
        assert_transition(current, target, _VALID_TRANSITIONS, "invoices")

        stamped_on = today()
        self.status = target.value

        if target == InvoiceStatus.SENT:
            if self.sent_at is None:
                self.sent_at = stamped_on
            self.raise_(InvoiceSent(invoice_id=str(self.id), payment_id=str(self.payment_id), sent_at=self.sent_at))
        elif target == InvoiceStatus.PAID:
            if self.paid_at is None:
                self.paid_at = stamped_on
            self.raise_(InvoicePaid(invoice_id=str(self.id), payment_id=str(self.payment_id), paid_at=self.paid_at))
        elif target == InvoiceStatus.CANCELLED:
            if self.cancelled_at is None:
                self.cancelled_at = stamped_on
            self.raise_(
                InvoiceCancelled(
                    invoice_id=str(self.id),
                    payment_id=str(self.payment_id),
                    cancelled_at=self.cancelled_at,
                )
            )

    def send(self) -> None:
        self.transition_to(InvoiceStatus.SENT)

    def mark_paid(self) -> None:
        self.transition_to(InvoiceStatus.PAID)

    def cancel(self) -> None:
        self.transition_to(InvoiceStatus.CANCELLED)
