"""Tests for the invoice status state machine and date stamping."""

from datetime import UTC, date, datetime

import pytest
from billing.exceptions import InvalidStatusTransition
from billing.invoice.events import InvoiceCancelled, InvoicePaid, InvoiceSent
from billing.invoice.invoice import Invoice, InvoiceStatus
from billing.payment.payment import Payment


def _make_invoice():
    payment = Payment.create(amount=40.0, currency="USD", method="CREDIT_CARD", user_id="u1")
    payment.approve()
    invoice = Invoice.create_for_payment(payment, invoice_number="INV-20260101-000000-0001")
    invoice._events.clear()
    return invoice


def _today():
    return datetime.now(UTC).date()


class TestAllowedTransitions:
    @pytest.mark.parametrize(
        "target", [InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED]
    )
    def test_created_can_move_to(self, target):
        invoice = _make_invoice()
        invoice.transition_to(target)
        assert invoice.status == target.value

    def test_sent_then_paid(self):
        invoice = _make_invoice()
        invoice.send()
        invoice.mark_paid()
        assert invoice.status == InvoiceStatus.PAID.value
        assert invoice.sent_at == _today()
        assert invoice.paid_at == _today()

    def test_send_stamps_sent_at(self):
        invoice = _make_invoice()
        invoice.send()
        assert invoice.sent_at == _today()
        assert invoice.paid_at is None

    def test_cancel_stamps_cancelled_at(self):
        invoice = _make_invoice()
        invoice.cancel()
        assert invoice.cancelled_at == _today()

    def test_existing_stamp_is_not_overwritten(self):
        invoice = _make_invoice()
        invoice.sent_at = date(2020, 1, 1)
        invoice.send()
        assert invoice.sent_at == date(2020, 1, 1)

    @pytest.mark.parametrize(
        "action, event_cls",
        [("send", InvoiceSent), ("mark_paid", InvoicePaid), ("cancel", InvoiceCancelled)],
    )
    def test_each_transition_raises_its_event(self, action, event_cls):
        invoice = _make_invoice()
        getattr(invoice, action)()
        assert len(invoice._events) == 1
        assert isinstance(invoice._events[0], event_cls)


class TestRejectedTransitions:
    def test_null_target(self):
        with pytest.raises(InvalidStatusTransition, match="Target status cannot be null"):
            _make_invoice().transition_to(None)

    def test_same_status(self):
        with pytest.raises(InvalidStatusTransition, match="same status"):
            _make_invoice().transition_to(InvoiceStatus.CREATED)

    def test_sent_cannot_go_back_to_created(self):
        invoice = _make_invoice()
        invoice.send()
        with pytest.raises(InvalidStatusTransition) as exc_info:
            invoice.transition_to(InvoiceStatus.CREATED)
        assert exc_info.value.message == (
            "Invalid transition from SENT to CREATED. SENT invoices can only transition to PAID."
        )
        assert invoice.status == InvoiceStatus.SENT.value

    def test_sent_cannot_be_cancelled(self):
        invoice = _make_invoice()
        invoice.send()
        with pytest.raises(InvalidStatusTransition):
            invoice.cancel()
        assert invoice.cancelled_at is None

    @pytest.mark.parametrize("terminal", [InvoiceStatus.PAID, InvoiceStatus.CANCELLED])
    @pytest.mark.parametrize("target", [InvoiceStatus.CREATED, InvoiceStatus.SENT])
    def test_terminal_states_cannot_change(self, terminal, target):
        invoice = _make_invoice()
        invoice.transition_to(terminal)
        invoice._events.clear()

        with pytest.raises(InvalidStatusTransition, match="terminal state"):
            invoice.transition_to(target)

        assert invoice.status == terminal.value
        assert invoice._events == []

    def test_terminal_message(self):
        invoice = _make_invoice()
        invoice.mark_paid()
        with pytest.raises(InvalidStatusTransition) as exc_info:
            invoice.send()
        assert exc_info.value.message == (
            "Cannot transition from terminal state PAID to SENT. Invoices in PAID status cannot be modified."
        )

    def test_is_terminal(self):
        invoice = _make_invoice()
        invoice.send()
        assert not invoice.is_terminal
        invoice.mark_paid()
        assert invoice.is_terminal
