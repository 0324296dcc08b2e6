"""Payment aggregate.

A payment is created in PENDING and moves exactly once to one of the
terminal states.

State Machine:
    PENDING → APPROVED
    PENDING → FAILED
    PENDING → CANCELED

Approval raises PaymentApproved, which the invoice side consumes to create
the payment's invoice.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, String

from billing.domain import billing
from billing.exceptions import InvalidPaymentRequest
from billing.payment.events import PaymentApproved, PaymentCreated, PaymentStatusChanged
from billing.state_machine import assert_transition, is_terminal


class PaymentStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    FAILED = "FAILED"
    CANCELED = "CANCELED"


class PaymentMethod(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"


_VALID_TRANSITIONS = {
    PaymentStatus.PENDING: (PaymentStatus.APPROVED, PaymentStatus.FAILED, PaymentStatus.CANCELED),
    PaymentStatus.APPROVED: (),  # Terminal
    PaymentStatus.FAILED: (),  # Terminal
    PaymentStatus.CANCELED: (),  # Terminal
}


def _parse_method(method) -> PaymentMethod:
    if method is None or (isinstance(method, str) and not method.strip()):
        raise InvalidPaymentRequest("Payment method is required")
    if isinstance(method, PaymentMethod):
        return method
    try:
        return PaymentMethod[str(method).strip().upper()]
    except KeyError:
        raise InvalidPaymentRequest(f"Invalid payment method: {method}") from None


@billing.aggregate
class Payment:
    amount = Float(required=True)
    currency = String(required=True, max_length=3)
    method = String(required=True, max_length=20, choices=PaymentMethod)
    status = String(
        max_length=20,
        choices=PaymentStatus,
        default=PaymentStatus.PENDING.value,
    )
    user_id = String(required=True, max_length=255)
    order_id = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        amount: float | None,
        currency: str | None,
        method: str | PaymentMethod | None,
        user_id: str | None,
        order_id: str | None = None,
    ):
        """Create a new PENDING payment, validating the business inputs."""
        if amount is None or round(float(amount), 2) <= 0:
            raise InvalidPaymentRequest("Amount must be greater than 0")
        if currency is None or not currency.strip():
            raise InvalidPaymentRequest("Currency must not be empty")
        if len(currency.strip()) != 3:
            raise InvalidPaymentRequest("Currency must be a 3-letter code")
        payment_method = _parse_method(method)
        if user_id is None or not user_id.strip():
            raise InvalidPaymentRequest("UserId must not be empty")

        now = datetime.now(UTC)
        payment = cls(
            amount=round(float(amount), 2),
            currency=currency.strip().upper(),
            method=payment_method.value,
            status=PaymentStatus.PENDING.value,
            user_id=user_id,
            order_id=order_id or None,
            created_at=now,
            updated_at=now,
        )
        payment.raise_(
            PaymentCreated(
                payment_id=str(payment.id),
                user_id=user_id,
                order_id=payment.order_id,
                amount=payment.amount,
                currency=payment.currency,
                method=payment.method,
                created_at=now,
            )
        )
        return payment

    @property
    def is_terminal(self) -> bool:
        return is_terminal(PaymentStatus(self.status), _VALID_TRANSITIONS)

    def transition_to(self, target: PaymentStatus | None) -> None:
        """Move the payment to ``target``, refreshing ``updated_at``."""
        current = PaymentStatus(self.status)
        assert_transition(current, target, _VALID_TRANSITIONS, "payments")

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            PaymentStatusChanged(
                payment_id=str(self.id),
                previous_status=current.value,
                status=target.value,
                changed_at=now,
            )
        )

        if target == PaymentStatus.APPROVED:
            self.raise_(
                PaymentApproved(
                    payment_id=str(self.id),
                    user_id=self.user_id,
                    order_id=self.order_id,
                    amount=self.amount,
                    currency=self.currency,
                    approved_at=now,
                )
            )

    def approve(self) -> None:
        self.transition_to(PaymentStatus.APPROVED)

    def fail(self) -> None:
        self.transition_to(PaymentStatus.FAILED)

    def cancel(self) -> None:
        self.transition_to(PaymentStatus.CANCELED)
