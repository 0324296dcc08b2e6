"""Billing error taxonomy.

Every error carries an explicit ``kind`` so the HTTP boundary can pick a
status code without inspecting message text.
"""

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"


class BillingError(Exception):
    """Base class for failures raised by the billing domain."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotFoundError(BillingError):
    kind = ErrorKind.NOT_FOUND


class PaymentNotFound(NotFoundError):
    @classmethod
    def for_id(cls, payment_id) -> "PaymentNotFound":
        return cls(f"Payment not found with ID: {payment_id}")


class InvoiceNotFound(NotFoundError):
    @classmethod
    def for_id(cls, invoice_id) -> "InvoiceNotFound":
        return cls(f"Invoice not found with ID: {invoice_id}")

    @classmethod
    def for_payment(cls, payment_id) -> "InvoiceNotFound":
        return cls(f"Invoice not found for payment ID: {payment_id}")


class InvalidPaymentRequest(BillingError):
    """Malformed payment input or listing parameters."""

    kind = ErrorKind.VALIDATION


class InvalidInvoiceRequest(BillingError):
    """Malformed invoice listing input, or a business conflict.

    Raise sites pass ``kind=ErrorKind.CONFLICT`` for conflicts such as a
    duplicate invoice or a payment that is not approved.
    """

    kind = ErrorKind.VALIDATION


class InvalidStatusTransition(BillingError):
    kind = ErrorKind.CONFLICT
