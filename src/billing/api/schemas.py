"""Pydantic request/response schemas for the Billing API.

Request and response bodies are kept apart from the Protean commands and
aggregates. JSON keys are camelCase.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Payment Schemas
# ---------------------------------------------------------------------------
class CreatePaymentRequest(_CamelModel):
    # amount > 0, non-blank currency/userId and the method are checked by Payment.create
    amount: float | None = None
    currency: str | None = None
    method: str | None = None
    user_id: str | None = None
    order_id: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "amount": 99.99,
                    "currency": "USD",
                    "method": "CREDIT_CARD",
                    "userId": "user-001",
                    "orderId": "order-001",
                }
            ]
        },
    )


class UpdateStatusRequest(_CamelModel):
    status: str | None = None


class PaymentResponse(_CamelModel):
    id: str
    amount: float
    currency: str
    method: str
    status: str
    user_id: str
    order_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_payment(cls, payment) -> "PaymentResponse":
        return cls(
            id=str(payment.id),
            amount=payment.amount,
            currency=payment.currency,
            method=payment.method,
            status=payment.status,
            user_id=payment.user_id,
            order_id=payment.order_id,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class PaymentListResponse(_CamelModel):
    content: list[PaymentResponse]
    total_elements: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def from_page(cls, page) -> "PaymentListResponse":
        return cls(
            content=[PaymentResponse.from_payment(payment) for payment in page.content],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            page=page.page,
            size=page.size,
        )


# ---------------------------------------------------------------------------
# Invoice Schemas
# ---------------------------------------------------------------------------
class CreateInvoiceRequest(_CamelModel):
    payment_id: str


class InvoiceResponse(_CamelModel):
    id: str
    invoice_number: str
    payment_id: str
    user_id: str
    amount: float
    currency: str
    status: str
    issue_date: date
    due_date: date | None = None
    sent_at: date | None = None
    paid_at: date | None = None
    cancelled_at: date | None = None
    order_id: str | None = None

    @classmethod
    def from_invoice(cls, invoice) -> "InvoiceResponse":
        return cls(
            id=str(invoice.id),
            invoice_number=invoice.invoice_number,
            payment_id=str(invoice.payment_id),
            user_id=invoice.user_id,
            amount=invoice.amount,
            currency=invoice.currency,
            status=invoice.status,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            sent_at=invoice.sent_at,
            paid_at=invoice.paid_at,
            cancelled_at=invoice.cancelled_at,
            order_id=invoice.order_id,
        )


class InvoiceListResponse(_CamelModel):
    content: list[InvoiceResponse]
    total_elements: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def from_page(cls, page) -> "InvoiceListResponse":
        return cls(
            content=[InvoiceResponse.from_invoice(invoice) for invoice in page.content],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            page=page.page,
            size=page.size,
        )


# ---------------------------------------------------------------------------
# Error Schema
# ---------------------------------------------------------------------------
class ErrorResponse(BaseModel):
    code: int
    message: str
    details: str
