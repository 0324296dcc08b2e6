"""FastAPI routes for the Billing domain: payments and invoices."""

from datetime import date

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from billing.api.schemas import (
    CreateInvoiceRequest,
    CreatePaymentRequest,
    InvoiceListResponse,
    InvoiceResponse,
    PaymentListResponse,
    PaymentResponse,
    UpdateStatusRequest,
)
from billing.invoice.generation import CreateInvoice
from billing.invoice.queries import get_invoice_by_id, get_invoice_by_payment_id, list_invoices
from billing.invoice.status import UpdateInvoiceStatus
from billing.payment.creation import CreatePayment
from billing.payment.queries import get_payment_by_id, list_payments
from billing.payment.status import UpdatePaymentStatus

# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", status_code=201, response_model=PaymentResponse)
async def create_payment(body: CreatePaymentRequest) -> PaymentResponse:
    """Create a payment, or return the pending one for the same order and user."""
    command = CreatePayment(
        amount=body.amount,
        currency=body.currency,
        method=body.method,
        user_id=body.user_id,
        order_id=body.order_id,
    )
    payment_id = current_domain.process(command, asynchronous=False)
    return PaymentResponse.from_payment(get_payment_by_id(payment_id))


@payment_router.get("", response_model=PaymentListResponse)
async def list_payments_endpoint(
    status: str | None = None,
    user_id: str | None = Query(default=None, alias="userId"),
    order_id: str | None = Query(default=None, alias="orderId"),
    page: int | None = None,
    size: int | None = None,
) -> PaymentListResponse:
    """List payments, newest first."""
    result = list_payments(status=status, user_id=user_id, order_id=order_id, page=page, size=size)
    return PaymentListResponse.from_page(result)


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str) -> PaymentResponse:
    return PaymentResponse.from_payment(get_payment_by_id(payment_id))


@payment_router.patch("/{payment_id}/status", response_model=PaymentResponse)
async def update_payment_status(payment_id: str, body: UpdateStatusRequest) -> PaymentResponse:
    """Transition a payment. Approving it also generates its invoice."""
    command = UpdatePaymentStatus(payment_id=payment_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return PaymentResponse.from_payment(get_payment_by_id(payment_id))


# ---------------------------------------------------------------------------
# Invoice Router
# ---------------------------------------------------------------------------
invoice_router = APIRouter(prefix="/invoices", tags=["invoices"])


@invoice_router.post("", status_code=201, response_model=InvoiceResponse)
async def create_invoice(body: CreateInvoiceRequest) -> InvoiceResponse:
    """Create the invoice for an approved payment that has none yet."""
    invoice_id = current_domain.process(CreateInvoice(payment_id=body.payment_id), asynchronous=False)
    return InvoiceResponse.from_invoice(get_invoice_by_id(invoice_id))


@invoice_router.get("", response_model=InvoiceListResponse | InvoiceResponse)
async def list_invoices_endpoint(
    payment_id: str | None = Query(default=None, alias="paymentId"),
    status: str | None = None,
    user_id: str | None = Query(default=None, alias="userId"),
    from_date: date | None = Query(default=None, alias="fromDate"),
    to_date: date | None = Query(default=None, alias="toDate"),
    page: int | None = None,
    size: int | None = None,
) -> InvoiceListResponse | InvoiceResponse:
    """List invoices, most recently issued first.

    With ``paymentId`` the single invoice for that payment is returned instead.
    """
    if payment_id is not None:
        return InvoiceResponse.from_invoice(get_invoice_by_payment_id(payment_id))

    result = list_invoices(
        status=status,
        user_id=user_id,
        from_date=from_date,
        to_date=to_date,
        page=page,
        size=size,
    )
    return InvoiceListResponse.from_page(result)


@invoice_router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: str) -> InvoiceResponse:
    return InvoiceResponse.from_invoice(get_invoice_by_id(invoice_id))


@invoice_router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
async def update_invoice_status(invoice_id: str, body: UpdateStatusRequest) -> InvoiceResponse:
    command = UpdateInvoiceStatus(invoice_id=invoice_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return InvoiceResponse.from_invoice(get_invoice_by_id(invoice_id))
