import pytest
from billing.api.errors import register_error_handlers
from billing.api.routes import invoice_router, payment_router
from billing.invoice.numbering import reset_sequence
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def app():
    app = FastAPI()
    app.include_router(payment_router)
    app.include_router(invoice_router)
    register_error_handlers(app)
    return app


@pytest.fixture()
def client(app):
    reset_sequence()
    return TestClient(app)


@pytest.fixture()
def create_payment(client):
    def _create(**overrides):
        body = {
            "amount": 150.0,
            "currency": "USD",
            "method": "CREDIT_CARD",
            "userId": "user-api",
            "orderId": "order-api",
        }
        body.update(overrides)
        response = client.post("/payments", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
