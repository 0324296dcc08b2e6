"""Billing bounded context: Payment lifecycle and Invoicing.

Payments move through a fixed PENDING -> APPROVED/FAILED/CANCELED lifecycle.
Approving a payment emits a domain event that the invoice side consumes to
generate the payment's invoice.
"""

from protean.domain import Domain

from billing.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
billing = Domain(name="billing")
