"""Value objects - Immutable objects defined by their attributes."""

from gateway_core.domain.value_objects.invoice_id import InvoiceId
from gateway_core.domain.value_objects.transaction_id import TransactionId

__all__ = [
    "InvoiceId",
    "TransactionId",
]
