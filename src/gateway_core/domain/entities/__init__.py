"""Domain entities - Objects with identity and lifecycle."""

from gateway_core.domain.entities.invoice import Invoice
from gateway_core.domain.entities.receipt import Receipt
from gateway_core.domain.entities.redirection_form import HttpMethod, RedirectionForm

__all__ = [
    "HttpMethod",
    "Invoice",
    "Receipt",
    "RedirectionForm",
]
