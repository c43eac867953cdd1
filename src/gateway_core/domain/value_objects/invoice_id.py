from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from gateway_core.domain.exceptions import InvalidInvoiceIdError


@dataclass(frozen=True, slots=True)
class InvoiceId:
    """Value object for invoice identifiers.

    str() yields the canonical hyphenated UUID form, used in logs and when
    the caller persists an invoice. Providers receive the compact form as
    their order/factor number; from_string() parses either.
    """

    value: UUID

    @property
    def compact(self) -> str:
        """32 lowercase hex digits, no hyphens."""
        return self.value.hex

    @classmethod
    def generate(cls) -> InvoiceId:
        """Generate a new unique InvoiceId."""
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, id_str: str) -> InvoiceId:
        """Parse an InvoiceId from a string representation.

        Args:
            id_str: UUID string (with or without hyphens, any case).

        Returns:
            An InvoiceId instance.

        Raises:
            InvalidInvoiceIdError: If the string is not a valid UUID.
        """
        try:
            return cls(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidInvoiceIdError(f"Invalid invoice ID: {id_str}") from e

    def __str__(self) -> str:
        return str(self.value)
