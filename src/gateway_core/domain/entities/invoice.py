"""Invoice entity: the caller's request to collect one payment.

The invoice is built by the caller, handed to a driver, and carries the
provider's transaction id once purchase succeeds. It is never persisted by
this package; restore() rebuilds one the caller saved between purchase and
the provider callback.
"""

from __future__ import annotations

import math
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from gateway_core.domain.exceptions import InvalidAmountError, InvalidStateTransitionError
from gateway_core.domain.value_objects import InvoiceId, TransactionId

if TYPE_CHECKING:
    from collections.abc import Mapping

Amount = int | float | Decimal


def _validate_amount(amount: Any) -> Amount:
    if isinstance(amount, bool) or not isinstance(amount, int | float | Decimal):
        raise InvalidAmountError(f"Invoice amount must be a number, got {amount!r}")
    if (isinstance(amount, Decimal) and not amount.is_finite()) or (
        isinstance(amount, float) and not math.isfinite(amount)
    ):
        raise InvalidAmountError(f"Invoice amount must be finite, got {amount}")
    if not amount > 0:
        raise InvalidAmountError(f"Invoice amount must be greater than 0, got {amount}")
    return amount


class Invoice:
    """Invoice entity with a write-once transaction id.

    Lifecycle:
        - details may be changed while no transaction id is assigned
        - assign_transaction_id() is called exactly once, by purchase
        - after that the invoice is read-only

    Not thread-safe: a single invoice must not be purchased concurrently.
    """

    __slots__ = ("_id", "_amount", "_details", "_driver", "_transaction_id")

    def __init__(
        self,
        amount: Amount,
        details: Mapping[str, Any] | None = None,
        driver: str | None = None,
    ) -> None:
        self._id = InvoiceId.generate()
        self._amount = _validate_amount(amount)
        self._details: dict[str, Any] = dict(details or {})
        self._driver = driver
        self._transaction_id: TransactionId | None = None

    @classmethod
    def restore(
        cls,
        invoice_id: InvoiceId | str,
        amount: Amount,
        transaction_id: str | None = None,
        details: Mapping[str, Any] | None = None,
        driver: str | None = None,
    ) -> Invoice:
        """Rebuild an invoice the caller persisted before redirecting the payer.

        Raises:
            InvalidInvoiceIdError: If invoice_id is a malformed string.
            InvalidAmountError: If amount is not positive.
            InvalidTransactionIdError: If transaction_id is blank.
        """
        invoice = cls(amount=amount, details=details, driver=driver)
        if isinstance(invoice_id, str):
            invoice_id = InvoiceId.from_string(invoice_id)
        invoice._id = invoice_id
        if transaction_id is not None:
            invoice._transaction_id = TransactionId(transaction_id)
        return invoice

    @property
    def id(self) -> InvoiceId:
        return self._id

    @property
    def amount(self) -> Amount:
        return self._amount

    @property
    def details(self) -> Mapping[str, Any]:
        """Read-only view of the caller-supplied details."""
        return MappingProxyType(self._details)

    @property
    def driver(self) -> str | None:
        return self._driver

    @property
    def transaction_id(self) -> str | None:
        if self._transaction_id is None:
            return None
        return self._transaction_id.value

    def detail(self, name: str) -> Any | None:
        """Return a single detail, or None when the caller did not provide it."""
        return self._details.get(name)

    def set_detail(self, name: str, value: Any) -> Invoice:
        self._ensure_editable()
        self._details[name] = value
        return self

    def set_details(self, details: Mapping[str, Any]) -> Invoice:
        self._ensure_editable()
        self._details.update(details)
        return self

    def via(self, driver: str) -> Invoice:
        """Record which gateway this invoice is meant to be paid through."""
        self._ensure_editable()
        self._driver = driver
        return self

    def assign_transaction_id(self, transaction_id: str) -> str:
        """Store the provider's transaction token.

        Returns:
            The normalized token.

        Raises:
            InvalidStateTransitionError: If a transaction id is already assigned.
            InvalidTransactionIdError: If the token is empty.
        """
        if self._transaction_id is not None:
            raise InvalidStateTransitionError(
                f"Invoice {self._id} already has transaction id {self._transaction_id}"
            )
        self._transaction_id = TransactionId(transaction_id)
        return self._transaction_id.value

    def _ensure_editable(self) -> None:
        if self._transaction_id is not None:
            raise InvalidStateTransitionError(
                f"Invoice {self._id} cannot be changed after purchase"
            )

    def __repr__(self) -> str:
        return (
            f"Invoice(id={self._id}, amount={self._amount!r}, "
            f"driver={self._driver!r}, transaction_id={self.transaction_id!r})"
        )
