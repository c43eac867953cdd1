"""Driver contract: the purchase -> pay -> verify protocol.

Every gateway integration subclasses Driver and implements three hooks that
speak its provider's wire format. The base class owns the lifecycle rules
shared by all of them:

    created -> purchased -> verified
    created -> purchased -> verification_failed
    created -> purchase_failed (purchase may be retried)

A driver instance is bound to one invoice at a time. bind() starts a new
cycle for another invoice.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from gateway_core.domain.entities import Receipt
from gateway_core.domain.exceptions import (
    DriverNotBoundError,
    InvalidPaymentError,
    InvalidStateTransitionError,
    InvalidTransactionIdError,
    MissingTransactionIdError,
    PurchaseFailedError,
    TransportError,
)

if TYPE_CHECKING:
    from gateway_core.application.ports import HttpClient, TimeProvider
    from gateway_core.domain.entities import Invoice, RedirectionForm

logger = logging.getLogger(__name__)

EMPTY_CALLBACK: Mapping[str, Any] = {}


class DriverState(Enum):
    """Lifecycle states of one purchase/pay/verify cycle."""

    CREATED = "created"
    PURCHASED = "purchased"
    PURCHASE_FAILED = "purchase_failed"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"


class CallbackStatus(Enum):
    """What the payer's return request says about the payment."""

    SUCCESS = "success"
    FAILURE = "failure"
    UNKNOWN = "unknown"


class Driver(ABC):
    """Base class for gateway integrations.

    Subclasses set the class attributes describing their callback fields and
    implement _request_purchase(), _build_redirection() and
    _request_verification(). They raise PurchaseFailedError or
    InvalidPaymentError for provider rejections; the base class records the
    resulting state.

    Class attributes:
        name: Registry name, also stored on receipts as the provider.
        callback_token_field: Callback field carrying the transaction token.
        callback_status_field: Callback field carrying the payment status flag.
        callback_success_values: Status flag values that mean "paid".
        payment_failed_message: Message used when the flag signals failure.
    """

    name: ClassVar[str] = "unknown"
    callback_token_field: ClassVar[str | None] = None
    callback_status_field: ClassVar[str | None] = None
    callback_success_values: ClassVar[frozenset[str]] = frozenset()
    payment_failed_message: ClassVar[str] = InvalidPaymentError.DEFAULT_MESSAGE

    def __init__(
        self,
        http_client: HttpClient,
        time_provider: TimeProvider,
        invoice: Invoice | None = None,
    ) -> None:
        self._http = http_client
        self._time_provider = time_provider
        self._invoice: Invoice | None = None
        self._state = DriverState.CREATED
        if invoice is not None:
            self.bind(invoice)

    @property
    def invoice(self) -> Invoice | None:
        return self._invoice

    @property
    def state(self) -> DriverState:
        return self._state

    def bind(self, invoice: Invoice) -> Driver:
        """Bind an invoice and start a new cycle for it.

        An invoice that already carries a transaction id (restored by the
        caller after the provider callback) starts in the purchased state.
        """
        self._invoice = invoice
        if invoice.transaction_id is None:
            self._transition(DriverState.CREATED)
        else:
            self._transition(DriverState.PURCHASED)
        return self

    # =========================================================================
    # Protocol
    # =========================================================================

    def purchase(self, invoice: Invoice | None = None) -> str:
        """Register the invoice with the provider and obtain a transaction id.

        Args:
            invoice: Invoice to bind first. Optional if one is already bound.

        Returns:
            The provider's transaction id, also stored on the invoice.

        Raises:
            PurchaseFailedError: The provider rejected the request, returned
                no token, or could not be reached.
            InvalidStateTransitionError: The bound invoice was already purchased.
            DriverNotBoundError: No invoice is bound.
        """
        if invoice is not None:
            self.bind(invoice)
        invoice = self._require_invoice()

        if self._state not in (DriverState.CREATED, DriverState.PURCHASE_FAILED):
            raise InvalidStateTransitionError(
                f"Cannot purchase in state {self._state.value}; "
                f"must be in {DriverState.CREATED.value} or "
                f"{DriverState.PURCHASE_FAILED.value} state"
            )

        try:
            token = self._request_purchase(invoice)
            transaction_id = invoice.assign_transaction_id(token)
        except PurchaseFailedError as e:
            self._purchase_failed(invoice, e)
            raise
        except InvalidTransactionIdError as e:
            error = PurchaseFailedError(provider=self.name)
            self._purchase_failed(invoice, error)
            raise error from e
        except TransportError as e:
            logger.error(
                "Purchase request did not reach the provider",
                extra={"driver": self.name, "invoice_id": str(invoice.id)},
                exc_info=True,
            )
            error = PurchaseFailedError(str(e), provider=self.name)
            self._purchase_failed(invoice, error)
            raise error from e

        self._transition(DriverState.PURCHASED)
        logger.info(
            "Invoice purchased",
            extra={
                "driver": self.name,
                "invoice_id": str(invoice.id),
                "transaction_id": transaction_id,
            },
        )
        return transaction_id

    def pay(self) -> RedirectionForm:
        """Describe how to send the payer to the provider's payment page.

        Makes no network call. Repeated calls return equal forms.

        Raises:
            MissingTransactionIdError: purchase() has not succeeded yet.
            DriverNotBoundError: No invoice is bound.
        """
        invoice = self._require_invoice()
        if invoice.transaction_id is None:
            raise MissingTransactionIdError(
                f"Invoice {invoice.id} has no transaction id; call purchase() first"
            )
        return self._build_redirection(invoice.transaction_id)

    def verify(self, callback: Mapping[str, Any] | None = None) -> Receipt:
        """Confirm the payment with the provider after the payer returns.

        Args:
            callback: Parameters of the payer's return request (query string
                or form body). Only named fields are read from it.

        Returns:
            A Receipt for the confirmed payment.

        Raises:
            InvalidPaymentError: The callback flag signals failure, or the
                provider did not confirm the payment.
            MissingTransactionIdError: Neither the invoice nor the callback
                carries a transaction id.
            InvalidStateTransitionError: The cycle is already finished.
            TransportError: The provider could not be reached; the cycle
                stays purchased and verify() may be called again.
        """
        invoice = self._require_invoice()
        callback = callback if callback is not None else EMPTY_CALLBACK

        if self._state not in (DriverState.CREATED, DriverState.PURCHASED):
            raise InvalidStateTransitionError(
                f"Cannot verify in state {self._state.value}; "
                f"must be in {DriverState.PURCHASED.value} state"
            )

        transaction_id = invoice.transaction_id or self._callback_token(callback)
        if not transaction_id:
            raise MissingTransactionIdError(
                f"Invoice {invoice.id} has no transaction id and the callback carries none"
            )

        try:
            if self.callback_status(callback) is CallbackStatus.FAILURE:
                raise InvalidPaymentError(self.payment_failed_message, provider=self.name)
            receipt = self._request_verification(transaction_id, callback)
        except InvalidPaymentError as e:
            self._transition(DriverState.VERIFICATION_FAILED)
            logger.warning(
                "Payment not verified",
                extra={
                    "driver": self.name,
                    "invoice_id": str(invoice.id),
                    "transaction_id": transaction_id,
                    "error": e.message,
                },
            )
            raise

        self._transition(DriverState.VERIFIED)
        logger.info(
            "Payment verified",
            extra={
                "driver": self.name,
                "invoice_id": str(invoice.id),
                "reference_id": receipt.reference_id,
            },
        )
        return receipt

    def callback_status(self, callback: Mapping[str, Any]) -> CallbackStatus:
        """Classify the status flag on the payer's return request.

        A missing flag is UNKNOWN rather than FAILURE: the provider's
        verification answer decides.
        """
        if self.callback_status_field is None:
            return CallbackStatus.UNKNOWN

        value = callback.get(self.callback_status_field)
        if value is None:
            logger.warning(
                "Callback carries no payment status flag",
                extra={"driver": self.name, "field": self.callback_status_field},
            )
            return CallbackStatus.UNKNOWN

        if str(value) in self.callback_success_values:
            return CallbackStatus.SUCCESS
        return CallbackStatus.FAILURE

    # =========================================================================
    # Provider hooks
    # =========================================================================

    @abstractmethod
    def _request_purchase(self, invoice: Invoice) -> str:
        """Send the purchase request and return the provider's token.

        Must not mutate invoice.details. Raise PurchaseFailedError when the
        provider rejects the request.
        """

    @abstractmethod
    def _build_redirection(self, transaction_id: str) -> RedirectionForm:
        """Build the redirect to the provider's payment page. No I/O."""

    @abstractmethod
    def _request_verification(
        self, transaction_id: str, callback: Mapping[str, Any]
    ) -> Receipt:
        """Send the verification request and build the receipt.

        Raise InvalidPaymentError when the provider does not confirm.
        """

    # =========================================================================
    # Helpers for subclasses
    # =========================================================================

    def _create_receipt(self, reference_id: Any, detail: Mapping[str, Any]) -> Receipt:
        return Receipt(
            provider=self.name,
            reference_id=str(reference_id),
            date=self._time_provider.now(),
            detail=dict(detail),
        )

    def _callback_token(self, callback: Mapping[str, Any]) -> str | None:
        if self.callback_token_field is None:
            return None
        token = callback.get(self.callback_token_field)
        if token is None:
            return None
        return str(token).strip() or None

    def _require_invoice(self) -> Invoice:
        if self._invoice is None:
            raise DriverNotBoundError(f"No invoice is bound to the {self.name} driver")
        return self._invoice

    def _purchase_failed(self, invoice: Invoice, error: PurchaseFailedError) -> None:
        self._transition(DriverState.PURCHASE_FAILED)
        logger.warning(
            "Purchase rejected",
            extra={
                "driver": self.name,
                "invoice_id": str(invoice.id),
                "error": error.message,
            },
        )

    def _transition(self, state: DriverState) -> None:
        logger.debug(
            "Driver state change",
            extra={"driver": self.name, "from_state": self._state.value, "to_state": state.value},
        )
        self._state = state
