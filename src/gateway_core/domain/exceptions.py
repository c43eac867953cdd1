"""Exceptions for gateway-core.

Exception hierarchy:
    DomainException (base)
    ├── Business Failures
    │   └── PaymentError
    │       ├── PurchaseFailedError
    │       └── InvalidPaymentError
    ├── Protocol Violations (programmer errors)
    │   └── ProtocolViolationError
    │       ├── InvalidStateTransitionError
    │       ├── MissingTransactionIdError
    │       └── DriverNotBoundError
    └── Validation Errors
        ├── InvalidAmountError
        ├── InvalidInvoiceIdError
        ├── InvalidTransactionIdError
        ├── InvalidRedirectionError
        ├── InvalidSettingsError
        └── UnknownDriverError

    TransportError (infrastructure, not a DomainException)
    └── MalformedResponseError
"""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Business Failures
# =============================================================================


class PaymentError(DomainException):
    """Base for the two recoverable-by-caller outcomes of a payment cycle.

    The message is meant for display and is never empty: when the provider
    supplies no text, DEFAULT_MESSAGE is used instead.

    Attributes:
        message: Human-readable message (provider text or the default).
        provider: Name of the driver that raised the error, if known.
        errors: Individual provider error messages, in provider order.
    """

    DEFAULT_MESSAGE = "خطای ناشناخته ای رخ داده است."

    def __init__(
        self,
        message: str | None = None,
        provider: str | None = None,
        errors: Iterable[str] | None = None,
    ) -> None:
        self.message = message or self.DEFAULT_MESSAGE
        self.provider = provider
        self.errors = tuple(errors or ())
        super().__init__(self.message)


class PurchaseFailedError(PaymentError):
    """Raised when the provider rejects a purchase request.

    Also raised when the purchase request cannot reach the provider at all.
    The invoice keeps no transaction id and purchase may be attempted again.
    """


class InvalidPaymentError(PaymentError):
    """Raised when verification does not confirm the payment.

    Covers an explicit failure flag on the callback, a provider rejection
    and an empty or ambiguous provider answer alike.
    """


# =============================================================================
# Protocol Violations
# =============================================================================


class ProtocolViolationError(DomainException):
    """Raised when the purchase -> pay -> verify protocol is misused.

    These are programmer errors. Retrying the same call will not help.
    """


class InvalidStateTransitionError(ProtocolViolationError):
    """Raised when a driver or invoice transition violates the lifecycle.

    Valid driver transitions:
        - created -> purchased | purchase_failed
        - purchase_failed -> purchased | purchase_failed (retry)
        - purchased -> verified | verification_failed
        - created -> verified | verification_failed (token from callback)

    verified and verification_failed are terminal.
    """


class MissingTransactionIdError(ProtocolViolationError):
    """Raised by pay() or verify() when no transaction id is available."""


class DriverNotBoundError(ProtocolViolationError):
    """Raised when a driver phase runs before an invoice is bound."""


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidAmountError(DomainException):
    """Raised when an invoice amount is not a positive number."""


class InvalidInvoiceIdError(DomainException):
    """Raised when an invoice ID is not a valid UUID."""


class InvalidTransactionIdError(DomainException):
    """Raised when a provider token is empty after trimming."""


class InvalidRedirectionError(DomainException):
    """Raised when a redirection form is built without a target URL."""


class InvalidSettingsError(DomainException):
    """Raised when a driver's settings are missing required fields."""


class UnknownDriverError(DomainException):
    """Raised when a driver name is not present in the registry."""


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(Exception):
    """Raised by HTTP adapters when the provider cannot be reached.

    The payment outcome is unknown, not failed, so this is not a DomainException.
    """


class MalformedResponseError(TransportError):
    """Raised when the provider answers with something other than a JSON object."""
