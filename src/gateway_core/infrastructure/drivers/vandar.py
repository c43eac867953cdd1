"""Vandar IPG integration.

Wire format (API v3):
    purchase  POST {api_purchase_url}      -> {"status": 1, "token": ...}
    pay       GET  {api_payment_url}{token}
    verify    POST {api_verification_url}  -> {"status": 1, "transId": ..., ...}

Failures come back as {"status": 0, "errors": [...]}.
Vandar amounts are in rial; invoices are expressed in toman.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from gateway_core.application.driver import Driver
from gateway_core.domain.entities import HttpMethod, RedirectionForm
from gateway_core.domain.exceptions import (
    InvalidAmountError,
    InvalidPaymentError,
    InvalidSettingsError,
    PurchaseFailedError,
)
from gateway_core.infrastructure.http_client import RequestsHttpClient
from gateway_core.infrastructure.time_provider import SystemTimeProvider

if TYPE_CHECKING:
    from gateway_core.application.ports import HttpClient, TimeProvider
    from gateway_core.domain.entities import Invoice, Receipt

logger = logging.getLogger(__name__)

RIALS_PER_TOMAN = 10
SUCCESS_STATUS = 1
PAYMENT_FAILED_MESSAGE = "پرداخت با شکست مواجه شد"

_SETTING_ALIASES = {
    "merchantId": "merchant_id",
    "callbackUrl": "callback_url",
    "apiPurchaseUrl": "api_purchase_url",
    "apiPaymentUrl": "api_payment_url",
    "apiVerificationUrl": "api_verification_url",
}


@dataclass(frozen=True, slots=True)
class VandarSettings:
    """Typed Vandar configuration, validated at construction."""

    merchant_id: str
    callback_url: str
    api_purchase_url: str = "https://ipg.vandar.io/api/v3/send"
    api_payment_url: str = "https://ipg.vandar.io/v3/"
    api_verification_url: str = "https://ipg.vandar.io/api/v3/verify"
    description: str = "payment using Vandar"

    def __post_init__(self) -> None:
        for name in (
            "merchant_id",
            "callback_url",
            "api_purchase_url",
            "api_payment_url",
            "api_verification_url",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidSettingsError(f"Vandar setting '{name}' is required")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> VandarSettings:
        """Build settings from a plain mapping (camelCase or snake_case keys).

        Unrecognised keys are ignored.

        Raises:
            InvalidSettingsError: If a required setting is missing or blank.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = _SETTING_ALIASES.get(key, key)
            if name in known:
                values[name] = value

        missing = sorted({"merchant_id", "callback_url"} - values.keys())
        if missing:
            raise InvalidSettingsError(f"Missing Vandar settings: {', '.join(missing)}")
        return cls(**values)


def to_rial(amount: int | float | Decimal) -> int:
    """Convert a toman amount to the integer rial amount Vandar expects."""
    rial = Decimal(str(amount)) * RIALS_PER_TOMAN
    if rial != rial.to_integral_value():
        raise InvalidAmountError(f"Amount {amount} toman is not a whole number of rials")
    return int(rial)


def provider_errors(body: Mapping[str, Any]) -> list[str]:
    """Flatten Vandar's "errors" field, which may be a list, dict or string."""
    errors = body.get("errors")
    if not errors:
        return []
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, Mapping):
        errors = errors.values()

    messages: list[str] = []
    for error in errors:
        if isinstance(error, list | tuple):
            messages.extend(str(e) for e in error)
        else:
            messages.append(str(error))
    return messages


class VandarDriver(Driver):
    """Driver for the Vandar payment gateway."""

    name = "vandar"
    callback_token_field = "token"
    callback_status_field = "payment_status"
    callback_success_values = frozenset({"OK"})
    payment_failed_message = PAYMENT_FAILED_MESSAGE

    def __init__(
        self,
        settings: VandarSettings,
        http_client: HttpClient | None = None,
        time_provider: TimeProvider | None = None,
        invoice: Invoice | None = None,
    ) -> None:
        self.settings = settings
        if http_client is None:
            http_client = RequestsHttpClient()
        if time_provider is None:
            time_provider = SystemTimeProvider()
        super().__init__(http_client=http_client, time_provider=time_provider, invoice=invoice)

    def _request_purchase(self, invoice: Invoice) -> str:
        payload: dict[str, Any] = {
            "api_key": self.settings.merchant_id,
            "amount": self._rial_amount(invoice),
            "callback_url": self.settings.callback_url,
            "mobile_number": invoice.detail("mobile"),
            "description": invoice.detail("description") or self.settings.description,
            "factorNumber": invoice.id.compact,
            "valid_card_number": invoice.detail("validCardNumber"),
        }
        for detail_name, field_name in (("nationalCode", "national_code"), ("comment", "comment")):
            value = invoice.detail(detail_name)
            if value is not None:
                payload[field_name] = value

        body = self._http.post_json(self.settings.api_purchase_url, payload)

        # purchase accepts "1" as well as 1; verify does not
        if body.get("status") not in (SUCCESS_STATUS, str(SUCCESS_STATUS)):
            errors = provider_errors(body)
            raise PurchaseFailedError("\n".join(errors), provider=self.name, errors=errors)

        return body.get("token")

    def _rial_amount(self, invoice: Invoice) -> int:
        try:
            return to_rial(invoice.amount)
        except InvalidAmountError as e:
            logger.warning(
                "Invoice amount cannot be sent to Vandar",
                extra={"driver": self.name, "invoice_id": str(invoice.id), "amount": str(invoice.amount)},
            )
            raise PurchaseFailedError(str(e), provider=self.name) from e

    def _build_redirection(self, transaction_id: str) -> RedirectionForm:
        return RedirectionForm(
            url=f"{self.settings.api_payment_url}{transaction_id}",
            method=HttpMethod.GET,
        )

    def _request_verification(
        self, transaction_id: str, callback: Mapping[str, Any]
    ) -> Receipt:
        payload = {
            "api_key": self.settings.merchant_id,
            "token": transaction_id,
        }
        body = self._http.post_json(self.settings.api_verification_url, payload)

        if body.get("status") != SUCCESS_STATUS:
            errors = provider_errors(body)
            raise InvalidPaymentError("\n".join(errors), provider=self.name, errors=errors)

        trans_id = body.get("transId")
        if trans_id is None or not str(trans_id).strip():
            logger.warning(
                "Vandar confirmed payment without a transId",
                extra={"driver": self.name, "transaction_id": transaction_id},
            )
            raise InvalidPaymentError(provider=self.name)

        return self._create_receipt(trans_id, body)
