"""gateway-core: a uniform purchase -> pay -> verify contract over payment gateways."""

import logging

from gateway_core.application.driver import CallbackStatus, Driver, DriverState
from gateway_core.application.driver_registry import DriverRegistry
from gateway_core.domain.entities import HttpMethod, Invoice, Receipt, RedirectionForm
from gateway_core.domain.exceptions import (
    DomainException,
    InvalidPaymentError,
    PaymentError,
    ProtocolViolationError,
    PurchaseFailedError,
    TransportError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CallbackStatus",
    "DomainException",
    "Driver",
    "DriverRegistry",
    "DriverState",
    "HttpMethod",
    "InvalidPaymentError",
    "Invoice",
    "PaymentError",
    "ProtocolViolationError",
    "PurchaseFailedError",
    "Receipt",
    "RedirectionForm",
    "TransportError",
]
