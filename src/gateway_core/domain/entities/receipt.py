from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class Receipt:
    """Proof of payment returned by a successful verify().

    Existence of a Receipt implies the provider confirmed the payment.
    detail holds every field the provider returned, unaltered; its keys
    are provider-defined. detail is a read-only view, so a Receipt is
    compared by value but is not hashable.
    """

    provider: str
    reference_id: str
    date: datetime
    detail: Mapping[str, Any] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "detail", MappingProxyType(dict(self.detail)))

    def get_detail(self, name: str) -> Any | None:
        return self.detail.get(name)
