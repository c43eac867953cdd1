from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from gateway_core.domain.exceptions import InvalidRedirectionError


class HttpMethod(Enum):
    """How the payer's browser reaches the provider's payment page."""

    GET = "GET"
    POST = "POST"


@dataclass(frozen=True, slots=True)
class RedirectionForm:
    """Instruction for sending the payer to a provider's hosted payment page.

    Built fresh by every pay() call and carries no identity: two forms with
    the same url, method and fields are equal. fields is a read-only view,
    so forms are not hashable.
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    fields: Mapping[str, Any] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.url:
            raise InvalidRedirectionError("Redirection URL cannot be empty")
        if isinstance(self.method, str):
            object.__setattr__(self, "method", HttpMethod(self.method.upper()))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.url,
            "method": self.method.value,
            "inputs": dict(self.fields),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)
