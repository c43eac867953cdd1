from __future__ import annotations

from dataclasses import dataclass

from gateway_core.domain.exceptions import InvalidTransactionIdError


@dataclass(frozen=True)
class TransactionId:
    """Provider-issued token correlating purchase, pay and verify.

    Rules:
      - Whitespace is trimmed (normalization)
      - Non-empty after trimming
      - Non-string tokens (some providers send numbers) are converted with str()
    """

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidTransactionIdError("Transaction ID cannot be empty")

        normalized = str(self.value).strip()

        if normalized != self.value:
            object.__setattr__(self, "value", normalized)

        if not normalized:
            raise InvalidTransactionIdError("Transaction ID cannot be empty")

    def __str__(self) -> str:
        return self.value
