from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


class HttpClient(ABC):
    """Port for the outbound calls a driver makes to its provider.

    Contract:
    - post_json() sends exactly one request per call and never retries
    - Non-2xx responses are NOT raised; the decoded body is returned so the
      driver can read the provider's own status and error fields
    - Connection failures and timeouts raise TransportError
    - A body that is not a JSON object raises MalformedResponseError
    - Timeouts are the adapter's concern; the port imposes none
    """

    @abstractmethod
    def post_json(self, url: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """POST payload as a JSON body and return the decoded JSON object.

        Args:
            url: Absolute provider endpoint.
            payload: JSON-serializable request body.

        Returns:
            The response body decoded as a dict.

        Raises:
            TransportError: The provider could not be reached.
            MalformedResponseError: The response body is not a JSON object.
        """
