from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from gateway_core.application.ports import HttpClient
from gateway_core.domain.exceptions import MalformedResponseError, TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 25.0


class RequestsHttpClient(HttpClient):
    """HttpClient backed by a requests.Session.

    Implementation notes:
    - HTTP error statuses are not raised; providers report failures in the body
    - requests exceptions are wrapped in TransportError (cause preserved)
    - One session is reused across calls; pass your own to configure
      proxies, adapters or retries outside the core
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def post_json(self, url: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        logger.debug("POST %s", url, extra={"url": url})
        try:
            response = self._session.post(
                url,
                json=dict(payload),
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "HTTP request to payment provider failed",
                extra={"url": url, "error": str(e)},
                exc_info=True,
            )
            raise TransportError(f"Request to {url} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {url} (HTTP {response.status_code}) is not valid JSON"
            ) from e

        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Response from {url} is a JSON {type(body).__name__}, expected an object"
            )

        logger.debug(
            "Provider responded",
            extra={"url": url, "status_code": response.status_code},
        )
        return body
