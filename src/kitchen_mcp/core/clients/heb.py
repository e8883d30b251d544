"""HEB GraphQL API client.

Endpoint: https://www.heb.com/graphql (persisted queries only).
Authentication is cookie-based: the `sat`, `JSESSIONID` and `reese84`
cookies from a logged-in browser session, plus the store selector.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..errors import (
    AuthenticationError,
    HEBError,
    NetworkError,
    RateLimitError,
)
from ..models import GraphQLRequest

logger = logging.getLogger(__name__)

GRAPHQL_ENDPOINT = "https://www.heb.com/graphql"
REQUEST_TIMEOUT_SECONDS = 10.0

BASE_HEADERS = {
    "content-type": "application/json",
    "accept": "*/*",
    "accept-language": "en",
    "apollographql-client-name": "WebPlatform-Solar (Production)",
    "apollographql-client-version": "1.0.0",
    "origin": "https://www.heb.com",
    "referer": "https://www.heb.com/",
    "user-agent": "Mozilla/5.0 (compatible; MCP-HEB-Client/1.0)",
}

_AUTH_ERROR_MARKERS = ("unauthorized", "unauthenticated")


def build_cookie_header(sat: str, jsessionid: str, reese84: str, store_id: str) -> str:
    return "; ".join([
        f"sat={sat}",
        f"JSESSIONID={jsessionid}",
        f"reese84={reese84}",
        f"CURR_SESSION_STORE={store_id}",
    ])


class HEBGraphQLClient:
    """Executes persisted GraphQL queries against HEB.

    Built once per process from settings. Holds only immutable header values,
    so concurrent calls never share per-request state.
    """

    def __init__(
        self,
        settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        endpoint: str = GRAPHQL_ENDPOINT,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            **BASE_HEADERS,
            "cookie": build_cookie_header(
                settings.sat_cookie,
                settings.jsessionid,
                settings.reese84,
                settings.store_id,
            ),
        }

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def execute(self, request: GraphQLRequest) -> dict[str, Any]:
        """Run one query and return its `data` object, untyped.

        Raises AuthenticationError, RateLimitError, NetworkError, or HEBError
        for anything else that goes wrong.
        """
        operation = request.operation_name
        logger.debug("HEB GraphQL request: %s", operation)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._endpoint,
                    headers=self._headers,
                    json=request.to_payload(),
                )
            return self._parse_response(response)
        except HEBError as exc:
            logger.warning("HEB %s failed: %s", operation, exc)
            raise
        except httpx.TimeoutException as exc:
            logger.warning("HEB %s timed out after %.0fs", operation, self._timeout)
            raise NetworkError("Request timed out. Please try again.") from exc
        except httpx.TransportError as exc:
            logger.warning("HEB %s transport failure: %s", operation, exc)
            raise NetworkError(
                f"Network error: {exc}. Please check your internet connection."
            ) from exc
        except Exception as exc:
            logger.error("HEB %s unexpected failure: %s", operation, exc, exc_info=True)
            raise HEBError(f"Unexpected error: {exc}") from exc

    @staticmethod
    def _parse_response(response: httpx.Response) -> dict[str, Any]:
        status = response.status_code
        if status in (401, 403):
            raise AuthenticationError("Invalid or expired authentication. Please update your HEB cookies.")
        if status == 429:
            raise RateLimitError()
        if not response.is_success:
            raise NetworkError(f"HTTP error {status}: {response.reason_phrase}")

        envelope = response.json()
        if not isinstance(envelope, dict):
            raise HEBError("Unexpected response shape from HEB API")

        errors = envelope.get("errors") or []
        if errors:
            joined = ", ".join(_error_message(e) for e in errors)
            lowered = joined.lower()
            if any(marker in lowered for marker in _AUTH_ERROR_MARKERS):
                raise AuthenticationError("Authentication failed. Please update your HEB cookies.")
            raise HEBError(f"GraphQL error: {joined}")

        data = envelope.get("data")
        if data is None:
            raise HEBError("No data returned from HEB API")
        return data


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", ""))
    return str(error)
