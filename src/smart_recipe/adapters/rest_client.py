"""REST call helper for the internal recipe API."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

_QUERY_METHODS = frozenset({"get", "delete"})
_BODY_METHODS = frozenset({"post", "put"})


class RestClient(Protocol):
    """Interface for issuing JSON REST calls."""

    async def call(
        self,
        address: str,
        method: str = "get",
        payload: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Issue a request and return the decoded JSON body."""


@dataclass
class HttpxRestClient(RestClient):
    """REST client implemented with httpx.

    ``get`` and ``delete`` send the payload as query parameters, ``post`` and
    ``put`` send it as a JSON body. Failures are logged and re-raised unchanged.
    """

    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str = "") -> "HttpxRestClient":
        """Create a REST client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(base_url=base_url))

    async def call(
        self,
        address: str,
        method: str = "get",
        payload: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Dispatch to the httpx method matching ``method``."""
        if method not in _QUERY_METHODS | _BODY_METHODS:
            raise ValueError(f"Unsupported REST method: {method}")
        send = getattr(self.http_client, method)
        try:
            if method in _BODY_METHODS:
                response = await send(
                    address, json=payload, headers=headers, timeout=self.timeout
                )
            else:
                response = await send(
                    address, params=payload, headers=headers, timeout=self.timeout
                )
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(
                "An error occurred making a %s REST call to -> %s error -> %s",
                method,
                address,
                exc,
            )
            raise

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
