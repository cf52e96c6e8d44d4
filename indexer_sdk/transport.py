from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .exceptions import IndexerConnectionError, IndexerTimeoutError, RemoteOperationError

logger = logging.getLogger(__name__)


class Transport:
    """GraphQL-over-HTTP transport for the indexer management endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._http_transport = http_transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "Transport":
        self._client = httpx.AsyncClient(
            timeout=self.timeout, headers=self.headers, transport=self._http_transport
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        operation: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Run one GraphQL operation and return its ``data`` object.

        Raises:
            RemoteOperationError: The server answered with GraphQL errors or
                an HTTP error status
            IndexerTimeoutError: No response within the configured timeout
            IndexerConnectionError: The request could not be sent
        """
        if not self._client:
            raise RuntimeError("Transport not started")

        payload: Dict[str, Any] = {"query": query, "operationName": operation}
        if variables is not None:
            payload["variables"] = variables

        logger.debug("Sending %s to %s", operation, self.url)
        try:
            resp = await self._client.post(self.url, json=payload)
        except httpx.TimeoutException as exc:
            raise IndexerTimeoutError(str(exc)) from exc
        except httpx.RequestError as exc:
            raise IndexerConnectionError(str(exc)) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("errors"):
            logger.warning("%s failed on the management server: %s", operation, body["errors"])
            raise RemoteOperationError(operation, body["errors"], resp.status_code)

        if resp.status_code >= 400 or not isinstance(body, dict) or "data" not in body:
            logger.warning("%s failed with HTTP %s", operation, resp.status_code)
            raise RemoteOperationError(
                operation, [{"message": resp.text or f"HTTP {resp.status_code}"}], resp.status_code
            )

        return body["data"] or {}
