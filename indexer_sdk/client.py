from __future__ import annotations

from typing import Dict, Optional

import httpx

from .config import IndexerClientConfig, load_validated_config
from .exceptions import ConfigurationError
from .resources.actions import ActionsResource
from .transport import Transport


class IndexerManagementClient:
    """Main client for the indexer management API.

    Example:
        async with IndexerManagementClient("http://localhost:18000") as client:
            action = build_action_input(
                ActionType.ALLOCATE,
                AllocateParams(deployment_id="Qm...", amount="10000"),
                "indexerCLI", "manual", ActionStatus.QUEUED, 0, "arbitrum-one",
            )
            queued = await client.actions.queue_actions([action])
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: Management GraphQL endpoint
            timeout: Request timeout in seconds (default: 30.0)
            headers: Extra HTTP headers sent with every request
            http_transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.url = url
        self.timeout = timeout
        self._transport = Transport(url, timeout, headers, http_transport)

        self.actions = ActionsResource(self._transport)

    @classmethod
    def from_config(cls, config: Optional[IndexerClientConfig] = None) -> "IndexerManagementClient":
        """Create a client from ``config``, loading the user configuration if omitted."""
        if config is None:
            config = load_validated_config()
        if not config.api_url:
            raise ConfigurationError("'api_url' is not set in the client configuration")
        return cls(config.api_url, timeout=config.timeout)

    async def __aenter__(self) -> "IndexerManagementClient":
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self._transport.__aexit__(exc_type, exc, tb)
