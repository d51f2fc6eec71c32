"""
httpx transport.

Sends Graph requests through a synchronous ``httpx.Client``.
"""

from typing import Any, Mapping, Optional

import httpx
import structlog

from microsoft_graph.config import GraphConfig, get_config
from microsoft_graph.core.errors import GraphConnectionError
from microsoft_graph.transport.interface import Parser, Transport, TransportResponse

logger = structlog.get_logger(__name__)


class HttpxTransport(Transport):
    """
    Transport backed by httpx.

    The client is created lazily on the first request and reused until
    ``close`` is called.
    """

    def __init__(
        self,
        config: Optional[GraphConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Client configuration. Uses global config if not provided.
            client: Pre-built httpx client (e.g. one with a mock transport)
        """
        self.config = config or get_config()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout_seconds)
        return self._client

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        content: Optional[bytes] = None,
        parser: Optional[Parser] = None,
    ) -> TransportResponse:
        try:
            response = self.client.request(
                method,
                url,
                headers=dict(headers),
                params=dict(params) if params else None,
                content=content,
            )
        except httpx.RequestError as e:
            logger.error("graph_transport_error", method=method, url=url, error=str(e))
            raise GraphConnectionError(f"Graph request failed: {e}") from e

        data = response.content
        if parser is not None:
            data = parser(response.content, response.headers.get("Content-Type"))

        return TransportResponse(status_code=response.status_code, data=data)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
