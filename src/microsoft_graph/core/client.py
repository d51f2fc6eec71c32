"""
Graph API client.

Builds versioned request URLs, authenticates calls with a bearer token and
classifies responses by status code.
"""

import json
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from microsoft_graph.config import GraphConfig, get_config
from microsoft_graph.core.batch import Batch
from microsoft_graph.core.errors import GraphError, UnknownStatusError
from microsoft_graph.core.formatter import BodyFormatter
from microsoft_graph.core.headers import JSON_MEDIA_TYPE, merge_headers
from microsoft_graph.core.methods import HttpMethod
from microsoft_graph.core.response import ResponseParser
from microsoft_graph.core.urls import build_url
from microsoft_graph.transport.httpx_transport import HttpxTransport
from microsoft_graph.transport.interface import Transport

logger = structlog.get_logger(__name__)

ErrorHandler = Callable[[GraphError], Any]


def raise_error(error: GraphError) -> Any:
    """Default error handler: the error becomes the outcome of the call."""
    raise error


def return_error(error: GraphError) -> GraphError:
    """Error handler that hands the error back instead of raising it."""
    return error


class Graph:
    """
    Microsoft Graph client.

    Usage:
        ```python
        graph = Graph(token="...")
        me = graph.get("/me")
        print(me.display_name)

        with graph.batch() as batch:
            batch.add("/me")
            batch.add("/me/drive", id="drive")
        for result in batch.results:
            print(result.request.id, result.response.status)
        ```
    """

    def __init__(
        self,
        token: Optional[str] = None,
        error_handler: ErrorHandler = raise_error,
        version: Optional[str] = None,
        config: Optional[GraphConfig] = None,
        transport: Optional[Transport] = None,
        body_formatter: Optional[BodyFormatter] = None,
        parser: Optional[ResponseParser] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Default bearer token; each call may override it
            error_handler: Called with a GraphError on 4xx/5xx answers. Its
                return value becomes the result of the call.
            version: API version, "1.0" unless configured otherwise
            config: Client configuration. Uses global config if not provided.
            transport: HTTP transport (an HttpxTransport by default)
            body_formatter: Formatter for outgoing payloads
            parser: Parser for response bodies
        """
        self.config = config or get_config()
        self.token = token if token is not None else self.config.token
        self.version = version or self.config.version
        self.host = self.config.host
        self.error_handler = error_handler
        self.transport = transport or HttpxTransport(self.config)
        self.body_formatter = body_formatter or BodyFormatter()
        self.parser = parser or ResponseParser()

    def get(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, method=HttpMethod.GET, **kwargs)

    def post(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, method=HttpMethod.POST, **kwargs)

    def put(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, method=HttpMethod.PUT, **kwargs)

    def patch(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, method=HttpMethod.PATCH, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, method=HttpMethod.DELETE, **kwargs)

    def call(
        self,
        endpoint: str,
        token: Optional[str] = None,
        method: Union[str, HttpMethod] = HttpMethod.GET,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Call a Graph endpoint.

        Args:
            endpoint: Path below the version segment, e.g. "/me/messages"
            token: Bearer token for this call only
            method: HTTP verb
            headers: Extra request headers
            params: Query parameters
            body: Payload; only sent for POST, PUT and PATCH

        Returns:
            The parsed response body, or whatever the error handler returns
            for a 4xx/5xx answer

        Raises:
            InvalidMethodError: If the verb is not allowed
            GraphError: On a 4xx/5xx answer with the default error handler
            UnknownStatusError: On a status code outside 200-599
        """
        method = HttpMethod.parse(method)
        url = build_url(self.host, self.version, endpoint)

        token = token if token is not None else self.token
        overrides = {"Accept": JSON_MEDIA_TYPE}
        # No token configured: send the request unauthenticated
        if token is not None:
            overrides["Authorization"] = f"Bearer {token}"
        if method.has_body:
            overrides["Content-Type"] = JSON_MEDIA_TYPE

        payload = self.body_formatter.format(body, method)
        content = json.dumps(payload).encode("utf-8") if payload is not None else None

        logger.debug("graph_request", method=method.value, url=url)
        response = self.transport.request(
            method.value,
            url,
            headers=merge_headers(headers, overrides),
            params=params,
            content=content,
            parser=self.parser,
        )

        status = response.status_code
        if 200 <= status < 400:
            return response.data

        if 400 <= status < 600:
            logger.warning(
                "graph_request_failed",
                method=method.value,
                url=url,
                status=status,
            )
            error = GraphError(
                f"Received status code: {status}. Check the `response` attribute for more details.",
                response.data,
                status,
            )
            return self.error_handler(error)

        raise UnknownStatusError(status)

    def batch(self, token: Optional[str] = None, size: Optional[int] = None) -> Batch:
        """
        Start a batch.

        Use the returned Batch as a context manager; it executes when the
        block exits cleanly and keeps the results on ``batch.results``.

        Args:
            token: Bearer token for the batch calls
            size: Maximum requests per $batch call
        """
        return Batch(
            self,
            token=token if token is not None else self.token,
            size=size if size is not None else self.config.batch_size,
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Graph":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
