"""
JSON batching.

Collects requests and sends them to the Graph ``$batch`` endpoint, at most
``size`` requests per round trip, then pairs every sub-response with the
request it answers.
"""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

import structlog

from microsoft_graph.core.errors import BatchError, GraphError
from microsoft_graph.core.formatter import BodyFormatter
from microsoft_graph.core.headers import JSON_MEDIA_TYPE, merge_headers
from microsoft_graph.core.methods import HttpMethod
from microsoft_graph.core.response import GraphObject
from microsoft_graph.core.urls import batch_url

if TYPE_CHECKING:
    from microsoft_graph.core.client import Graph

logger = structlog.get_logger(__name__)

BATCH_ENDPOINT = "/$batch"

# Documented upper bound on requests per $batch call
DEFAULT_BATCH_SIZE = 20


@dataclass
class BatchRequest:
    """
    One request inside a batch envelope.

    Attributes:
        endpoint: Path relative to the version segment, e.g. "/me"
        id: Correlation identifier, unique within one batch
        method: HTTP verb
        headers: Request headers
        params: Query parameters, appended to ``url``
        body: Payload, camel-cased when serialized
        depends_on: Id of an earlier request that must run first
        url: Escaped endpoint with query string
    """

    endpoint: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    method: HttpMethod = HttpMethod.GET
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    body: Optional[Dict[str, Any]] = None
    depends_on: Optional[str] = None
    url: str = field(init=False)

    def __post_init__(self):
        """Validate the verb, build the URL and fix up headers."""
        self.method = HttpMethod.parse(self.method)
        self.url = batch_url(self.endpoint, self.params)

        headers = dict(self.headers or {})
        if self.body is not None:
            # Members with a body must declare JSON themselves in the envelope
            headers = merge_headers(headers, {
                "Accept": JSON_MEDIA_TYPE,
                "Content-Type": JSON_MEDIA_TYPE,
            })
        self.headers = headers

    def to_envelope_entry(self, formatter: BodyFormatter) -> dict:
        """Serialize into an entry of the ``requests`` array."""
        entry: Dict[str, Any] = {
            "id": self.id,
            "url": self.url,
            "method": self.method.value,
        }
        if self.headers:
            entry["headers"] = dict(self.headers)
        if self.body is not None:
            body = formatter.format(self.body, self.method)
            if body is not None:
                entry["body"] = body
        if self.depends_on:
            entry["dependsOn"] = [self.depends_on]

        return entry


@dataclass
class BatchResult:
    """A batched request paired with the sub-response answering it."""

    request: BatchRequest
    response: GraphObject

    @property
    def status(self) -> Optional[int]:
        return self.response.get("status")

    @property
    def body(self) -> Any:
        return self.response.get("body")


class Batch:
    """
    Accumulates requests and executes them through ``$batch``.

    Requests are submitted in the order they were added, in chunks of at
    most ``size``, one chunk after the other. A dependency can only be
    honoured inside a chunk, so the first request of every chunk is sent
    without one.

    Not thread-safe: callers adding requests from several threads must
    synchronize themselves.
    """

    def __init__(
        self,
        graph: "Graph",
        token: Optional[str] = None,
        size: int = DEFAULT_BATCH_SIZE,
    ):
        if size < 1:
            raise ValueError(f"Batch size must be at least 1, got {size}")

        self.graph = graph
        self.token = token
        self.size = size
        self.requests: List[BatchRequest] = []
        self.results: Optional[List[BatchResult]] = None

    def add(
        self,
        endpoint: str,
        id: Optional[str] = None,
        method: Union[str, HttpMethod] = HttpMethod.GET,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        depends_on: Optional[str] = None,
    ) -> BatchRequest:
        """
        Queue a request.

        Args:
            endpoint: Path relative to the version segment
            id: Correlation identifier; a UUID is generated if omitted
            method: HTTP verb
            headers: Request headers
            params: Query parameters
            body: Payload for POST, PUT and PATCH
            depends_on: Id of an earlier request in the batch

        Returns:
            The queued request

        Raises:
            InvalidMethodError: If the verb is not allowed
        """
        request = BatchRequest(
            endpoint,
            id=id or str(uuid.uuid4()),
            method=method,
            headers=dict(headers or {}),
            params=dict(params) if params is not None else None,
            body=dict(body) if body is not None else None,
            depends_on=depends_on,
        )
        self.requests.append(request)
        return request

    def chunks(self) -> List[List[BatchRequest]]:
        """Split queued requests into consecutive groups of at most ``size``."""
        return [
            self.requests[start:start + self.size]
            for start in range(0, len(self.requests), self.size)
        ]

    def execute(self) -> List[BatchResult]:
        """
        Submit every queued request.

        Returns:
            Results in chunk order, then in the order the server answered
            within each chunk

        Raises:
            BatchError: If a chunk fails; ``results`` holds what earlier
                chunks returned
            UnknownStatusError: On a status code outside 200-599
        """
        results: List[BatchResult] = []
        chunks = self.chunks()

        for index, chunk in enumerate(chunks):
            results.extend(self._execute_chunk(index, chunk, results))

        logger.info(
            "batch_executed",
            requests=len(self.requests),
            chunks=len(chunks),
            results=len(results),
        )
        self.results = results
        return results

    def _execute_chunk(
        self,
        index: int,
        chunk: List[BatchRequest],
        completed: List[BatchResult],
    ) -> List[BatchResult]:
        requests_by_id = {request.id: request for request in chunk}

        first = chunk[0]
        if first.depends_on:
            logger.debug(
                "batch_dependency_dropped",
                request_id=first.id,
                depends_on=first.depends_on,
            )
            first.depends_on = None

        body = {
            "requests": [
                request.to_envelope_entry(self.graph.body_formatter)
                for request in chunk
            ],
        }

        try:
            response = self.graph.call(
                BATCH_ENDPOINT,
                token=self.token,
                method=HttpMethod.POST,
                body=body,
            )
        except GraphError as e:
            raise BatchError(e, results=list(completed)) from e

        if isinstance(response, GraphError):
            raise BatchError(response, results=list(completed))

        logger.debug("batch_chunk_submitted", chunk=index, size=len(chunk))

        responses = response.get("responses") if isinstance(response, GraphObject) else None
        results = []
        for current in responses or []:
            request = requests_by_id.get(current.get("id"))
            if request is None:
                logger.warning("batch_response_unmatched", response_id=current.get("id"))
                continue
            results.append(BatchResult(request=request, response=current))

        return results

    def __enter__(self) -> "Batch":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if exc_type is None:
            self.execute()
