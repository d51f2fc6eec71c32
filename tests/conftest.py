"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

import pytest

from microsoft_graph.config import GraphConfig, set_config
from microsoft_graph.core.client import Graph
from microsoft_graph.transport.interface import Parser, Transport, TransportResponse


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> GraphConfig:
    """Create a test configuration."""
    return GraphConfig(
        token="T",
        version="1.0",
        host="https://graph.microsoft.com",
        batch_size=20,
        timeout_seconds=5.0,
        log_level="DEBUG",
    )


@pytest.fixture(autouse=True)
def global_config(test_config):
    """Install the test configuration globally for the duration of a test."""
    set_config(test_config)
    yield test_config
    set_config(None)


# ============================================================================
# Recording Transport
# ============================================================================

@dataclass
class RecordedRequest:
    """A request captured by the recording transport."""
    method: str
    url: str
    headers: Dict[str, str]
    params: Optional[Dict[str, Any]] = None
    content: Optional[bytes] = None

    @property
    def json(self) -> Any:
        return json.loads(self.content) if self.content is not None else None


class RecordingTransport(Transport):
    """
    Mock transport for testing.

    Records every request and answers with a fixed status and JSON payload,
    or with whatever ``responder`` returns. Payloads go through the client's
    parser like a real response would.
    """

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        responder: Optional[Callable[[RecordedRequest], tuple]] = None,
    ):
        self.status_code = status_code
        self.payload = payload
        self.responder = responder
        self.requests: List[RecordedRequest] = []
        self.closed = False

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
        recorded = RecordedRequest(
            method=method,
            url=url,
            headers=dict(headers),
            params=dict(params) if params else None,
            content=content,
        )
        self.requests.append(recorded)

        if self.responder is not None:
            status_code, payload = self.responder(recorded)
        else:
            status_code, payload = self.status_code, self.payload

        body = json.dumps(payload).encode("utf-8") if payload is not None else b""
        data = parser(body, "application/json") if parser else body
        return TransportResponse(status_code=status_code, data=data)

    def close(self) -> None:
        self.closed = True


def batch_responder(
    status_code: int = 200,
    reverse: bool = False,
    extra_ids: Optional[List[str]] = None,
) -> Callable[[RecordedRequest], tuple]:
    """
    Fake $batch endpoint answering every submitted request.

    Each sub-response echoes the request's method and url in its body.
    """
    def respond(request: RecordedRequest) -> tuple:
        entries = request.json["requests"]
        responses = [
            {
                "id": entry["id"],
                "status": status_code,
                "headers": {"Content-Type": "application/json"},
                "body": {"requestMethod": entry["method"], "requestUrl": entry["url"]},
            }
            for entry in entries
        ]
        if reverse:
            responses.reverse()
        for response_id in extra_ids or []:
            responses.append({"id": response_id, "status": 200, "body": {}})
        return 200, {"responses": responses}

    return respond


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a recording transport answering 200 with an empty object."""
    return RecordingTransport(payload={})


@pytest.fixture
def batch_transport() -> RecordingTransport:
    """Create a recording transport acting as the $batch endpoint."""
    return RecordingTransport(responder=batch_responder())


@pytest.fixture
def graph(transport, test_config) -> Graph:
    """Create a client over the recording transport."""
    return Graph(token="T", config=test_config, transport=transport)


@pytest.fixture
def batch_graph(batch_transport, test_config) -> Graph:
    """Create a client over the fake $batch endpoint."""
    return Graph(token="T", config=test_config, transport=batch_transport)
