"""
HTTP transport layer.

The Graph client talks to the network only through a Transport, so tests
and applications can swap in their own.
"""

from microsoft_graph.transport.interface import Transport, TransportResponse
from microsoft_graph.transport.httpx_transport import HttpxTransport

__all__ = [
    "Transport",
    "TransportResponse",
    "HttpxTransport",
]
