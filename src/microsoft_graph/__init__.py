"""
Microsoft Graph Client

A small client for the Microsoft Graph REST API.
Calls are authenticated with a bearer token, payload keys are camel-cased on
the way out and response keys snake-cased on the way in. Requests can be
batched into $batch round trips of up to 20 requests each.
"""

__version__ = "0.1.0"

from microsoft_graph.core.client import Graph
from microsoft_graph.core.batch import Batch, BatchRequest, BatchResult
from microsoft_graph.core.errors import BatchError, GraphError, UnknownStatusError
from microsoft_graph.core.methods import HttpMethod

__all__ = [
    "Graph",
    "Batch",
    "BatchRequest",
    "BatchResult",
    "BatchError",
    "GraphError",
    "UnknownStatusError",
    "HttpMethod",
]
