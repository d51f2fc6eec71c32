"""
Core client components.

This module contains the Graph client, payload formatting, response parsing
and JSON batching.
"""

from microsoft_graph.core.batch import Batch, BatchRequest, BatchResult
from microsoft_graph.core.client import Graph, raise_error, return_error
from microsoft_graph.core.errors import (
    BatchError,
    GraphConnectionError,
    GraphError,
    InvalidMethodError,
    UnknownStatusError,
)
from microsoft_graph.core.formatter import BodyFormatter
from microsoft_graph.core.methods import HttpMethod
from microsoft_graph.core.response import GraphObject, ResponseParser

__all__ = [
    "Batch",
    "BatchRequest",
    "BatchResult",
    "Graph",
    "raise_error",
    "return_error",
    "BatchError",
    "GraphConnectionError",
    "GraphError",
    "InvalidMethodError",
    "UnknownStatusError",
    "BodyFormatter",
    "HttpMethod",
    "GraphObject",
    "ResponseParser",
]
