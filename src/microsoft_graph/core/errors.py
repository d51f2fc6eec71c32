"""
Exceptions raised by the Graph client.
"""

from typing import Any, List, Optional


class InvalidMethodError(ValueError):
    """Raised when a request uses a verb outside the allowed set."""
    pass


class GraphError(Exception):
    """
    A 4xx/5xx answer from the Graph API.

    Attributes:
        response: Parsed error body returned by the API, if any
        status_code: HTTP status code of the failed call
    """

    def __init__(
        self,
        message: str,
        response: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.response = response
        self.status_code = status_code


class BatchError(GraphError):
    """
    Raised when one chunk of a batch fails.

    Chunks submitted before the failure are not rolled back; their results
    are kept on ``results``.
    """

    def __init__(self, error: GraphError, results: Optional[List[Any]] = None):
        super().__init__(str(error), error.response, error.status_code)
        self.error = error
        self.results = results or []


class UnknownStatusError(RuntimeError):
    """Raised for a status code outside 200-599."""

    def __init__(self, status_code: int):
        super().__init__(f"Unknown status code: {status_code}")
        self.status_code = status_code


class GraphConnectionError(Exception):
    """Raised when the transport cannot reach the Graph API."""
    pass
