"""
Abstract interface for the HTTP transport.

Defines the contract the Graph client needs from whatever sends its requests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

# Parses (body bytes, content type) into the value handed back to callers
Parser = Callable[[bytes, Optional[str]], Any]


@dataclass
class TransportResponse:
    """Status code and parsed body of one HTTP exchange."""
    status_code: int
    data: Any = None


class Transport(ABC):
    """
    Abstract HTTP transport.

    Implementations send one request and hand the raw body to the supplied
    parser, so key normalization and BOM stripping happen the same way
    whichever HTTP library is underneath.
    """

    @abstractmethod
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
        """
        Send a request.

        Args:
            method: HTTP verb
            url: Absolute URL
            headers: Request headers
            params: Query parameters
            content: Encoded request body
            parser: Parser for the response body; raw bytes are returned without one

        Returns:
            The status code and parsed body

        Raises:
            GraphConnectionError: If the request could not be sent
        """
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
