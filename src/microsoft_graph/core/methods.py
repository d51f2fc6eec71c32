"""
HTTP methods accepted by the Graph client.
"""

from enum import Enum
from typing import Union

from microsoft_graph.core.errors import InvalidMethodError


class HttpMethod(str, Enum):
    """HTTP verbs the Graph API is called with."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """Whether requests with this verb carry a payload."""
        return self in BODY_METHODS

    @classmethod
    def parse(cls, value: Union[str, "HttpMethod"]) -> "HttpMethod":
        """
        Resolve a verb given in any casing.

        Raises:
            InvalidMethodError: If the verb is not one of the allowed methods
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidMethodError(f"`{value}` is not a valid HTTP method.") from None


BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})
