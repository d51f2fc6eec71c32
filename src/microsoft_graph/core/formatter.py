"""
Outgoing payload formatting.

Graph resources use camelCase property names; callers write snake_case.
"""

from typing import Any, Mapping, Optional, Union

from microsoft_graph.core.methods import HttpMethod


class BodyFormatter:
    """
    Renames the top-level keys of a request body to camelCase.

    Only mutation verbs (POST, PUT, PATCH) send a body; for any other verb
    ``format`` returns None. Values are passed through untouched.
    """

    def format(
        self,
        body: Optional[Mapping[Any, Any]],
        method: Union[str, HttpMethod],
    ) -> Optional[dict]:
        if not HttpMethod.parse(method).has_body:
            return None
        if body is None:
            return None

        return {self.camelize(key): value for key, value in body.items()}

    __call__ = format

    @staticmethod
    def camelize(key: Any) -> str:
        """
        Convert ``number_format`` to ``numberFormat``.

        Keys without an underscore are returned as-is. Slash-separated
        components are camel-cased one by one and re-joined with ``/``.
        """
        string = str(key)
        if "_" not in string:
            return string

        return "/".join(_camelize_segment(segment) for segment in string.split("/"))


def _camelize_segment(segment: str) -> str:
    pieces = [piece for piece in segment.split("_") if piece]
    if not pieces:
        return ""

    head, *tail = pieces
    camel = head + "".join(piece[0].upper() + piece[1:] for piece in tail)
    return camel[0].lower() + camel[1:]
