"""
Response parsing.

Graph answers are JSON documents with camelCase keys. They are parsed into
GraphObject trees whose keys are snake_case, so ``user.display_name`` reads
the ``displayName`` property.
"""

import json
import re
from typing import Any, Dict, Iterator, Optional

UTF8_BOM = b"\xef\xbb\xbf"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def underscore(key: Any) -> str:
    """
    Convert a wire key to snake_case.

    ``displayName`` -> ``display_name``, ``HTTPCode`` -> ``http_code``,
    ``Content-Type`` -> ``content_type``. Dots and ``@`` are kept, so
    ``@odata.context`` is left alone.
    """
    word = str(key).replace("::", "/")
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


class GraphObject:
    """
    Attribute-addressable view of a JSON object.

    Keys are normalized with ``underscore`` when stored and when looked up,
    so both ``obj.display_name`` and ``obj["displayName"]`` work. Nested
    objects, including those inside lists, are GraphObjects too.

    Instances are read-only once built.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        object.__setattr__(self, "_data", {})
        for key, value in (data or {}).items():
            self._set(key, value)

    @staticmethod
    def format(key: Any) -> str:
        return underscore(key)

    def _set(self, key: Any, value: Any) -> None:
        self._data[self.format(key)] = _wrap(value)

    def __getattr__(self, name: str) -> Any:
        try:
            return object.__getattribute__(self, "_data")[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} has no attribute {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __getitem__(self, key: Any) -> Any:
        return self._data[self.format(key)]

    def __contains__(self, key: Any) -> bool:
        return self.format(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __dir__(self):
        return [*super().__dir__(), *self._data]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GraphObject):
            return self._data == other._data
        if isinstance(other, dict):
            return self._data == GraphObject(other)._data
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._data.items())
        return f"{type(self).__name__}({fields})"

    def get(self, key: Any, default: Any = None) -> Any:
        return self._data.get(self.format(key), default)

    def to_dict(self) -> dict:
        """Convert back to plain dicts and lists (keys stay snake_case)."""
        return {key: _unwrap(value) for key, value in self._data.items()}


def _wrap(value: Any) -> Any:
    if isinstance(value, GraphObject):
        return value
    if isinstance(value, dict):
        return GraphObject(value)
    if isinstance(value, list):
        return [_wrap(item) for item in value]
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, GraphObject):
        return value.to_dict()
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value


class ResponseParser:
    """
    Turns raw response bytes into a GraphObject tree.

    A leading UTF-8 byte-order mark is stripped first; some Graph endpoints
    (notably Excel workbooks) send one.
    """

    def parse(self, content: bytes, content_type: Optional[str] = None) -> Any:
        """
        Parse a response body.

        Args:
            content: Raw body bytes
            content_type: Value of the Content-Type header, if any

        Returns:
            None for an empty body, a GraphObject (or list) for JSON,
            the raw bytes for anything else
        """
        if content.startswith(UTF8_BOM):
            content = content[len(UTF8_BOM):]

        if not content.strip():
            return None

        if not self._is_json(content, content_type):
            return content

        return json.loads(content.decode("utf-8"), object_hook=GraphObject)

    __call__ = parse

    @staticmethod
    def _is_json(content: bytes, content_type: Optional[str]) -> bool:
        media_type = (content_type or "").split(";", 1)[0].strip().lower()
        if not media_type:
            return content.lstrip()[:1] in (b"{", b"[")
        return media_type == "application/json" or media_type.endswith("+json")
