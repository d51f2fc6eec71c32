"""
URL helpers for Graph requests.
"""

from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

# Reserved characters that stay literal in a request path
SAFE_CHARACTERS = "-_.!~*'();/?:@&=+$,[]"


def escape(path: str) -> str:
    """Percent-encode everything in ``path`` except alphanumerics and reserved characters."""
    return quote(path, safe=SAFE_CHARACTERS)


def to_query(params: Mapping[str, Any]) -> str:
    """Serialize query parameters sorted by key, expanding sequences into repeated keys."""
    return urlencode(sorted(params.items()), doseq=True)


def build_url(host: str, version: str, endpoint: str) -> str:
    """
    Build the absolute URL of a versioned Graph endpoint.

    ``build_url("https://graph.microsoft.com", "1.0", "/me")`` gives
    ``https://graph.microsoft.com/v1.0/me``.
    """
    if endpoint.startswith("/"):
        endpoint = endpoint[1:]
    return f"{host.rstrip('/')}/{escape(f'v{version}/{endpoint}')}"


def batch_url(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Relative URL of one batch member, with its query string appended."""
    url = escape(endpoint)
    if params:
        url = f"{url}?{to_query(params)}"
    return url
