"""
Request header helpers.
"""

from typing import Mapping, Optional

JSON_MEDIA_TYPE = "application/json"


def merge_headers(
    headers: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
) -> dict:
    """
    Merge caller headers with overrides.

    Header names match case-insensitively, so a caller's ``accept`` is
    replaced by an override for ``Accept``. The caller's mapping is not modified.
    """
    replaced = {name.lower() for name in overrides}
    merged = {
        name: value
        for name, value in (headers or {}).items()
        if name.lower() not in replaced
    }
    merged.update(overrides)
    return merged
