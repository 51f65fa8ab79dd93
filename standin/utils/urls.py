"""
URL Utilities for the request shorthands.
"""

from typing import List


def normalize_path(path: str) -> str:
    """Normalize a URL path."""
    if not path:
        return "/"

    # Replace multiple slashes
    while "//" in path:
        path = path.replace("//", "/")

    return path


def strip_query(url: str) -> str:
    """Drop the query string and fragment from ``url``."""
    return url.split("?", 1)[0].split("#", 1)[0]


def path_segments(url: str) -> List[str]:
    """
    Split the path of ``url`` into non-empty segments.

    Example:
        path_segments("/api/contacts/1?x=2") -> ["api", "contacts", "1"]
    """
    path = normalize_path(strip_query(url))
    return [segment for segment in path.strip("/").split("/") if segment]
