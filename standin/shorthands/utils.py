"""
Request helpers shared by the shorthand handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from ..utils.inflector import singularize
from ..utils.urls import path_segments, strip_query

if TYPE_CHECKING:
    from .get import ShorthandRequest


def get_id_for_request(request: ShorthandRequest) -> Optional[Any]:
    """The ``:id`` route parameter, if any."""
    return request.params.get("id")


def get_url_for_request(request: ShorthandRequest) -> str:
    """Request URL without its query string."""
    return strip_query(request.url)


def get_type_from_url(url: str, has_id: bool = False) -> str:
    """
    Model type named by a URL.

    The last path segment names the collection; when the route carries an
    id, the segment before it does.

    Example:
        get_type_from_url("/api/contacts") -> "contact"
        get_type_from_url("/api/contacts/1", has_id=True) -> "contact"
    """
    segments = path_segments(url)
    if has_id:
        segments = segments[:-1]
    if not segments:
        raise ValueError(f"Cannot infer a model type from URL {url!r}")
    return singularize(segments[-1])


def get_ids_param(request: ShorthandRequest) -> Optional[List[Any]]:
    """
    ``ids`` query parameter as a list.

    Accepts a list (``?ids[]=1&ids[]=2`` parsed upstream) or a comma
    separated string (``?ids=1,2``).
    """
    ids = request.query_params.get("ids")
    if not ids:
        return None
    if isinstance(ids, str):
        return [part for part in ids.split(",") if part]
    return list(ids)
