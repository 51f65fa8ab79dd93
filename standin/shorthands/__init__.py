"""
Standin Shorthands — route handlers that read straight from the store.
"""

from .get import (
    CollectionOfKeys,
    GetShorthand,
    Inferred,
    KeySpec,
    ShorthandRequest,
    SingleKey,
    key_spec,
)
from .utils import get_id_for_request, get_type_from_url, get_url_for_request

__all__ = [
    "CollectionOfKeys",
    "GetShorthand",
    "Inferred",
    "KeySpec",
    "ShorthandRequest",
    "SingleKey",
    "key_spec",
    "get_id_for_request",
    "get_type_from_url",
    "get_url_for_request",
]
