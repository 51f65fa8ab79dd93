"""
Standin Utils Package

Utility modules for the data layer:
- inflector: Pluralization of model type names into collection names
- urls: URL path helpers used by the request shorthands
"""

from .inflector import is_singular, pluralize, singularize
from .urls import normalize_path, path_segments, strip_query

__all__ = [
    "is_singular",
    "pluralize",
    "singularize",
    "normalize_path",
    "path_segments",
    "strip_query",
]
