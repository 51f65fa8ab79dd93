"""
GET shorthands — build a response payload straight from the store.

A route declares what it serves with a key argument, classified once when
the handler is built:

    GetShorthand("contacts")                  # SingleKey
    GetShorthand("contact")                   # SingleKey, by :id
    GetShorthand(["contact", "addresses"])    # CollectionOfKeys
    GetShorthand(None)                        # Inferred from the URL

``handle(db, request)`` returns plain data, never model instances:

    handler = GetShorthand("contact")
    handler.handle(db, ShorthandRequest("/contacts/1", params={"id": "1"}))
    # {"contact": {"id": 1, "name": "Link"}}

A collection missing from the store is reported at error level and its key
maps to ``None``; the handler keeps going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from ..db.collection import DbCollection
from ..db.engine import Db
from ..utils.inflector import is_singular, pluralize, singularize
from .utils import get_id_for_request, get_ids_param, get_type_from_url, get_url_for_request

logger = logging.getLogger("standin.shorthands")

__all__ = [
    "CollectionOfKeys",
    "GetShorthand",
    "Inferred",
    "KeySpec",
    "ShorthandRequest",
    "SingleKey",
    "key_spec",
]


@dataclass
class ShorthandRequest:
    """
    The parts of a request the shorthands read.

    Attributes:
        url: Request URL, query string allowed
        params: Route parameters (``{"id": "1"}`` for ``/contacts/:id``)
        query_params: Parsed query string
    """
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    query_params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SingleKey:
    """One key; a singular key reads one record by id."""
    key: str


@dataclass(frozen=True)
class CollectionOfKeys:
    """
    Several keys served together.

    ``owner`` is the key whose record is found by id; keys after it are
    filtered to the records pointing at that owner. It defaults to the
    first key that is its own singular.
    """
    keys: tuple
    owner: Optional[str] = None

    def __post_init__(self):
        if not self.keys:
            raise ValueError("CollectionOfKeys needs at least one key")
        object.__setattr__(self, "keys", tuple(self.keys))
        if self.owner is None:
            owner = next((key for key in self.keys if is_singular(key)), None)
            object.__setattr__(self, "owner", owner)
        elif self.owner not in self.keys:
            raise ValueError(f"Owner {self.owner!r} is not one of {self.keys!r}")


@dataclass(frozen=True)
class Inferred:
    """Key taken from the request URL."""


KeySpec = Union[SingleKey, CollectionOfKeys, Inferred]


def key_spec(value: Union[None, str, Sequence[str], KeySpec]) -> KeySpec:
    """Classify a route's key argument."""
    if isinstance(value, (SingleKey, CollectionOfKeys, Inferred)):
        return value
    if value is None:
        return Inferred()
    if isinstance(value, str):
        return SingleKey(value)
    if isinstance(value, (list, tuple)):
        return CollectionOfKeys(tuple(value))
    raise TypeError(f"Unsupported shorthand key: {value!r}")


class GetShorthand:
    """
    Handler for a GET route.

    Args:
        spec: Key argument, classified with :func:`key_spec`
        coalesce: Honor ``?ids=`` on collection routes
    """

    def __init__(self, spec: Union[None, str, Sequence[str], KeySpec] = None, *, coalesce: bool = False):
        self.spec = key_spec(spec)
        self.coalesce = coalesce

    def handle(self, db: Db, request: ShorthandRequest) -> Dict[str, Any]:
        if isinstance(self.spec, SingleKey):
            return self._single(db, request, self.spec)
        if isinstance(self.spec, CollectionOfKeys):
            return self._many(db, request, self.spec)
        return self._inferred(db, request)

    __call__ = handle

    # ── Variants ─────────────────────────────────────────────────────

    def _single(self, db: Db, request: ShorthandRequest, spec: SingleKey) -> Dict[str, Any]:
        collection = self._collection(db, request, pluralize(spec.key))
        return {spec.key: self._read(collection, request)}

    def _many(self, db: Db, request: ShorthandRequest, spec: CollectionOfKeys) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        owner: Optional[Dict[str, Any]] = None
        owner_seen = False

        for key in spec.keys:
            collection = self._collection(db, request, pluralize(key))

            if owner_seen:
                if collection is None:
                    data[key] = None
                elif owner is None:
                    data[key] = []
                else:
                    query = {f"{singularize(spec.owner)}_id": owner["id"]}
                    data[key] = collection.where(query)
            elif key == spec.owner:
                owner_seen = True
                owner = collection.find(get_id_for_request(request)) if collection is not None else None
                data[key] = owner
            else:
                data[key] = collection.all() if collection is not None else None

        return data

    def _inferred(self, db: Db, request: ShorthandRequest) -> Dict[str, Any]:
        record_id = get_id_for_request(request)
        type_name = get_type_from_url(get_url_for_request(request), record_id is not None)
        collection_name = pluralize(type_name)
        collection = self._collection(db, request, collection_name)

        if record_id is not None:
            return {type_name: collection.find(record_id) if collection is not None else None}
        return {collection_name: self._read(collection, request)}

    # ── Helpers ──────────────────────────────────────────────────────

    def _read(self, collection: Optional[DbCollection], request: ShorthandRequest) -> Any:
        if collection is None:
            return None

        record_id = get_id_for_request(request)
        if record_id is not None:
            return collection.find(record_id)

        ids = get_ids_param(request) if self.coalesce else None
        if ids:
            return collection.find(ids)
        return collection.all()

    def _collection(self, db: Db, request: ShorthandRequest, name: str) -> Optional[DbCollection]:
        if db.has_collection(name):
            return db.collection(name)

        logger.error(
            f"The route handler for {request.url} is requesting data from the "
            f"{name} collection, but that collection doesn't exist. To create it, "
            f"seed it with Db.load_data() or a fixture file."
        )
        return None

    def __repr__(self) -> str:
        return f"<GetShorthand {self.spec!r} coalesce={self.coalesce}>"
