"""
Standin Db — the in-memory collection store.

A ``Db`` holds named collections of records and is the single source of
truth a ``Schema`` reads from and writes to. Each ``Db`` is an explicitly
constructed object: there is no process-wide default instance, so
independent test scenarios never share state.

Usage:
    db = Db({"users": [{"id": 1, "name": "Link"}], "addresses": []})
    db.users.find(1)
    db["addresses"].insert({"name": "123 Hyrule Way"})
    db.load_data({"users": [{"name": "Zelda"}]})
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..faults.domains import UnknownCollectionFault
from .collection import DbCollection, Record

logger = logging.getLogger("standin.db")

__all__ = ["Db"]


class Db:
    """
    Named collections of records.

    Args:
        initial_data: Optional seed data, ``{collection_name: [records]}``
        strict: Raise ``UnknownCollectionFault`` when an unknown collection
            is looked up. When False, unknown collections are created empty
            on first lookup and a warning is logged.
    """

    def __init__(self, initial_data: Optional[Dict[str, List[Record]]] = None, *, strict: bool = True):
        self._collections: Dict[str, DbCollection] = {}
        self.strict = strict
        if initial_data:
            self.load_data(initial_data)

    # ── Collections ──────────────────────────────────────────────────

    def create_collection(self, name: str, initial: Optional[Iterable[Record]] = None) -> DbCollection:
        """
        Create collection ``name`` if it does not exist yet.

        Records in ``initial`` are inserted either way.
        """
        collection = self._collections.get(name)
        if collection is None:
            collection = DbCollection(name)
            self._collections[name] = collection
            logger.debug(f"Created collection '{name}'")
        if initial:
            collection.insert(list(initial))
        return collection

    def create_collections(self, names: Iterable[str]) -> None:
        for name in names:
            self.create_collection(name)

    def has_collection(self, name: str) -> bool:
        return name in self._collections

    @property
    def collection_names(self) -> List[str]:
        return list(self._collections)

    def collection(self, name: str) -> DbCollection:
        """
        Get collection by name.

        Raises:
            UnknownCollectionFault: When ``name`` was never created and the
                store is strict
        """
        collection = self._collections.get(name)
        if collection is not None:
            return collection

        if self.strict:
            raise UnknownCollectionFault(name)

        logger.warning(
            f"Collection '{name}' does not exist; creating it empty. "
            f"Seed it with load_data() to silence this warning."
        )
        return self.create_collection(name)

    def __getitem__(self, name: str) -> DbCollection:
        return self.collection(name)

    def __getattr__(self, name: str) -> DbCollection:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return self.collection(name)

    def __contains__(self, name: str) -> bool:
        return self.has_collection(name)

    # ── Bulk data ────────────────────────────────────────────────────

    def load_data(self, data: Dict[str, List[Record]]) -> None:
        """
        Seed collections from ``{collection_name: [records]}``.

        Collections are created as needed; records are appended to any
        already present.
        """
        for name, records in data.items():
            self.create_collection(name, records)
        logger.info(
            "Loaded data: "
            + ", ".join(f"{name}={len(records)}" for name, records in data.items())
        )

    def empty_data(self) -> None:
        """Remove every record from every collection. Collections survive."""
        for collection in self._collections.values():
            collection.remove()

    def dump(self) -> Dict[str, List[Record]]:
        """Copies of all records, keyed by collection name."""
        return {name: collection.all() for name, collection in self._collections.items()}

    def __repr__(self) -> str:
        return f"<Db collections={self.collection_names!r}>"
