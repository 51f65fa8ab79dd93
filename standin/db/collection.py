"""
Standin DbCollection — an ordered, in-memory list of records.

A record is a plain ``dict`` of attributes. Every record in a collection
carries a unique ``id``; ids that are not supplied on insert are assigned
as ``max(existing integer ids) + 1``, starting at 1.

Records never leave the collection by reference: every read returns
copies and every write copies its input, so callers can mutate what they
get back without touching the store.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from ..faults.domains import (
    DuplicateIdentifierFault,
    InvalidIdentifierMutationFault,
    RecordNotFoundFault,
)

logger = logging.getLogger("standin.db.collection")

Record = Dict[str, Any]
Query = Union[Dict[str, Any], Callable[[Record], bool]]

__all__ = ["DbCollection", "Record", "Query"]


def _same_id(left: Any, right: Any) -> bool:
    """Ids coming from URLs are strings; compare on the string form."""
    return left is not None and right is not None and str(left) == str(right)


class DbCollection:
    """
    Named, ordered set of records for one entity type.

    Usage:
        users = DbCollection("users", [{"name": "Link"}])
        zelda = users.insert({"name": "Zelda"})      # {'name': 'Zelda', 'id': 2}
        users.find(2)                                 # copy of zelda
        users.where({"name": "Link"})                 # [{'name': 'Link', 'id': 1}]
        users.update(2, {"name": "Princess Zelda"})
        users.remove(1)
    """

    __slots__ = ("name", "_records")

    def __init__(self, name: str, initial: Optional[Iterable[Record]] = None):
        self.name = name
        self._records: List[Record] = []
        if initial:
            self.insert(list(initial))

    # ── Write API ────────────────────────────────────────────────────

    def insert(self, data: Union[Record, List[Record]]) -> Union[Record, List[Record]]:
        """
        Insert one record or a list of records.

        Returns a copy of each stored record, including its assigned id.

        Raises:
            DuplicateIdentifierFault: When a supplied id is already taken
        """
        if isinstance(data, list):
            return [self._insert_one(record) for record in data]
        return self._insert_one(data)

    def _insert_one(self, data: Record) -> Record:
        record = copy.deepcopy(dict(data))
        record_id = record.get("id")

        if record_id is None:
            record["id"] = self._next_id()
        elif self._index_of(record_id) is not None:
            raise DuplicateIdentifierFault(self.name, record_id)

        self._records.append(record)
        logger.debug(f"{self.name}: inserted id={record['id']}")
        return copy.deepcopy(record)

    def update(self, target: Any, attrs: Optional[Record] = None) -> Union[Record, List[Record]]:
        """
        Update records in place.

        The behavior depends on the arguments:
            * ``update(attrs)``: update every record, return the list.
            * ``update(id, attrs)``: update one record, return its copy.
            * ``update(query, attrs)``: update every record matching the
              equality mapping ``query``, return the list.

        Raises:
            RecordNotFoundFault: When a single id does not exist
            InvalidIdentifierMutationFault: When ``attrs`` would change an id
        """
        if attrs is None:
            return [self._update_record(record, target) for record in self._records]

        if isinstance(target, dict) or callable(target):
            return [self._update_record(record, attrs) for record in self._matching(target)]

        index = self._index_of(target)
        if index is None:
            raise RecordNotFoundFault(self.name, target, reason="cannot update a missing record")
        return self._update_record(self._records[index], attrs)

    def _update_record(self, record: Record, attrs: Record) -> Record:
        if "id" in attrs and not _same_id(attrs["id"], record["id"]):
            raise InvalidIdentifierMutationFault(self.name, record["id"], attrs["id"])

        for key, value in attrs.items():
            if key == "id":
                continue
            record[key] = copy.deepcopy(value)
        logger.debug(f"{self.name}: updated id={record['id']} keys={sorted(attrs)}")
        return copy.deepcopy(record)

    def remove(self, target: Any = None) -> None:
        """
        Remove records.

        ``remove()`` empties the collection, ``remove(id)`` drops one record
        and ``remove(query)`` drops every match. Removing a missing id is a
        no-op.
        """
        if target is None:
            self._records = []
        elif isinstance(target, dict) or callable(target):
            doomed = {id(record) for record in self._matching(target)}
            self._records = [r for r in self._records if id(r) not in doomed]
        else:
            self._records = [r for r in self._records if not _same_id(r["id"], target)]
        logger.debug(f"{self.name}: removed {target!r}")

    # ── Read API ─────────────────────────────────────────────────────

    def find(self, ids: Any) -> Union[Optional[Record], List[Record]]:
        """
        Find by id or list of ids.

        A single id returns the record copy or ``None``. A list returns the
        copies in the order requested; ids with no record are omitted.
        """
        if isinstance(ids, (list, tuple)):
            found = []
            for record_id in ids:
                index = self._index_of(record_id)
                if index is not None:
                    found.append(copy.deepcopy(self._records[index]))
            return found

        index = self._index_of(ids)
        if index is None:
            return None
        return copy.deepcopy(self._records[index])

    def where(self, query: Query) -> List[Record]:
        """
        Records matching ``query``.

        ``query`` is either an attribute mapping (every key must be strictly
        equal) or a predicate called with a copy of each record.
        """
        return [copy.deepcopy(record) for record in self._matching(query)]

    def all(self) -> List[Record]:
        """Copies of every record, in insertion order."""
        return copy.deepcopy(self._records)

    def first(self) -> Optional[Record]:
        return copy.deepcopy(self._records[0]) if self._records else None

    # ── Internals ────────────────────────────────────────────────────

    def _matching(self, query: Query) -> List[Record]:
        if callable(query):
            return [r for r in self._records if query(copy.deepcopy(r))]
        return [
            r for r in self._records
            if all(key in r and r[key] == value for key, value in query.items())
        ]

    def _index_of(self, record_id: Any) -> Optional[int]:
        for index, record in enumerate(self._records):
            if _same_id(record["id"], record_id):
                return index
        return None

    def _next_id(self) -> int:
        numeric = [r["id"] for r in self._records if isinstance(r["id"], int)]
        return max(numeric, default=0) + 1

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"<DbCollection {self.name!r} records={len(self._records)}>"
