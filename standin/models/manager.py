"""
Standin ModelManager — per-type factory and query access.

Every registered type gets one manager, reachable from the schema:

    schema.user.new({"name": "Link"})        # unsaved
    schema.user.create({"name": "Zelda"})    # saved
    schema.user.find(1)
    schema.user.find([1, 2])
    schema.user.where({"name": "Link"})
    schema.user.where(lambda record: record["age"] > 17)
    schema.user.all()

Queries read the backing collection and wrap every record in a fresh
model instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type, Union

if TYPE_CHECKING:
    from ..db.collection import DbCollection, Query
    from .base import Model
    from .schema import Schema


__all__ = ["ModelManager"]


class ModelManager:
    """
    Factory and finder for one registered model type.

    Args:
        schema: Owning schema
        type_name: Registered type name
        model_cls: Generated model class
    """

    def __init__(self, schema: Schema, type_name: str, model_cls: Type[Model]):
        self.schema = schema
        self.type_name = type_name
        self.model_cls = model_cls

    @property
    def collection_name(self) -> str:
        return self.model_cls._collection_name

    @property
    def collection(self) -> DbCollection:
        return self.schema.db.collection(self.collection_name)

    def _wrap(self, record: Dict[str, Any]) -> Model:
        return self.model_cls(record, saved=True)

    # ── Factory ──────────────────────────────────────────────────────

    def new(self, attrs: Optional[Dict[str, Any]] = None) -> Model:
        """Build an unsaved instance."""
        return self.model_cls(attrs)

    def create(self, attrs: Optional[Dict[str, Any]] = None) -> Model:
        """Build and save an instance."""
        return self.new(attrs).save()

    # ── Queries ──────────────────────────────────────────────────────

    def find(self, ids: Any) -> Union[Optional[Model], List[Model]]:
        """
        Find by id or list of ids.

        A single missing id returns None; missing ids in a list are
        omitted.
        """
        found = self.collection.find(ids)
        if isinstance(ids, (list, tuple)):
            return [self._wrap(record) for record in found]
        return self._wrap(found) if found is not None else None

    def where(self, query: Query) -> List[Model]:
        return [self._wrap(record) for record in self.collection.where(query)]

    def all(self) -> List[Model]:
        return [self._wrap(record) for record in self.collection.all()]

    def first(self) -> Optional[Model]:
        record = self.collection.first()
        return self._wrap(record) if record is not None else None

    def count(self) -> int:
        return len(self.collection)

    def __repr__(self) -> str:
        return f"<ModelManager {self.type_name!r} collection={self.collection_name!r}>"
