"""
Standin Model — a live wrapper around one record.

Model definitions are plain subclasses that declare associations::

    class Address(Model):
        user = belongs_to()

    class User(Model):
        addresses = has_many()

    schema.register_models({"user": User, "address": Address})

Registration derives a schema-bound subclass carrying the generated
accessors (see ``standin.models.associations``). Instances are obtained
from the schema's per-type manager, never by calling the definition
directly:

    address = schema.address.new({"name": "123 Hyrule Way"})
    address.save()
    address.name = "12 Goron City"
    address.save()
    address.reload()
    address.destroy()

Attribute reads and writes are proxied to ``attrs``. An instance is *new*
until its first ``save()``; after that its ``id`` is fixed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional

from ..faults.domains import InvalidIdentifierMutationFault, RecordNotFoundFault

if TYPE_CHECKING:
    from ..db.collection import DbCollection
    from .associations import Association
    from .schema import Schema

logger = logging.getLogger("standin.models")

__all__ = ["Model"]

_MISSING = object()


class Model:
    """
    Base class for model definitions.

    Class attributes set at registration:
        _schema: Owning schema
        _type_name: Registered type name (``"address"``)
        _collection_name: Backing collection (``"addresses"``)
        _associations: Bound association descriptors by accessor name
    """

    _schema: ClassVar[Optional[Schema]] = None
    _type_name: ClassVar[Optional[str]] = None
    _collection_name: ClassVar[Optional[str]] = None
    _associations: ClassVar[Dict[str, Association]] = {}

    def __init__(self, attrs: Optional[Dict[str, Any]] = None, *, saved: bool = False):
        if self._schema is None:
            raise TypeError(
                f"{type(self).__name__} is not registered with a schema; "
                f"use schema.<type>.new() to build instances"
            )

        self._is_new = not saved
        self._destroyed = False
        self._parents: Dict[str, Model] = {}
        self._children: Dict[str, List[Model]] = {}
        self._pending: Dict[str, List[Model]] = {}

        if saved:
            self._attrs: Dict[str, Any] = dict(attrs or {})
            self._init_associations()
        else:
            self._attrs = {}
            self._init_associations()
            for key, value in (attrs or {}).items():
                setattr(self, key, value)

    def _init_associations(self) -> None:
        for association in self._associations.values():
            association.initialize(self)

    # ── Attribute proxy ──────────────────────────────────────────────

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_"):
            attrs = self.__dict__.get("_attrs", {})
            if name in attrs:
                return attrs[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self._attrs[name] = value

    @property
    def attrs(self) -> Dict[str, Any]:
        """The live attribute mapping."""
        return self._attrs

    @property
    def id(self) -> Any:
        return self._attrs.get("id")

    @id.setter
    def id(self, value: Any) -> None:
        if not self._is_new and value != self._attrs.get("id"):
            raise InvalidIdentifierMutationFault(self._type_name, self._attrs.get("id"), value)
        self._attrs["id"] = value

    # ── State ────────────────────────────────────────────────────────

    def is_new(self) -> bool:
        return self._is_new

    def is_saved(self) -> bool:
        return not self._is_new and not self._destroyed

    def is_destroyed(self) -> bool:
        return self._destroyed

    def _collection(self) -> DbCollection:
        return self._schema.db.collection(self._collection_name)

    # ── Persistence ──────────────────────────────────────────────────

    def save(self) -> Model:
        """
        Insert or update the backing record.

        Foreign keys of saved in-memory parents are written first. On the
        first save, in-memory children are attached to the new id.

        Raises:
            RecordNotFoundFault: When the instance was destroyed
        """
        if self._destroyed:
            raise RecordNotFoundFault(
                self._type_name, self.id, reason="cannot save a destroyed record"
            )

        for association in self._associations.values():
            association.before_save(self)

        collection = self._collection()
        if self._is_new:
            record = collection.insert(self._attrs)
            self._attrs["id"] = record["id"]
            self._is_new = False
            logger.debug(f"Created {self._type_name} id={self.id}")
            for association in self._associations.values():
                association.after_create(self)
        else:
            collection.update(self.id, self._attrs)
            logger.debug(f"Saved {self._type_name} id={self.id}")

        return self

    def update(self, key_or_attrs: Any, value: Any = _MISSING) -> Model:
        """
        Set attributes and save.

        Accepts ``update({"name": "Link"})`` or ``update("name", "Link")``.
        """
        if value is _MISSING:
            changes = dict(key_or_attrs)
        else:
            changes = {key_or_attrs: value}

        for key, new_value in changes.items():
            setattr(self, key, new_value)
        return self.save()

    def destroy(self) -> None:
        """Remove the backing record. Loaded attributes stay readable."""
        if not self._is_new:
            self._collection().remove(self.id)
            logger.debug(f"Destroyed {self._type_name} id={self.id}")
        self._destroyed = True

    delete = destroy

    def reload(self) -> Model:
        """
        Replace local attributes with the stored record.

        Unsaved edits and in-memory associations are discarded.

        Raises:
            RecordNotFoundFault: New or destroyed instance, or the record
                was removed from the store
        """
        if self._is_new or self._destroyed:
            raise RecordNotFoundFault(self._type_name, self.id, reason="instance is not persisted")

        record = self._collection().find(self.id)
        if record is None:
            raise RecordNotFoundFault(self._type_name, self.id)

        self._attrs = record
        self._parents = {}
        self._children = {}
        self._pending = {}
        self._init_associations()
        return self

    # ── Representation ───────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._attrs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self._type_name == other._type_name and self._attrs == other._attrs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "new" if self._is_new else f"id={self.id!r}"
        return f"<{type(self).__name__} {self._type_name} {state}>"
