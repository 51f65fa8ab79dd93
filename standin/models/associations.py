"""
Standin Associations — ``belongs_to`` and ``has_many`` descriptors.

A descriptor declared on a model definition is inert until the schema
registers the definition. Registration binds it to its accessor name and
owner type and asks it for the accessors to install on the generated
model class:

    belongs_to  (``user = belongs_to()`` on ``address``)
        user            property, parent model or None
        user_id         property, the foreign key column
        new_user()      build an unsaved parent and assign it
        create_user()   create a parent, assign it, persist the foreign key

    has_many  (``addresses = has_many()`` on ``user``)
        addresses         property, list of child models
        address_ids       property, list of child ids
        new_address()     build an unsaved child pointing at the owner
        create_address()  create a child pointing at the owner

The child side of a ``has_many`` stores the foreign key
``<owner type>_id``.

Foreign keys are written only when both sides are saved. Until then the
in-memory reference held on the instance is what the accessors return.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from ..faults.domains import AssociationFault
from ..utils.inflector import singularize
from .base import Model

if TYPE_CHECKING:
    from .manager import ModelManager

logger = logging.getLogger("standin.models.associations")

__all__ = ["Association", "BelongsTo", "HasMany", "belongs_to", "has_many"]


def _same_id(left: Any, right: Any) -> bool:
    return left is not None and right is not None and str(left) == str(right)


def _method(name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    def accessor(instance, attrs=None):
        return func(instance, attrs)

    accessor.__name__ = name
    accessor.__qualname__ = name
    return accessor


class Association:
    """
    Base descriptor.

    Args:
        type_name: Target model type. Defaults are derived from the
            accessor name by each subclass.
    """

    kind = "association"

    def __init__(self, type_name: Optional[str] = None):
        self.type_name = type_name
        self.key: Optional[str] = None
        self.owner_type: Optional[str] = None
        self.target: Optional[str] = None
        self.foreign_key: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.key = name

    def bind(self, key: str, owner_type: str) -> Association:
        """Return a copy bound to ``owner_type.key``."""
        bound = copy.copy(self)
        bound.key = key
        bound.owner_type = owner_type
        bound._configure()
        return bound

    def _configure(self) -> None:
        raise NotImplementedError

    def accessors(self) -> Dict[str, Any]:
        """Accessor name -> property or function to install on the model."""
        raise NotImplementedError

    # ── Lifecycle hooks ──────────────────────────────────────────────

    def initialize(self, instance: Model) -> None:
        pass

    def before_save(self, instance: Model) -> None:
        pass

    def after_create(self, instance: Model) -> None:
        pass

    # ── Helpers ──────────────────────────────────────────────────────

    def _target(self, instance: Model) -> ModelManager:
        return instance._schema.manager(self.target)

    def _check(self, instance: Model, value: Any) -> Model:
        if not isinstance(value, Model) or value._type_name != self.target:
            raise AssociationFault(
                instance._type_name,
                self.key,
                f"expected a {self.target} model, got {value!r}",
            )
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.owner_type}.{self.key} -> {self.target}>"


class BelongsTo(Association):
    """The owner holds a foreign key ``<key>_id`` to one parent."""

    kind = "belongs_to"

    def _configure(self) -> None:
        self.target = self.type_name or self.key
        self.foreign_key = f"{self.key}_id"

    def accessors(self) -> Dict[str, Any]:
        return {
            self.key: property(self.get, self.set),
            self.foreign_key: property(self.get_id, self.set_id),
            f"new_{self.key}": _method(f"new_{self.key}", self.build),
            f"create_{self.key}": _method(f"create_{self.key}", self.create),
        }

    def initialize(self, instance: Model) -> None:
        instance._attrs.setdefault(self.foreign_key, None)

    def before_save(self, instance: Model) -> None:
        self._sync(instance)

    def _sync(self, instance: Model) -> None:
        # An in-memory parent saved after assignment now has an id to point at.
        parent = instance._parents.get(self.key)
        if parent is not None and parent.is_saved():
            instance._attrs[self.foreign_key] = parent.id

    def get(self, instance: Model) -> Optional[Model]:
        self._sync(instance)
        parent_id = instance._attrs.get(self.foreign_key)
        if parent_id is not None:
            return self._target(instance).find(parent_id)
        return instance._parents.get(self.key)

    def set(self, instance: Model, parent: Optional[Model]) -> None:
        if parent is None:
            instance._parents.pop(self.key, None)
            instance._attrs[self.foreign_key] = None
            return

        self._check(instance, parent)
        instance._parents[self.key] = parent
        instance._attrs[self.foreign_key] = None if parent.is_new() else parent.id

    def get_id(self, instance: Model) -> Any:
        self._sync(instance)
        return instance._attrs.get(self.foreign_key)

    def set_id(self, instance: Model, parent_id: Any) -> None:
        instance._parents.pop(self.key, None)
        instance._attrs[self.foreign_key] = parent_id

    def build(self, instance: Model, attrs: Optional[Dict[str, Any]] = None) -> Model:
        parent = self._target(instance).new(attrs)
        self.set(instance, parent)
        return parent

    def create(self, instance: Model, attrs: Optional[Dict[str, Any]] = None) -> Model:
        parent = self._target(instance).create(attrs)
        self.set(instance, parent)
        if not instance.is_new():
            instance._collection().update(instance.id, {self.foreign_key: parent.id})
        return parent


class HasMany(Association):
    """Children of the target type hold ``<owner type>_id``."""

    kind = "has_many"

    def _configure(self) -> None:
        self.singular = singularize(self.key)
        self.target = self.type_name or self.singular
        self.foreign_key = f"{self.owner_type}_id"
        self.ids_key = f"{self.singular}_ids"

    def accessors(self) -> Dict[str, Any]:
        return {
            self.key: property(self.get, self.set),
            self.ids_key: property(self.get_ids, self.set_ids),
            f"new_{self.singular}": _method(f"new_{self.singular}", self.build),
            f"create_{self.singular}": _method(f"create_{self.singular}", self.create),
        }

    def after_create(self, instance: Model) -> None:
        if self.key in instance._pending:
            self._replace(instance, instance._pending.pop(self.key))

        unsaved = []
        for child in instance._children.pop(self.key, []):
            if child.is_destroyed():
                continue
            setattr(child, self.foreign_key, instance.id)
            if child.is_new():
                unsaved.append(child)
            else:
                child._collection().update(child.id, {self.foreign_key: instance.id})
        instance._children[self.key] = unsaved

    def get(self, instance: Model) -> List[Model]:
        if instance.is_new():
            return instance._pending.get(self.key, []) + instance._children.get(self.key, [])

        persisted = self._target(instance).where(self._owned_by(instance))
        unsaved = [
            child for child in self._unsaved(instance)
            if _same_id(child._attrs.get(self.foreign_key), instance.id)
        ]
        return persisted + unsaved

    def set(self, instance: Model, children: Optional[Iterable[Model]]) -> None:
        children = [self._check(instance, child) for child in (children or [])]

        if instance.is_new():
            # Replayed as a replacement by after_create.
            instance._pending[self.key] = children
            instance._children[self.key] = []
            return

        self._replace(instance, children)
        instance._children[self.key] = []

    def get_ids(self, instance: Model) -> List[Any]:
        return [child.id for child in self.get(instance)]

    def set_ids(self, instance: Model, ids: Optional[Iterable[Any]]) -> None:
        self.set(instance, self._target(instance).find(list(ids or [])))

    def build(self, instance: Model, attrs: Optional[Dict[str, Any]] = None) -> Model:
        child = self._target(instance).new(attrs)
        setattr(child, self.foreign_key, instance.id)
        children = instance._children.get(self.key, []) if instance.is_new() else self._unsaved(instance)
        instance._children[self.key] = children + [child]
        return child

    def create(self, instance: Model, attrs: Optional[Dict[str, Any]] = None) -> Model:
        child = self._target(instance).new(attrs)
        setattr(child, self.foreign_key, instance.id)
        child.save()
        if instance.is_new():
            instance._children.setdefault(self.key, []).append(child)
        return child

    def _owned_by(self, instance: Model) -> Callable[[Dict[str, Any]], bool]:
        owner_id = instance.id
        return lambda record: _same_id(record.get(self.foreign_key), owner_id)

    def _unsaved(self, instance: Model) -> List[Model]:
        """Drop in-memory children of a saved owner that were saved or destroyed since."""
        children = [
            child for child in instance._children.get(self.key, [])
            if child.is_new() and not child.is_destroyed()
        ]
        instance._children[self.key] = children
        return children

    def _replace(self, instance: Model, children: List[Model]) -> None:
        """Make ``children`` the complete set of children of saved ``instance``."""
        collection = self._target(instance).collection
        kept = {str(child.id) for child in children if not child.is_new()}

        for record in collection.where(self._owned_by(instance)):
            if str(record["id"]) not in kept:
                collection.update(record["id"], {self.foreign_key: None})

        for child in children:
            if child.is_new():
                setattr(child, self.foreign_key, instance.id)
                child.save()
            else:
                record = collection.find(child.id)
                setattr(child, self.foreign_key, instance.id)
                if record is not None and not _same_id(record.get(self.foreign_key), instance.id):
                    collection.update(child.id, {self.foreign_key: instance.id})

        logger.debug(
            f"{self.owner_type} id={instance.id}: {self.key} replaced with "
            f"{[child.id for child in children]}"
        )


def belongs_to(type_name: Optional[str] = None) -> BelongsTo:
    """Declare a single parent. ``type_name`` defaults to the accessor name."""
    return BelongsTo(type_name)


def has_many(type_name: Optional[str] = None) -> HasMany:
    """Declare children. ``type_name`` defaults to the singular accessor name."""
    return HasMany(type_name)
