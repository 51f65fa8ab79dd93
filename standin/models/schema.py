"""
Standin Schema — registry of model types bound to one ``Db``.

    db = Db({"users": [{"id": 1, "name": "Link"}]})
    schema = Schema(db)
    schema.register_models({"user": User, "address": Address})

    link = schema.user.find(1)
    schema["address"].new({"name": "123 Hyrule Way"})

Registering a type builds a schema-bound subclass of its definition with
every association accessor installed on it, and makes sure the backing
collection (the pluralized type name) exists.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from ..config import StandinConfig
from ..db.engine import Db
from ..faults.domains import (
    DuplicateRegistrationFault,
    ModelRegistrationFault,
    UnknownModelFault,
)
from ..utils.inflector import pluralize
from .associations import Association
from .base import Model
from .manager import ModelManager

logger = logging.getLogger("standin.models.schema")

__all__ = ["Schema"]


def _class_name(type_name: str) -> str:
    return "".join(part.capitalize() for part in type_name.split("_"))


class Schema:
    """
    Maps type names to model classes and their collections.

    Args:
        db: The store every model of this schema reads and writes
        config: Settings; when given, its ``strict_collections`` is applied
            to ``db``
    """

    def __init__(self, db: Db, *, config: Optional[StandinConfig] = None):
        self.db = db
        self.config = config or StandinConfig()
        if config is not None:
            self.db.strict = config.strict_collections
        self._models: Dict[str, Type[Model]] = {}
        self._managers: Dict[str, ModelManager] = {}

    # ── Registration ─────────────────────────────────────────────────

    def register_model(self, type_name: str, definition: Type[Model] = Model) -> Type[Model]:
        """
        Register ``definition`` under ``type_name``.

        Returns the generated model class.

        Raises:
            DuplicateRegistrationFault: ``type_name`` already registered
            ModelRegistrationFault: ``definition`` is not a Model subclass,
                or an accessor name clashes with a Model attribute
        """
        if type_name in self._models:
            raise DuplicateRegistrationFault(type_name)

        if not (isinstance(definition, type) and issubclass(definition, Model)):
            raise ModelRegistrationFault(type_name, f"{definition!r} is not a Model subclass")

        associations: Dict[str, Association] = {}
        for klass in reversed(definition.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Association):
                    associations[name] = value.bind(name, type_name)

        collection_name = pluralize(type_name)
        cls_dict = {
            "__module__": definition.__module__,
            "_schema": self,
            "_type_name": type_name,
            "_collection_name": collection_name,
            "_associations": associations,
        }

        for association in associations.values():
            for accessor, impl in association.accessors().items():
                if accessor in cls_dict or hasattr(Model, accessor):
                    raise ModelRegistrationFault(
                        type_name,
                        f"accessor '{accessor}' of {association.kind} '{association.key}' "
                        f"clashes with an existing attribute",
                    )
                cls_dict[accessor] = impl

        class_name = definition.__name__ if definition is not Model else _class_name(type_name)
        model_cls = type(class_name, (definition,), cls_dict)

        if not self.db.has_collection(collection_name):
            self.db.create_collection(collection_name)

        self._models[type_name] = model_cls
        self._managers[type_name] = ModelManager(self, type_name, model_cls)

        logger.info(
            f"Registered model '{type_name}' -> collection '{collection_name}' "
            f"({len(associations)} associations)"
        )
        return model_cls

    def register_models(self, definitions: Dict[str, Type[Model]]) -> None:
        for type_name, definition in definitions.items():
            self.register_model(type_name, definition)

    # ── Lookup ───────────────────────────────────────────────────────

    def manager(self, type_name: str) -> ModelManager:
        """
        Manager for ``type_name``.

        Raises:
            UnknownModelFault: ``type_name`` was never registered
        """
        try:
            return self._managers[type_name]
        except KeyError:
            raise UnknownModelFault(type_name) from None

    def model_class(self, type_name: str) -> Type[Model]:
        return self.manager(type_name).model_cls

    @property
    def type_names(self) -> List[str]:
        return list(self._models)

    def __getitem__(self, type_name: str) -> ModelManager:
        return self.manager(type_name)

    def __getattr__(self, name: str) -> ModelManager:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return self.manager(name)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._models

    def __repr__(self) -> str:
        return f"<Schema models={self.type_names!r}>"
