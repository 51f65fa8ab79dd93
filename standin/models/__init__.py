"""
Standin Models — a lightweight ORM over the in-memory store.

Usage:
    from standin.models import Model, Schema, belongs_to, has_many

    class User(Model):
        addresses = has_many()

    class Address(Model):
        user = belongs_to()

    schema = Schema(db)
    schema.register_models({"user": User, "address": Address})
"""

from .associations import Association, BelongsTo, HasMany, belongs_to, has_many
from .base import Model
from .manager import ModelManager
from .schema import Schema

__all__ = [
    "Association",
    "BelongsTo",
    "HasMany",
    "Model",
    "ModelManager",
    "Schema",
    "belongs_to",
    "has_many",
]
