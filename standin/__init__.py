"""
Standin - an in-memory data layer that stands in for a backend API.

Provides:
- Db / DbCollection: named collections of records
- Schema / Model: a small ORM with belongs_to and has_many associations
- GET shorthands that answer requests straight from the store
- Typed faults, layered configuration and pytest helpers

Usage:
    from standin import Db, Model, Schema, belongs_to, has_many

    class Address(Model):
        user = belongs_to()

    db = Db({"users": [{"id": 1, "name": "Link"}], "addresses": []})
    schema = Schema(db)
    schema.register_models({"user": Model, "address": Address})

    address = schema.address.new({"name": "123 Hyrule Way"})
    address.user = schema.user.find(1)
    address.save()
"""

__version__ = "0.1.0"

from .config import ConfigError, ConfigLoader, StandinConfig, configure_logging
from .db import Db, DbCollection, load_fixture_file, load_fixtures
from .faults import Fault, FaultDomain, Severity
from .models import Model, ModelManager, Schema, belongs_to, has_many
from .shorthands import GetShorthand, ShorthandRequest

__all__ = [
    "__version__",
    "ConfigError",
    "ConfigLoader",
    "StandinConfig",
    "configure_logging",
    "Db",
    "DbCollection",
    "load_fixture_file",
    "load_fixtures",
    "Fault",
    "FaultDomain",
    "Severity",
    "Model",
    "ModelManager",
    "Schema",
    "belongs_to",
    "has_many",
    "GetShorthand",
    "ShorthandRequest",
]
