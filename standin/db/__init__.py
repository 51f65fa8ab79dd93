"""
Standin DB — in-memory collection store.

Provides:
- Db: named collections, bulk seeding and dumps
- DbCollection: ordered records with auto-incrementing ids
- Fixture loading from JSON/YAML files
"""

from .collection import DbCollection, Query, Record
from .engine import Db
from .fixtures import load_fixture_file, load_fixtures

__all__ = [
    "Db",
    "DbCollection",
    "Query",
    "Record",
    "load_fixture_file",
    "load_fixtures",
]
