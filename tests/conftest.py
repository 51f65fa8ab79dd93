"""
Shared test fixtures and helpers for the Standin test suite.
"""

import pytest

from standin.db import Db
from standin.models import Model, Schema, belongs_to, has_many

# Register Standin testing fixtures
from standin.testing.fixtures import standin_fixtures
standin_fixtures()

# Import fixtures so pytest can discover them
from standin.testing.fixtures import (  # noqa: F401
    standin_db,
    standin_schema,
    fault_recorder,
)


# ============================================================================
# Model definitions
# ============================================================================

class User(Model):
    addresses = has_many()


class Address(Model):
    user = belongs_to()


# ============================================================================
# Store / schema factories
# ============================================================================

def make_schema(data=None, definitions=None, **kwargs):
    """A schema over a fresh store seeded with ``data``."""
    db = Db(data, **kwargs)
    schema = Schema(db)
    schema.register_models(definitions or {"user": User, "address": Address})
    return schema


@pytest.fixture
def schema_factory():
    """Factory fixture; call with seed data (and optional definitions)."""
    return make_schema


@pytest.fixture
def seeded_schema():
    """Schema with one user (Link) and two addresses, neither associated."""
    return make_schema({
        "users": [{"id": 1, "name": "Link"}],
        "addresses": [
            {"id": 1, "name": "123 Hyrule Way"},
            {"id": 2, "name": "12 Goron City"},
        ],
    })
