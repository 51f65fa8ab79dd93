"""
Standin Testing - Pytest Fixtures.

Provides ready-to-use pytest fixtures for tests that need a store and a
schema. Import ``standin_fixtures`` in your ``conftest.py`` to register
all fixtures at once, or import individual fixtures.

Usage in conftest.py::

    from standin.testing.fixtures import standin_fixtures
    standin_fixtures()

    from standin.testing.fixtures import (  # noqa: F401
        standin_db,
        standin_schema,
        fault_recorder,
    )
"""

from __future__ import annotations

import pytest

from standin.db.engine import Db
from standin.models.schema import Schema

from .faults import FaultRecorder


def standin_fixtures():
    """
    Register Standin pytest fixtures.

    This is a no-op; the fixtures are registered by importing this
    module. The function exists so ``conftest.py`` has something explicit
    to call.
    """
    pass


# -----------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------

@pytest.fixture
def standin_db():
    """A fresh, empty, strict :class:`Db`."""
    yield Db()


@pytest.fixture
def standin_schema(standin_db):
    """A :class:`Schema` over ``standin_db`` with no models registered."""
    yield Schema(standin_db)


@pytest.fixture
def fault_recorder():
    """A :class:`FaultRecorder` for capturing faults."""
    recorder = FaultRecorder()
    yield recorder
    recorder.reset()
