"""
Fixture loading — seed a ``Db`` from JSON or YAML files.

Two file shapes are accepted:

* a mapping of collection name to records::

    users:
      - {id: 1, name: Link}
    addresses: []

* a list of records, loaded into the collection named after the file
  (``fixtures/users.json`` seeds ``users``).

A directory is loaded file by file in name order.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..faults.domains import FixtureFault
from .collection import Record
from .engine import Db

logger = logging.getLogger("standin.db.fixtures")

FIXTURE_SUFFIXES = (".json", ".yaml", ".yml")

__all__ = ["FIXTURE_SUFFIXES", "load_fixture_file", "load_fixtures"]


def _read(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise FixtureFault(str(path), f"cannot parse: {exc}") from exc


def _check_records(path: Path, name: str, records: Any) -> List[Record]:
    if records is None:
        return []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise FixtureFault(str(path), f"collection '{name}' must be a list of mappings")
    return records


def load_fixture_file(path: Union[str, Path]) -> Dict[str, List[Record]]:
    """
    Read one fixture file into ``{collection_name: [records]}``.

    Raises:
        FixtureFault: Unsupported suffix, unparsable content or wrong shape
    """
    path = Path(path)
    if path.suffix not in FIXTURE_SUFFIXES:
        raise FixtureFault(str(path), f"unsupported file type '{path.suffix}'")

    data = _read(path)

    if isinstance(data, list):
        return {path.stem: _check_records(path, path.stem, data)}
    if isinstance(data, dict):
        return {str(name): _check_records(path, str(name), records) for name, records in data.items()}
    if data is None:
        return {}
    raise FixtureFault(str(path), "top level must be a mapping or a list")


def load_fixtures(db: Db, path: Union[str, Path]) -> Dict[str, List[Record]]:
    """
    Seed ``db`` from a fixture file or a directory of fixture files.

    Returns the data that was loaded, merged per collection.
    """
    path = Path(path)
    if not path.exists():
        raise FixtureFault(str(path), "no such file or directory")

    if path.is_dir():
        files = sorted(p for p in path.iterdir() if p.suffix in FIXTURE_SUFFIXES)
    else:
        files = [path]

    loaded: Dict[str, List[Record]] = {}
    for file in files:
        data = load_fixture_file(file)
        db.load_data(data)
        for name, records in data.items():
            loaded.setdefault(name, []).extend(records)
        logger.debug(f"Loaded fixture {file}")
    return loaded
