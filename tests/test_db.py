"""
Collection Store (db/)

Tests DbCollection and Db.
"""

import logging

import pytest

from standin.db import Db, DbCollection
from standin.faults import (
    DuplicateIdentifierFault,
    InvalidIdentifierMutationFault,
    RecordNotFoundFault,
    UnknownCollectionFault,
)


# ============================================================================
# DbCollection - insert
# ============================================================================

class TestCollectionInsert:

    def test_ids_are_monotonic_from_one(self):
        users = DbCollection("users")
        inserted = [users.insert({"name": name}) for name in ("Link", "Zelda", "Ganon")]
        assert [record["id"] for record in inserted] == [1, 2, 3]
        assert [record["id"] for record in users.all()] == [1, 2, 3]

    def test_next_id_follows_max(self):
        users = DbCollection("users", [{"id": 7, "name": "Link"}])
        assert users.insert({"name": "Zelda"})["id"] == 8

    def test_non_integer_ids_ignored_for_next_id(self):
        users = DbCollection("users", [{"id": "abc"}])
        assert users.insert({})["id"] == 1

    def test_insert_list(self):
        users = DbCollection("users")
        inserted = users.insert([{"name": "Link"}, {"name": "Zelda"}])
        assert inserted == [{"name": "Link", "id": 1}, {"name": "Zelda", "id": 2}]

    def test_duplicate_id(self):
        users = DbCollection("users", [{"id": 1}])
        with pytest.raises(DuplicateIdentifierFault):
            users.insert({"id": 1})

    def test_insert_copies_input(self):
        users = DbCollection("users")
        data = {"name": "Link", "tags": ["hero"]}
        users.insert(data)
        data["tags"].append("mutated")
        assert "id" not in data
        assert users.find(1)["tags"] == ["hero"]


# ============================================================================
# DbCollection - reads
# ============================================================================

class TestCollectionRead:

    @pytest.fixture
    def users(self):
        return DbCollection("users", [
            {"id": 1, "name": "Link", "age": 17},
            {"id": 2, "name": "Zelda", "age": 17},
            {"id": 3, "name": "Ganon", "age": 1000},
        ])

    def test_find_single(self, users):
        assert users.find(2) == {"id": 2, "name": "Zelda", "age": 17}

    def test_find_missing(self, users):
        assert users.find(42) is None

    def test_find_string_id(self, users):
        assert users.find("3")["name"] == "Ganon"

    def test_find_list_keeps_requested_order(self, users):
        assert [r["id"] for r in users.find([3, 1])] == [3, 1]

    def test_find_list_omits_missing(self, users):
        assert [r["id"] for r in users.find([1, 99, 2])] == [1, 2]

    def test_where_mapping(self, users):
        assert [r["name"] for r in users.where({"age": 17})] == ["Link", "Zelda"]

    def test_where_requires_every_key(self, users):
        assert users.where({"age": 17, "name": "Zelda"}) == [{"id": 2, "name": "Zelda", "age": 17}]

    def test_where_missing_key_does_not_match_none(self, users):
        assert users.where({"user_id": None}) == []

    def test_where_strict_equality(self, users):
        assert users.where({"age": "17"}) == []

    def test_where_predicate(self, users):
        assert [r["id"] for r in users.where(lambda r: r["age"] > 100)] == [3]

    def test_where_no_match(self, users):
        assert users.where({"name": "Navi"}) == []

    def test_reads_return_copies(self, users):
        users.find(1)["name"] = "changed"
        users.all()[0]["name"] = "changed"
        assert users.find(1)["name"] == "Link"

    def test_first_len_iter(self, users):
        assert users.first()["id"] == 1
        assert len(users) == 3
        assert [r["id"] for r in users] == [1, 2, 3]
        assert DbCollection("empty").first() is None


# ============================================================================
# DbCollection - writes
# ============================================================================

class TestCollectionWrite:

    @pytest.fixture
    def users(self):
        return DbCollection("users", [
            {"id": 1, "name": "Link", "town": "Kakariko"},
            {"id": 2, "name": "Zelda", "town": "Hyrule"},
        ])

    def test_update_by_id(self, users):
        updated = users.update(1, {"town": "Ordon"})
        assert updated == {"id": 1, "name": "Link", "town": "Ordon"}
        assert users.find(1)["town"] == "Ordon"

    def test_update_all(self, users):
        users.update({"town": "Castle Town"})
        assert {r["town"] for r in users.all()} == {"Castle Town"}

    def test_update_by_query(self, users):
        result = users.update({"name": "Zelda"}, {"town": "Castle"})
        assert result == [{"id": 2, "name": "Zelda", "town": "Castle"}]
        assert users.find(1)["town"] == "Kakariko"

    def test_update_missing_id(self, users):
        with pytest.raises(RecordNotFoundFault):
            users.update(99, {"town": "Nowhere"})

    def test_update_cannot_change_id(self, users):
        with pytest.raises(InvalidIdentifierMutationFault):
            users.update(1, {"id": 5})

    def test_update_same_id_allowed(self, users):
        users.update(1, {"id": 1, "name": "Hero"})
        assert users.find(1)["name"] == "Hero"

    def test_remove_by_id(self, users):
        users.remove(1)
        assert [r["id"] for r in users.all()] == [2]

    def test_remove_missing_is_noop(self, users):
        users.remove(99)
        assert len(users) == 2

    def test_remove_by_query(self, users):
        users.remove({"town": "Hyrule"})
        assert [r["id"] for r in users.all()] == [1]

    def test_remove_all(self, users):
        users.remove()
        assert users.all() == []

    def test_ids_not_reused_below_max(self, users):
        users.remove(1)
        assert users.insert({"name": "Navi"})["id"] == 3


# ============================================================================
# Db
# ============================================================================

class TestDb:

    def test_initial_data(self):
        db = Db({"users": [{"name": "Link"}], "addresses": []})
        assert db.collection_names == ["users", "addresses"]
        assert db.users.find(1) == {"name": "Link", "id": 1}
        assert db["addresses"].all() == []

    def test_instances_are_isolated(self):
        first, second = Db(), Db()
        first.create_collection("users", [{"name": "Link"}])
        assert not second.has_collection("users")

    def test_create_collection_is_idempotent(self):
        db = Db()
        users = db.create_collection("users", [{"name": "Link"}])
        assert db.create_collection("users", [{"name": "Zelda"}]) is users
        assert len(users) == 2

    def test_create_collections(self):
        db = Db()
        db.create_collections(["users", "addresses"])
        assert "users" in db and "addresses" in db

    def test_unknown_collection_strict(self):
        db = Db()
        with pytest.raises(UnknownCollectionFault) as exc_info:
            db.collection("wizards")
        assert exc_info.value.collection == "wizards"
        with pytest.raises(UnknownCollectionFault):
            db.wizards

    def test_unknown_collection_lenient(self, caplog):
        db = Db(strict=False)
        with caplog.at_level(logging.WARNING, logger="standin.db"):
            wizards = db["wizards"]
        assert wizards.all() == []
        assert db.has_collection("wizards")
        assert "wizards" in caplog.text

    def test_private_attribute_lookup(self):
        with pytest.raises(AttributeError):
            Db()._missing

    def test_load_data_appends(self):
        db = Db({"users": [{"name": "Link"}]})
        db.load_data({"users": [{"name": "Zelda"}], "towns": [{"name": "Ordon"}]})
        assert [r["id"] for r in db.users.all()] == [1, 2]
        assert db.towns.find(1)["name"] == "Ordon"

    def test_empty_data_keeps_collections(self):
        db = Db({"users": [{"name": "Link"}]})
        db.empty_data()
        assert db.has_collection("users")
        assert db.users.all() == []

    def test_dump(self):
        db = Db({"users": [{"name": "Link"}], "addresses": []})
        dump = db.dump()
        assert dump == {"users": [{"name": "Link", "id": 1}], "addresses": []}
        dump["users"].clear()
        assert len(db.users) == 1
