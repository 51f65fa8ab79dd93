"""
has_many replacement and unsaved parents (models/associations.py)
"""

import pytest

from standin.faults import AssociationFault
from standin.models import Model, belongs_to, has_many


class User(Model):
    addresses = has_many()


class Address(Model):
    user = belongs_to()


@pytest.fixture
def schema(schema_factory):
    return schema_factory(
        {
            "users": [{"id": 1, "name": "Link"}, {"id": 2, "name": "Zelda"}],
            "addresses": [
                {"id": 1, "name": "a", "user_id": 1},
                {"id": 2, "name": "b", "user_id": 1},
                {"id": 3, "name": "c", "user_id": 2},
            ],
        },
        {"user": User, "address": Address},
    )


def children_of(schema, user_id):
    return sorted(r["id"] for r in schema.db.addresses.where({"user_id": user_id}))


# ============================================================================
# Saved parent
# ============================================================================

class TestReplacement:

    def test_replacement_is_total(self, schema):
        link = schema.user.find(1)
        c3 = schema.address.new({"name": "new"})

        link.addresses = [c3]

        assert schema.db.addresses.find(1)["user_id"] is None
        assert schema.db.addresses.find(2)["user_id"] is None
        assert not c3.is_new()
        assert c3.user_id == link.id
        assert link.addresses == [c3]

    def test_kept_children_unchanged(self, schema):
        link = schema.user.find(1)
        link.addresses = [schema.address.find(2)]
        assert children_of(schema, 1) == [2]
        assert schema.db.addresses.find(2) == {"id": 2, "name": "b", "user_id": 1}

    def test_child_moves_between_parents(self, schema):
        link = schema.user.find(1)
        link.addresses = [schema.address.find(3)]
        assert children_of(schema, 1) == [3]
        assert children_of(schema, 2) == []
        assert schema.user.find(2).addresses == []

    def test_children_match_foreign_keys(self, schema):
        link = schema.user.find(1)
        link.address_ids = [3, 1]
        assert sorted(link.address_ids) == children_of(schema, 1)

    def test_clearing_clears_foreign_keys(self, schema):
        link = schema.user.find(1)
        link.addresses = None
        assert link.addresses == []
        assert link.address_ids == []
        assert children_of(schema, 1) == []
        assert schema.db.addresses.find(1)["user_id"] is None

    def test_stale_child_instance_is_relinked(self, schema):
        stale = schema.address.find(1)
        link = schema.user.find(1)
        link.addresses = []
        link.addresses = [stale]
        assert children_of(schema, 1) == [1]

    def test_wrong_type_rejected(self, schema):
        link = schema.user.find(1)
        with pytest.raises(AssociationFault):
            link.addresses = [schema.user.find(2)]
        assert children_of(schema, 1) == [1, 2]

    def test_belongs_to_side_agrees(self, schema):
        link = schema.user.find(1)
        link.addresses = [schema.address.find(3)]
        assert schema.address.find(3).user == link


# ============================================================================
# Unsaved parent
# ============================================================================

class TestUnsavedParent:

    def test_new_parent_lists_in_memory_children(self, schema):
        navi = schema.user.new({"name": "Navi"})
        child = navi.new_address({"name": "forest"})
        assert navi.addresses == [child]
        assert navi.address_ids == [None]
        assert child.user_id is None

    def test_children_attached_on_first_save(self, schema):
        navi = schema.user.new({"name": "Navi"})
        unsaved = navi.new_address({"name": "forest"})
        saved = navi.create_address({"name": "deku"})
        assert saved.user_id is None

        navi.save()

        assert unsaved.user_id == navi.id
        assert unsaved.is_new()
        assert schema.db.addresses.find(saved.id)["user_id"] == navi.id
        assert navi.addresses == [schema.address.find(saved.id), unsaved]
        assert navi.address_ids == [saved.id, None]

    def test_assigned_children_persisted_on_first_save(self, schema):
        navi = schema.user.new({"name": "Navi"})
        existing = schema.address.find(1)
        fresh = schema.address.new({"name": "forest"})

        navi.addresses = [existing, fresh]
        assert navi.addresses == [existing, fresh]
        assert children_of(schema, 1) == [1, 2]

        navi.save()

        assert not fresh.is_new()
        assert children_of(schema, navi.id) == [1, fresh.id]
        assert children_of(schema, 1) == [2]
        assert navi.address_ids == [1, fresh.id]

    def test_parent_with_no_children(self, schema):
        navi = schema.user.new({"name": "Navi"})
        assert navi.addresses == []
        navi.save()
        assert navi.addresses == []

    def test_ids_setter_on_unsaved_parent(self, schema):
        navi = schema.user.new({"name": "Navi"})
        navi.address_ids = [3]
        navi.save()
        assert children_of(schema, navi.id) == [3]
        assert children_of(schema, 2) == []

    def test_built_child_not_saved_with_pending_assignment(self, schema):
        navi = schema.user.new({"name": "Navi"})
        navi.addresses = []
        built = navi.new_address({"name": "forest"})
        assert navi.addresses == [built]

        navi.save()

        assert built.is_new()
        assert built.user_id == navi.id
        assert navi.addresses == [built]
        assert schema.address.count() == 3

    def test_assigned_and_built_children_listed_together(self, schema):
        navi = schema.user.new({"name": "Navi"})
        existing = schema.address.find(3)
        navi.addresses = [existing]
        built = navi.new_address({"name": "forest"})
        assert navi.addresses == [existing, built]

        navi.save()

        assert children_of(schema, navi.id) == [3]
        assert built.is_new()
        assert navi.address_ids == [3, None]


# ============================================================================
# In-memory children of a saved parent
# ============================================================================

class TestInMemoryChildren:

    def test_saved_children_pruned(self, schema):
        link = schema.user.find(1)
        first = link.new_address({"name": "x"})
        first.save()
        second = link.new_address({"name": "y"})

        assert link._children["addresses"] == [second]
        assert link.address_ids == [1, 2, first.id, None]

    def test_destroyed_unsaved_child_not_listed(self, schema):
        link = schema.user.find(1)
        child = link.new_address({"name": "x"})
        child.destroy()
        assert link.address_ids == [1, 2]

    def test_reload_drops_built_children(self, schema):
        link = schema.user.find(1)
        link.new_address({"name": "x"})
        assert link.address_ids == [1, 2, None]

        link.reload()

        assert link.address_ids == [1, 2]


# ============================================================================
# Id forms
# ============================================================================

class TestIdForms:

    def test_string_foreign_key_listed_by_parent(self, schema):
        address = schema.address.create({"name": "d"})
        address.user_id = "1"
        address.save()

        assert address.user.id == 1
        assert schema.user.find(1).address_ids == [1, 2, address.id]

    def test_replacement_clears_string_foreign_keys(self, schema):
        schema.db.addresses.update(3, {"user_id": "1"})
        link = schema.user.find(1)
        assert link.address_ids == [1, 2, 3]

        link.addresses = []

        assert schema.db.addresses.find(3)["user_id"] is None
