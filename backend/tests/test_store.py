"""
Repairs API — Repair Store Unit Tests
======================================

What we test:
    ✅ Insertion order and list copies
    ✅ Id allocation (first id, after seeding, never reused after delete)
    ✅ Shallow merge on update, id immutable
    ✅ NotFound on get/update/delete of missing ids
    ✅ Seed file loading
    ✅ Concurrent creates get distinct ids
"""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from repairs_api.exceptions import NotFoundError
from repairs_api.models.repair import Repair
from repairs_api.store import RepairStore, load_seed_repairs


class TestStoreReads:
    """Tests for listing and fetching repairs."""

    def test_list_preserves_insertion_order(self, seeded_store):
        """Repairs should list in insertion order."""
        assert [repair.id for repair in seeded_store.list()] == [1, 2, 3, 4, 5, 6]

    def test_list_returns_a_copy(self, seeded_store):
        """Mutating the returned list should not touch the store."""
        listed = seeded_store.list()
        listed.clear()
        assert len(seeded_store) == 6

    def test_get_existing(self, seeded_store):
        """An existing id should return its repair."""
        repair = seeded_store.get(6)
        assert repair.assigned_to == "Daisy Phillips"

    def test_get_missing_raises(self, seeded_store):
        """A missing id should raise NotFoundError carrying the id."""
        with pytest.raises(NotFoundError) as exc_info:
            seeded_store.get(42)
        assert exc_info.value.repair_id == 42

    def test_duplicate_initial_ids_rejected(self):
        """Initial records with duplicate ids should be refused."""
        with pytest.raises(ValueError, match="Duplicate"):
            RepairStore([Repair(id=1, title="a"), Repair(id=1, title="b")])


class TestStoreIdAllocation:
    """Tests for the monotonic id counter."""

    def test_first_id_in_empty_store_is_one(self, empty_store):
        """An empty store should start at id 1."""
        repair = empty_store.create({"title": "First"})
        assert repair.id == 1

    def test_seeded_store_continues_after_max_id(self, seeded_store):
        """A seeded store should continue after its highest id."""
        assert seeded_store.next_id == 7
        assert seeded_store.create({"title": "New"}).id == 7

    def test_unordered_seed_uses_highest_id(self):
        """Seed order should not affect the next id."""
        store = RepairStore([Repair(id=9), Repair(id=3)])
        assert store.create({}).id == 10

    def test_deleted_id_is_not_reused(self, seeded_store):
        """Deleting the highest id should not free it."""
        seeded_store.delete(6)
        assert seeded_store.create({"title": "After delete"}).id == 7

    def test_caller_supplied_id_is_ignored(self, empty_store):
        """An id in the create fields should be ignored."""
        repair = empty_store.create({"id": 500, "title": "Sneaky"})
        assert repair.id == 1

    def test_concurrent_creates_get_distinct_ids(self, empty_store):
        """Creates from many threads should never share an id."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(lambda n: empty_store.create({"title": f"r{n}"}), range(100)))

        ids = sorted(repair.id for repair in created)
        assert ids == list(range(1, 101))
        assert len(empty_store) == 100


class TestStoreMutations:
    """Tests for update and delete."""

    def test_update_merges_only_supplied_fields(self, seeded_store):
        """Update should merge only the supplied fields."""
        before = seeded_store.get(1)
        updated = seeded_store.update(1, {"title": "Synthetic oil change"})

        assert updated.title == "Synthetic oil change"
        assert updated.description == before.description
        assert updated.assigned_to == before.assigned_to
        assert updated.date == before.date
        assert updated.image == before.image
        assert seeded_store.get(1) == updated

    def test_update_can_clear_a_field(self, seeded_store):
        """None and "" should overwrite stored values."""
        updated = seeded_store.update(2, {"image": None, "description": ""})
        assert updated.image is None
        assert updated.description == ""

    def test_update_never_changes_id(self, seeded_store):
        """An id in the changes should be ignored."""
        updated = seeded_store.update(3, {"id": 99, "title": "Tires"})
        assert updated.id == 3
        with pytest.raises(NotFoundError):
            seeded_store.get(99)

    def test_update_missing_leaves_store_unchanged(self, seeded_store):
        """Updating a missing id should raise and change nothing."""
        before = seeded_store.list()
        with pytest.raises(NotFoundError):
            seeded_store.update(77, {"title": "Nope"})
        assert seeded_store.list() == before

    def test_delete_removes_record(self, seeded_store):
        """Delete should return the record and remove it."""
        deleted = seeded_store.delete(4)
        assert deleted.id == 4
        assert len(seeded_store) == 5
        with pytest.raises(NotFoundError):
            seeded_store.get(4)

    def test_delete_twice_raises(self, seeded_store):
        """A second delete of the same id should raise."""
        seeded_store.delete(4)
        with pytest.raises(NotFoundError):
            seeded_store.delete(4)


class TestSeedLoading:
    """Tests for reading the seed JSON file."""

    def test_loads_wire_field_names(self, tmp_path):
        """Seed records should load from camelCase keys."""
        path = tmp_path / "repairs.json"
        path.write_text(json.dumps([{"id": 3, "title": "Wash", "assignedTo": "Kat Larsson"}]))

        repairs = load_seed_repairs(path)

        assert repairs == [Repair(id=3, title="Wash", assigned_to="Kat Larsson")]

    def test_missing_file_gives_empty_list(self, tmp_path):
        """A missing seed file should mean an empty store."""
        assert load_seed_repairs(tmp_path / "absent.json") == []

    def test_non_array_rejected(self, tmp_path):
        """A seed file that is not an array should be refused."""
        path = tmp_path / "repairs.json"
        path.write_text(json.dumps({"id": 1}))
        with pytest.raises(ValueError, match="JSON array"):
            load_seed_repairs(path)

    def test_shipped_seed_has_six_records(self, seed_repairs):
        """The packaged seed file should hold six repairs."""
        assert [repair.id for repair in seed_repairs] == [1, 2, 3, 4, 5, 6]
