"""
Unit tests for the ledger store.

Tests id sequencing, ordering, removal and in-place updates.
"""

from dataclasses import replace

import pytest

from revenue_tracker.storage.ledger import LedgerStore
from revenue_tracker.storage.models import ClientRecord


class TestClientRecord:
    """Test ClientRecord invariants."""

    def test_valid_record(self):
        """Verify a valid record is created unchanged."""
        record = ClientRecord(id=1, name="Acme", weekly_hours=10, rate=150)
        assert record.name == "Acme"
        assert record.weekly_hours == 10

    @pytest.mark.parametrize("kwargs", [
        {"id": 0, "name": "Acme", "weekly_hours": 1, "rate": 1},
        {"id": 1, "name": "", "weekly_hours": 1, "rate": 1},
        {"id": 1, "name": "Acme", "weekly_hours": -1, "rate": 1},
        {"id": 1, "name": "Acme", "weekly_hours": 1, "rate": -1},
    ])
    def test_invalid_record_rejected(self, kwargs):
        """Verify records breaking ledger invariants cannot exist."""
        with pytest.raises(ValueError):
            ClientRecord(**kwargs)

    def test_record_is_immutable(self):
        """Verify snapshot records cannot be changed in place."""
        record = ClientRecord(id=1, name="Acme", weekly_hours=10, rate=150)
        with pytest.raises(AttributeError):
            record.rate = 200


class TestLedgerInsert:
    """Test record insertion and id assignment."""

    def test_ids_increase_in_insert_order(self):
        """Verify ids are unique and strictly increasing."""
        store = LedgerStore()
        ids = [store.insert(f"Client {i}", i, 10) for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]
        assert [c.id for c in store.all()] == ids

    def test_insert_appends_at_end(self):
        """Verify insertion order is preserved."""
        store = LedgerStore()
        store.insert("Acme", 10, 150)
        store.insert("Bright", 5, 200)
        assert [c.name for c in store.all()] == ["Acme", "Bright"]

    def test_ids_not_reused_after_remove(self):
        """Verify a removed id is never handed out again."""
        store = LedgerStore()
        first = store.insert("Acme", 10, 150)
        store.remove(first)
        second = store.insert("Bright", 5, 200)
        assert second == first + 1

    def test_clear_keeps_counter(self):
        """Verify clearing does not reset the id sequence."""
        store = LedgerStore()
        store.insert("Acme", 10, 150)
        store.insert("Bright", 5, 200)
        store.clear()
        assert len(store) == 0
        assert store.next_id == 3
        assert store.insert("Harbor", 8, 95) == 3

    def test_first_id_must_be_positive(self):
        """Verify the sequence cannot start at zero."""
        with pytest.raises(ValueError, match="first_id must be > 0"):
            LedgerStore(first_id=0)


class TestLedgerLookup:
    """Test find, remove and snapshot behavior."""

    def test_find_existing(self):
        """Verify find returns the stored record."""
        store = LedgerStore()
        client_id = store.insert("Acme", 10, 150)
        assert store.find(client_id) == ClientRecord(client_id, "Acme", 10, 150)
        assert client_id in store

    def test_find_missing_returns_none(self):
        """Verify unknown ids are absent, not errors."""
        assert LedgerStore().find(42) is None

    def test_remove_unknown_is_noop(self):
        """Verify removing an id that was never inserted is harmless."""
        store = LedgerStore()
        store.insert("Acme", 10, 150)
        store.remove(99)
        assert len(store) == 1
        assert store.find(99) is None

    def test_snapshot_is_detached(self):
        """Verify snapshots do not change when the ledger does."""
        store = LedgerStore()
        store.insert("Acme", 10, 150)
        snapshot = store.all()
        store.insert("Bright", 5, 200)
        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)


class TestLedgerUpdate:
    """Test in-place record replacement."""

    def test_update_keeps_position(self):
        """Verify an updated record stays at its insertion slot."""
        store = LedgerStore()
        first = store.insert("Acme", 10, 150)
        store.insert("Bright", 5, 200)
        store.update(first, lambda c: replace(c, rate=175))
        clients = store.all()
        assert clients[0].id == first
        assert clients[0].rate == 175

    def test_update_missing_is_noop(self):
        """Verify updating an unknown id does nothing and never calls the mutator."""
        store = LedgerStore()

        def _fail(record):
            raise AssertionError("mutator should not run")

        store.update(7, _fail)
        assert len(store) == 0

    def test_update_cannot_change_id(self):
        """Verify ids are immutable through update."""
        store = LedgerStore()
        client_id = store.insert("Acme", 10, 150)
        with pytest.raises(ValueError, match="cannot change record id"):
            store.update(client_id, lambda c: replace(c, id=99))
        assert store.find(client_id).name == "Acme"

    def test_set_fields(self):
        """Verify named field updates."""
        store = LedgerStore()
        client_id = store.insert("Acme", 10, 150)
        store.set_fields(client_id, weekly_hours=12, name="Acme Ltd")
        record = store.find(client_id)
        assert record.weekly_hours == 12
        assert record.name == "Acme Ltd"
