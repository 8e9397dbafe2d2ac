"""
In-memory ledger store.

Owns the ordered client collection and the id sequence.
"""

from dataclasses import replace
from typing import Callable, Dict, Optional, Tuple

from .models import ClientRecord


class LedgerStore:
    """Ordered collection of client records keyed by id.

    Insertion order is preserved and drives display order. The id
    counter only ever moves forward: removed ids are never handed out
    again, and clearing the ledger does not reset it.

    This layer does not validate user input. Callers go through the
    mutation gateway, which checks values before they reach the store.
    """

    def __init__(self, first_id: int = 1):
        """Initialize an empty ledger.

        Args:
            first_id: Id assigned to the first inserted record
        """
        if first_id <= 0:
            raise ValueError("first_id must be > 0")
        # dicts keep insertion order, and replacing a value keeps its slot
        self._records: Dict[int, ClientRecord] = {}
        self._next_id = first_id

    @property
    def next_id(self) -> int:
        """Id the next insert will receive."""
        return self._next_id

    def insert(self, name: str, weekly_hours: int, rate: int) -> int:
        """Append a new record and return its id.

        Args:
            name: Client name (already trimmed and non-empty)
            weekly_hours: Non-negative weekly hours
            rate: Non-negative hourly rate

        Returns:
            Id of the new record
        """
        record = ClientRecord(
            id=self._next_id,
            name=name,
            weekly_hours=weekly_hours,
            rate=rate
        )
        self._records[record.id] = record
        self._next_id += 1
        return record.id

    def remove(self, client_id: int) -> None:
        """Delete the record with this id. Unknown ids are ignored."""
        self._records.pop(client_id, None)

    def clear(self) -> None:
        """Remove every record. The id counter is left untouched."""
        self._records.clear()

    def find(self, client_id: int) -> Optional[ClientRecord]:
        """Return the record with this id, or None."""
        return self._records.get(client_id)

    def all(self) -> Tuple[ClientRecord, ...]:
        """Return a read-only snapshot of all records in insertion order."""
        return tuple(self._records.values())

    def update(
        self,
        client_id: int,
        mutator: Callable[[ClientRecord], ClientRecord]
    ) -> None:
        """Replace a record with the result of ``mutator``.

        Args:
            client_id: Id of the record to change
            mutator: Receives the current record and returns its replacement

        Raises:
            ValueError: If the replacement carries a different id
        """
        current = self._records.get(client_id)
        if current is None:
            return

        updated = mutator(current)
        if updated.id != client_id:
            raise ValueError(
                f"update cannot change record id ({client_id} -> {updated.id})"
            )
        self._records[client_id] = updated

    def set_fields(self, client_id: int, **changes) -> None:
        """Update named fields of a record. Unknown ids are ignored."""
        self.update(client_id, lambda record: replace(record, **changes))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._records
