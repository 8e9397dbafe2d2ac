"""
Data models for storage layer.

Defines the client record held by the ledger.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientRecord:
    """One client in the revenue ledger.
    
    Records are immutable. Edits replace the stored record with a copy
    carrying the same id, so snapshots never alias ledger state.
    """
    id: int
    name: str
    weekly_hours: int
    rate: int
    
    def __post_init__(self):
        """Validate the record satisfies ledger invariants."""
        if self.id <= 0:
            raise ValueError("id must be > 0")
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.weekly_hours < 0:
            raise ValueError("weekly_hours cannot be negative")
        if self.rate < 0:
            raise ValueError("rate cannot be negative")
