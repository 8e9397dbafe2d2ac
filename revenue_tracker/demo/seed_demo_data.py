"""
Demo seed data.

Seeds a tracker so the table is not blank on first render.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from revenue_tracker.core.gateway import ValidationError


@dataclass(frozen=True)
class SeedClient:
    """Client entry added to the ledger at start-up."""
    name: str
    weekly_hours: Union[str, int]
    rate: Union[str, int]


DEMO_CLIENTS = (
    SeedClient(name="Acme Corp", weekly_hours=10, rate=150),
    SeedClient(name="Bright Ideas LLC", weekly_hours=5, rate=200),
    SeedClient(name="Harbor Studio", weekly_hours=8, rate=95),
)


def seed_clients(tracker, clients: Sequence[SeedClient] = DEMO_CLIENTS) -> None:
    """Add seed clients through the tracker's validated add path.

    Raises:
        ValueError: If an entry fails validation, naming its index and field
    """
    for index, client in enumerate(clients):
        try:
            tracker.add_client(client.name, client.weekly_hours, client.rate)
        except ValidationError as e:
            raise ValueError(f"seed[{index}].{e.field}: {e.message}") from e


if __name__ == "__main__":
    from revenue_tracker.core.tracker import RevenueTracker

    demo = RevenueTracker()
    seed_clients(demo)
    print(f"Demo ledger seeded with {len(demo)} clients")
