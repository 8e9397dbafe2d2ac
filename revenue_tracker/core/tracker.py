"""
Revenue tracker facade.

Bundles the ledger store, the mutation gateway and the metric functions
behind the interface the view renderer talks to.
"""

from typing import Callable, Optional, Tuple, Union

from revenue_tracker.demo.seed_demo_data import seed_clients
from revenue_tracker.storage.ledger import LedgerStore
from revenue_tracker.storage.models import ClientRecord
from . import metrics as calc
from .gateway import EditableField, Listener, MutationGateway


class ClientNotFoundError(KeyError):
    """Raised when a per-client figure is requested for an unknown id."""
    def __init__(self, client_id: int):
        super().__init__(client_id)
        self.client_id = client_id

    def __str__(self) -> str:
        return f"No client with id {self.client_id}"


class RevenueTracker:
    """Client revenue ledger with derived monthly figures.

    Mutations are forwarded to the gateway; reads recompute from the
    current snapshot every time.
    """

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        weeks_per_month: int = calc.WEEKS_PER_MONTH
    ):
        """Initialize the tracker.

        Args:
            store: Ledger to work on (a fresh empty one if omitted)
            weeks_per_month: Weeks counted per month for monthly figures

        Raises:
            ValueError: If weeks_per_month is not positive
        """
        if weeks_per_month <= 0:
            raise ValueError("weeks_per_month must be > 0")
        self.store = store if store is not None else LedgerStore()
        self.gateway = MutationGateway(self.store)
        self.weeks_per_month = weeks_per_month

    @classmethod
    def from_config(cls, config) -> "RevenueTracker":
        """Build a tracker and seed it with the configured clients.

        Args:
            config: TrackerConfig to build from

        Returns:
            Seeded RevenueTracker

        Raises:
            ValueError: If a seed entry fails validation
        """
        tracker = cls(weeks_per_month=config.weeks_per_month)
        seed_clients(tracker, config.seed)
        return tracker

    # Mutations

    def add_client(
        self,
        name: str,
        weekly_hours_raw: Union[str, int],
        rate_raw: Union[str, int]
    ) -> int:
        return self.gateway.add_client(name, weekly_hours_raw, rate_raw)

    def edit_field(
        self,
        client_id: int,
        field: Union[EditableField, str],
        raw_value: Union[str, int]
    ) -> None:
        self.gateway.edit_field(client_id, field, raw_value)

    def remove_client(self, client_id: int) -> None:
        self.gateway.remove_client(client_id)

    def clear_all(self) -> None:
        self.gateway.clear_all()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.gateway.subscribe(listener)

    @property
    def revision(self) -> int:
        return self.gateway.revision

    # Reads

    def snapshot(self) -> Tuple[ClientRecord, ...]:
        """Current clients in insertion order."""
        return self.store.all()

    def find(self, client_id: int) -> Optional[ClientRecord]:
        return self.store.find(client_id)

    def metrics(self) -> calc.LedgerMetrics:
        """Summary figures for the whole ledger."""
        return calc.compute_metrics(self.snapshot(), self.weeks_per_month)

    def _require(self, client_id: int) -> ClientRecord:
        client = self.store.find(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    def monthly_hours(self, client_id: int) -> int:
        return calc.monthly_hours(self._require(client_id), self.weeks_per_month)

    def subtotal(self, client_id: int) -> int:
        return calc.subtotal(self._require(client_id), self.weeks_per_month)

    def share_percent(self, client_id: int) -> float:
        client = self._require(client_id)
        return calc.share_percent(client, self.snapshot(), self.weeks_per_month)

    def __len__(self) -> int:
        return len(self.store)
