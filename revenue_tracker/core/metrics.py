"""
Revenue metrics derived from the client ledger.

Every value is recomputed from a ledger snapshot on each call. Nothing
is cached and nothing is rounded here; rounding happens at display time.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from revenue_tracker.storage.models import ClientRecord

WEEKS_PER_MONTH = 4


@dataclass(frozen=True)
class LedgerMetrics:
    """Whole-ledger summary figures."""
    total_revenue: int
    total_weekly_hours: int
    total_monthly_hours: int
    average_rate: float
    average_revenue_per_client: float
    top_client: Optional[ClientRecord]
    client_count: int


def _check_weeks(weeks_per_month: int) -> None:
    if weeks_per_month <= 0:
        raise ValueError("weeks_per_month must be > 0")


def monthly_hours(client: ClientRecord, weeks_per_month: int = WEEKS_PER_MONTH) -> int:
    """Monthly hours for a single client (weekly hours x weeks per month)."""
    _check_weeks(weeks_per_month)
    return client.weekly_hours * weeks_per_month


def subtotal(client: ClientRecord, weeks_per_month: int = WEEKS_PER_MONTH) -> int:
    """Monthly revenue for a single client."""
    return monthly_hours(client, weeks_per_month) * client.rate


def total_revenue(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> int:
    """Total monthly revenue across all clients."""
    return sum(subtotal(c, weeks_per_month) for c in clients)


def total_weekly_hours(clients: Sequence[ClientRecord]) -> int:
    """Total weekly hours across all clients."""
    return sum(c.weekly_hours for c in clients)


def total_monthly_hours(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> int:
    """Total monthly hours across all clients."""
    _check_weeks(weeks_per_month)
    return total_weekly_hours(clients) * weeks_per_month


def average_rate(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> float:
    """Average hourly rate weighted by monthly hours.

    Falls back to the plain mean of rates when no hours are logged,
    and to 0 for an empty ledger.
    """
    hours = total_monthly_hours(clients, weeks_per_month)
    if hours > 0:
        return total_revenue(clients, weeks_per_month) / hours
    if clients:
        return sum(c.rate for c in clients) / len(clients)
    return 0.0


def average_revenue_per_client(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> float:
    """Mean monthly revenue per client, 0 for an empty ledger."""
    if not clients:
        return 0.0
    return total_revenue(clients, weeks_per_month) / len(clients)


def top_client(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> Optional[ClientRecord]:
    """Client with the highest subtotal.

    On equal subtotals the earliest inserted client wins.
    """
    best = None
    best_subtotal = 0
    for client in clients:
        value = subtotal(client, weeks_per_month)
        if best is None or value > best_subtotal:
            best = client
            best_subtotal = value
    return best


def share_percent(
    client: ClientRecord,
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> float:
    """Client subtotal as a percentage of total revenue.

    Returns 0 when total revenue is 0.
    """
    total = total_revenue(clients, weeks_per_month)
    if total <= 0:
        return 0.0
    return subtotal(client, weeks_per_month) * 100 / total


def compute_metrics(
    clients: Sequence[ClientRecord],
    weeks_per_month: int = WEEKS_PER_MONTH
) -> LedgerMetrics:
    """Compute every summary figure for a ledger snapshot.

    Args:
        clients: Ledger snapshot in insertion order
        weeks_per_month: Weeks counted per month

    Returns:
        LedgerMetrics for the snapshot

    Raises:
        ValueError: If weeks_per_month is not positive
    """
    return LedgerMetrics(
        total_revenue=total_revenue(clients, weeks_per_month),
        total_weekly_hours=total_weekly_hours(clients),
        total_monthly_hours=total_monthly_hours(clients, weeks_per_month),
        average_rate=average_rate(clients, weeks_per_month),
        average_revenue_per_client=average_revenue_per_client(clients, weeks_per_month),
        top_client=top_client(clients, weeks_per_month),
        client_count=len(clients)
    )
