"""
Unit tests for revenue metrics.

Tests derived figures, division fallbacks and the top client tie-break.
"""

import pytest

from revenue_tracker.core.metrics import (
    LedgerMetrics,
    average_rate,
    average_revenue_per_client,
    compute_metrics,
    monthly_hours,
    share_percent,
    subtotal,
    top_client,
    total_monthly_hours,
    total_revenue,
    total_weekly_hours,
)
from revenue_tracker.storage.models import ClientRecord

ACME = ClientRecord(id=1, name="Acme", weekly_hours=10, rate=150)
BRIGHT = ClientRecord(id=2, name="Bright", weekly_hours=5, rate=200)
HARBOR = ClientRecord(id=3, name="Harbor", weekly_hours=8, rate=95)


class TestPerClientFigures:
    """Test single-client calculations."""

    def test_monthly_hours(self):
        """Verify monthly hours are weekly hours times four."""
        assert monthly_hours(ACME) == 40

    def test_subtotal(self):
        """Verify subtotal is weekly hours x 4 x rate."""
        for client in (ACME, BRIGHT, HARBOR):
            assert subtotal(client) == client.weekly_hours * 4 * client.rate

    def test_custom_weeks_per_month(self):
        """Verify the weeks-per-month factor is applied."""
        assert monthly_hours(ACME, weeks_per_month=5) == 50
        assert subtotal(ACME, weeks_per_month=5) == 7500

    def test_invalid_weeks_per_month(self):
        """Verify a non-positive month length is rejected."""
        with pytest.raises(ValueError, match="weeks_per_month must be > 0"):
            monthly_hours(ACME, weeks_per_month=0)


class TestTotals:
    """Test ledger-wide totals."""

    def test_totals(self):
        """Verify revenue and hour totals."""
        clients = [ACME, BRIGHT, HARBOR]
        assert total_revenue(clients) == 6000 + 4000 + 3040
        assert total_weekly_hours(clients) == 23
        assert total_monthly_hours(clients) == 92

    def test_empty_totals(self):
        """Verify an empty ledger totals to zero."""
        assert total_revenue([]) == 0
        assert total_weekly_hours([]) == 0
        assert total_monthly_hours([]) == 0


class TestAverages:
    """Test averages and their division-by-zero fallbacks."""

    def test_average_rate_weighted_by_hours(self):
        """Verify the average rate is revenue over monthly hours."""
        assert average_rate([ACME, BRIGHT]) == pytest.approx(10000 / 60)

    def test_average_rate_falls_back_to_simple_mean(self):
        """Verify the plain mean is used when no hours are logged."""
        idle = ClientRecord(id=1, name="Idle", weekly_hours=0, rate=100)
        assert average_rate([idle]) == 100

        other = ClientRecord(id=2, name="Other", weekly_hours=0, rate=50)
        assert average_rate([idle, other]) == 75

    def test_average_rate_empty(self):
        """Verify the average rate of an empty ledger is 0."""
        assert average_rate([]) == 0

    def test_average_revenue_per_client(self):
        """Verify revenue per client."""
        assert average_revenue_per_client([ACME, BRIGHT]) == 5000
        assert average_revenue_per_client([]) == 0


class TestTopClient:
    """Test top client selection."""

    def test_highest_subtotal_wins(self):
        """Verify the client with the largest subtotal is chosen."""
        assert top_client([BRIGHT, ACME, HARBOR]) == ACME

    def test_tie_keeps_first_inserted(self):
        """Verify equal subtotals keep the earliest client."""
        twin = ClientRecord(id=4, name="Twin", weekly_hours=10, rate=150)
        assert top_client([ACME, twin]) == ACME
        assert top_client([twin, ACME]) == twin

    def test_all_zero_keeps_first(self):
        """Verify a ledger of zero subtotals still has a top client."""
        first = ClientRecord(id=1, name="First", weekly_hours=0, rate=10)
        second = ClientRecord(id=2, name="Second", weekly_hours=5, rate=0)
        assert top_client([first, second]) == first

    def test_empty_has_no_top_client(self):
        """Verify an empty ledger has no top client."""
        assert top_client([]) is None


class TestSharePercent:
    """Test revenue share calculations."""

    def test_two_client_split(self):
        """Verify shares of a 6000/4000 split."""
        clients = [ACME, BRIGHT]
        assert share_percent(ACME, clients) == pytest.approx(60.0)
        assert share_percent(BRIGHT, clients) == pytest.approx(40.0)

    def test_shares_sum_to_hundred(self):
        """Verify shares add up to 100 when there is revenue."""
        clients = [ACME, BRIGHT, HARBOR]
        assert sum(share_percent(c, clients) for c in clients) == pytest.approx(100.0)

    def test_zero_revenue_shares_are_zero(self):
        """Verify every share is 0 when total revenue is 0."""
        clients = [
            ClientRecord(id=1, name="A", weekly_hours=0, rate=100),
            ClientRecord(id=2, name="B", weekly_hours=10, rate=0),
        ]
        assert [share_percent(c, clients) for c in clients] == [0, 0]


class TestComputeMetrics:
    """Test the combined metrics snapshot."""

    def test_compute_metrics(self):
        """Verify all figures for a two-client ledger."""
        metrics = compute_metrics([ACME, BRIGHT])
        assert metrics == LedgerMetrics(
            total_revenue=10000,
            total_weekly_hours=15,
            total_monthly_hours=60,
            average_rate=pytest.approx(10000 / 60),
            average_revenue_per_client=5000,
            top_client=ACME,
            client_count=2
        )

    def test_compute_metrics_empty(self):
        """Verify an empty ledger produces zeroed metrics."""
        metrics = compute_metrics([])
        assert metrics.total_revenue == 0
        assert metrics.average_rate == 0
        assert metrics.average_revenue_per_client == 0
        assert metrics.top_client is None
        assert metrics.client_count == 0
